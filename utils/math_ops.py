"""
Operações matemáticas com NumPy
"""
import math
import numpy as np
from typing import Sequence, Tuple


def pairwise_distances(points: Sequence[Tuple[float, float]], scale: float = 1.0) -> np.ndarray:
    """
    Matriz de distâncias entre todos os pares de pontos

    Args:
        points: Sequência de N pontos (a, b)
        scale: Fator linear aplicado à distância

    Returns:
        Array (N, N) simétrico com zeros na diagonal
    """
    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    diff = pts[:, np.newaxis, :] - pts[np.newaxis, :, :]
    return np.sqrt(np.sum(diff * diff, axis=-1)) * scale


def round_half_up(value: float, digits: int = 2) -> float:
    """Arredonda com meio para cima (0.125 -> 0.13), não o bancário do round()"""
    if not math.isfinite(value):
        return value
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor
