"""
Detector de risco de colisão entre pares de agentes
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

from core.config import PhysicsConfig
from core.modes import SystemMode
from core.registry import Agent
from utils.math_ops import round_half_up
from .physics import (
    is_low_speed_pair,
    relative_velocity,
    safe_distance,
    separation_distances
)

logger = logging.getLogger(__name__)

RISK_STATUS = "RISK"


@dataclass(frozen=True)
class CollisionWarning:
    """Alerta de um agente referenciando o par com quem está em risco"""
    with_id: str
    distance: float
    safe_distance: float
    status: str = RISK_STATUS

    def to_dict(self) -> Dict:
        return {
            "status": self.status,
            "with": self.with_id,
            "distance": self.distance,
            "safe_distance": self.safe_distance
        }


class CollisionDetector:
    """Detecta risco usando geometria e distância de parada"""

    def __init__(self, physics: PhysicsConfig = None):
        """
        Args:
            physics: Constantes físicas (usa defaults se None)
        """
        self.physics = physics or PhysicsConfig()

    def detect(
        self,
        agents: Sequence[Agent],
        system_mode: SystemMode,
        reaction_multiplier: float
    ) -> Dict[str, CollisionWarning]:
        """
        Verifica todas as combinações de agentes (O(n²), sem índice espacial)

        Args:
            agents: Snapshot do registro
            system_mode: Seleciona a métrica de distância
            reaction_multiplier: Multiplicador do modo de controle

        Returns:
            Mapa esparso id -> alerta (dois alertas simétricos por par em risco)

        Raises:
            DetectionPreconditionError: se algum agente não tem as
                coordenadas do modo atual
        """
        # Ordem fixa dos pares: mesmo snapshot -> mesma saída
        ordered: List[Agent] = sorted(agents, key=lambda a: a.id)
        if len(ordered) < 2:
            return {}

        distances = separation_distances(ordered, system_mode, self.physics)
        digits = self.physics.rounding_digits
        warnings: Dict[str, CollisionWarning] = {}

        for i, agent_a in enumerate(ordered):
            for j in range(i + 1, len(ordered)):
                agent_b = ordered[j]

                if is_low_speed_pair(agent_a, agent_b, self.physics):
                    continue

                rel_v = relative_velocity(agent_a, agent_b)
                safe = safe_distance(rel_v, agent_a, agent_b, reaction_multiplier, self.physics)
                distance = float(distances[i, j])

                if distance < safe:
                    # Arredonda só na saída; valores internos ficam com precisão total
                    shown_distance = round_half_up(distance, digits)
                    shown_safe = round_half_up(safe, digits)
                    warnings[agent_a.id] = CollisionWarning(agent_b.id, shown_distance, shown_safe)
                    warnings[agent_b.id] = CollisionWarning(agent_a.id, shown_distance, shown_safe)

        if warnings:
            logger.debug("Detected %d agents at risk (%s mode)", len(warnings), system_mode.value)

        return warnings
