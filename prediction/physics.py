"""
Cálculos físicos para análise de risco de colisão
"""
import numpy as np
from typing import Sequence

from core.config import PhysicsConfig
from core.errors import DetectionPreconditionError
from core.modes import SystemMode
from core.registry import Agent
from utils.math_ops import pairwise_distances

DEFAULT_PHYSICS = PhysicsConfig()


def reaction_time(reaction_multiplier: float, config: PhysicsConfig = DEFAULT_PHYSICS) -> float:
    """Tempo de reação efetivo (s) para o modo de controle"""
    return config.base_reaction_time * reaction_multiplier


def deceleration_for(vehicle_type: str, config: PhysicsConfig = DEFAULT_PHYSICS) -> float:
    """Desaceleração (m/s²): BIKE freia menos, qualquer outro tipo usa a de carro"""
    if vehicle_type == "BIKE":
        return config.bike_deceleration
    return config.default_deceleration


def reaction_distance(
    velocity: float,
    reaction_multiplier: float,
    config: PhysicsConfig = DEFAULT_PHYSICS
) -> float:
    """Distância percorrida antes de começar a frear"""
    return velocity * reaction_time(reaction_multiplier, config)


def braking_distance(velocity: float, deceleration: float) -> float:
    """
    Distância de frenagem

    d = v² / (2a)
    """
    return (velocity * velocity) / (2 * deceleration)


def stopping_distance(
    velocity: float,
    vehicle_type: str,
    reaction_multiplier: float,
    config: PhysicsConfig = DEFAULT_PHYSICS
) -> float:
    """
    Distância total de parada = reação + frenagem

    Args:
        velocity: Velocidade (relativa) considerada
        vehicle_type: Tipo do veículo (seleciona a desaceleração)
        reaction_multiplier: Multiplicador do modo de controle

    Returns:
        Distância de parada
    """
    return (
        reaction_distance(velocity, reaction_multiplier, config)
        + braking_distance(velocity, deceleration_for(vehicle_type, config))
    )


def safe_distance(
    relative_velocity: float,
    agent_a: Agent,
    agent_b: Agent,
    reaction_multiplier: float,
    config: PhysicsConfig = DEFAULT_PHYSICS
) -> float:
    """Maior das duas distâncias de parada do par"""
    stop_a = stopping_distance(relative_velocity, agent_a.vehicle_type, reaction_multiplier, config)
    stop_b = stopping_distance(relative_velocity, agent_b.vehicle_type, reaction_multiplier, config)
    return max(stop_a, stop_b)


def relative_velocity(agent_a: Agent, agent_b: Agent) -> float:
    """Diferença absoluta das velocidades escalares"""
    return abs(agent_a.velocity - agent_b.velocity)


def is_low_speed_pair(
    agent_a: Agent,
    agent_b: Agent,
    config: PhysicsConfig = DEFAULT_PHYSICS
) -> bool:
    """Par (quase) parado nunca gera alerta"""
    threshold = config.low_speed_threshold
    return agent_a.velocity < threshold and agent_b.velocity < threshold


def position_for(agent: Agent, system_mode: SystemMode):
    """
    Coordenadas consultadas no modo atual

    Raises:
        DetectionPreconditionError: se o agente não tem o par exigido
    """
    if system_mode == SystemMode.INDOOR:
        names = ("x", "y")
    else:
        names = ("lat", "lng")

    coords = []
    for name in names:
        value = getattr(agent, name)
        if value is None:
            raise DetectionPreconditionError(agent.id, name)
        coords.append(value)
    return tuple(coords)


def separation_distances(
    agents: Sequence[Agent],
    system_mode: SystemMode,
    config: PhysicsConfig = DEFAULT_PHYSICS
) -> np.ndarray:
    """
    Matriz (N, N) de distâncias entre centros

    INDOOR: euclidiana em (x, y).
    OUTDOOR: euclidiana em (lat, lng) vezes metros por grau
    (aproximação de ângulo pequeno, não geodésica).
    """
    points = [position_for(agent, system_mode) for agent in agents]
    scale = 1.0 if system_mode == SystemMode.INDOOR else config.meters_per_degree
    return pairwise_distances(points, scale=scale)
