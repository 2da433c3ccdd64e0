"""Collision-risk physics, detection and publication"""
from .collision import CollisionDetector, CollisionWarning
from .publisher import WarningsPublisher
from .physics import (
    stopping_distance,
    safe_distance,
    separation_distances,
    deceleration_for
)

__all__ = [
    'CollisionDetector',
    'CollisionWarning',
    'WarningsPublisher',
    'stopping_distance',
    'safe_distance',
    'separation_distances',
    'deceleration_for'
]
