"""Utility functions"""
from .math_ops import pairwise_distances, round_half_up
from .logs import setup_logging

__all__ = [
    'pairwise_distances',
    'round_half_up',
    'setup_logging'
]
