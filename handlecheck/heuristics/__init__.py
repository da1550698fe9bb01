"""Offline handle heuristics."""

from .scorer import DEFAULT_WEIGHTS, HandleScorer

__all__ = [
    "DEFAULT_WEIGHTS",
    "HandleScorer",
]
