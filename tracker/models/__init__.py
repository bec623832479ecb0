"""
Tracker Models

Deterministic scoring of interaction windows.
"""

from tracker.models.scorer import InteractionScorer

__all__ = [
    "InteractionScorer",
]
