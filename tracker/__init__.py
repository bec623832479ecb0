"""
Interaction Tracker

Central module exports for the interaction-authenticity engine.
"""

from tracker.config import ScoringConfig
from tracker.models.scorer import InteractionScorer
from tracker.session import ObservationSession, replay_session

__all__ = [
    "ObservationSession",
    "InteractionScorer",
    "ScoringConfig",
    "replay_session",
]
