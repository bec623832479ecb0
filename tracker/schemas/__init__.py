"""
Tracker Schemas

Public exports for input and output Pydantic models.
"""

# Input schemas
from tracker.schemas.inputs import (
    AnalyzeRequest,
    InteractionKind,
    InteractionSample,
    RawInteraction,
)

# Output schemas
from tracker.schemas.outputs import (
    AnalysisReport,
    ReportStats,
    SignalResult,
    TrackingPayload,
)

__all__ = [
    # Input
    "InteractionKind",
    "RawInteraction",
    "InteractionSample",
    "AnalyzeRequest",
    # Output
    "SignalResult",
    "ReportStats",
    "AnalysisReport",
    "TrackingPayload",
]
