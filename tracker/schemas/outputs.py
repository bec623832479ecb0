"""
Tracker Output Schemas

This module defines Pydantic V2 models that fix the contract of the
analysis report and of the payload forwarded to the auth API.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from tracker.schemas.inputs import InteractionSample


# =============================================================================
# Signal Diagnostics
# =============================================================================

class SignalResult(BaseModel):
    """Outcome of one heuristic over the sample window."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Heuristic identifier")
    triggered: bool = Field(..., description="Whether the flag fired")
    weight: int = Field(..., ge=0, description="Penalty added when triggered")
    reason: str = Field(..., description="Human-readable reason")
    metrics: Dict[str, float] = Field(
        default_factory=dict,
        description="Intermediate measurements (speeds, ratios, coefficients)"
    )

    @property
    def penalty(self) -> int:
        return self.weight if self.triggered else 0


# =============================================================================
# Report
# =============================================================================

class ReportStats(BaseModel):
    """Sample counts, duration and an audit tail of raw samples."""
    model_config = ConfigDict(frozen=True)

    total_samples: int = Field(..., ge=0)
    move_count: int = Field(0, ge=0)
    click_count: int = Field(0, ge=0)
    key_count: int = Field(0, ge=0)
    duration_ms: float = Field(0.0, ge=0.0, description="Session duration")
    recent_samples: List[InteractionSample] = Field(
        default_factory=list,
        description="Most recent samples, oldest first"
    )


class AnalysisReport(BaseModel):
    """
    Terminal verdict for an observation session.

    score is the capped sum of triggered penalties; reasons follow the
    fixed evaluation order of the scorer.
    """
    model_config = ConfigDict(frozen=True)

    is_suspicious: bool = Field(..., description="score >= suspicion threshold")
    score: int = Field(..., ge=0, le=100, description="Risk score from 0 to 100")
    reasons: List[str] = Field(default_factory=list)
    signals: List[SignalResult] = Field(default_factory=list)
    stats: ReportStats


# =============================================================================
# Forwarding Payload
# =============================================================================

class TrackingPayload(BaseModel):
    """
    Opaque metadata attached to a registration request.

    The engine builds it; transmitting it is the caller's job.
    """
    model_config = ConfigDict(frozen=True)

    movements: List[InteractionSample] = Field(default_factory=list)
    analysis: AnalysisReport
    user_agent: str = ""
    screen_width: int = Field(0, ge=0)
    screen_height: int = Field(0, ge=0)
    viewport_width: int = Field(0, ge=0)
    viewport_height: int = Field(0, ge=0)
