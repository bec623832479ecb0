"""
Tracker Input Schemas

This module defines Pydantic V2 models for:
- Raw interaction events handed to a session (RawInteraction)
- Stamped samples held in the session buffer (InteractionSample)
- Server-side replay request (AnalyzeRequest)
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# Enums
# =============================================================================

class InteractionKind(str, Enum):
    """Interaction type, using the wire names of the browser client."""
    MOVE = "move"
    CLICK = "click"
    KEYDOWN = "keydown"


POINTER_KINDS = (InteractionKind.MOVE, InteractionKind.CLICK)


# =============================================================================
# Interaction Models
# =============================================================================

class RawInteraction(BaseModel):
    """
    Single interaction as delivered by the hosting UI layer.

    The timestamp may be omitted; the session stamps it from its clock.
    """
    model_config = ConfigDict(frozen=True)

    kind: InteractionKind = Field(..., description="move, click or keydown")
    x: Optional[float] = Field(None, description="Pointer X coordinate (px)")
    y: Optional[float] = Field(None, description="Pointer Y coordinate (px)")
    key: Optional[str] = Field(None, description="Key identifier (keydown only)")
    timestamp: Optional[float] = Field(None, description="Capture time in milliseconds")

    @model_validator(mode="after")
    def _check_fields_for_kind(self) -> "RawInteraction":
        if self.kind in POINTER_KINDS:
            if self.x is None or self.y is None:
                raise ValueError(f"{self.kind.value} interaction requires x and y")
            if self.key is not None:
                raise ValueError(f"{self.kind.value} interaction cannot carry a key")
        elif self.x is not None or self.y is not None:
            raise ValueError("keydown interaction cannot carry coordinates")
        return self


class InteractionSample(BaseModel):
    """One observed interaction, stamped relative to the session start."""
    model_config = ConfigDict(frozen=True)

    kind: InteractionKind = Field(..., description="move, click or keydown")
    x: Optional[float] = Field(None, description="Pointer X coordinate (px)")
    y: Optional[float] = Field(None, description="Pointer Y coordinate (px)")
    key: Optional[str] = Field(None, description="Key identifier (keydown only)")
    timestamp: float = Field(..., description="Absolute capture time in milliseconds")
    elapsed: float = Field(..., ge=0.0, description="Milliseconds since session start")


# =============================================================================
# Server-side Replay Request
# =============================================================================

class AnalyzeRequest(BaseModel):
    """
    Forwarded tracking data to be re-scored server-side.

    Sent by the registration collaborator alongside its API request.
    """
    samples: List[RawInteraction] = Field(
        default_factory=list,
        description="Raw samples in capture order"
    )
    session_start: float = Field(..., description="Session start time in milliseconds")
    session_end: float = Field(..., description="Session stop time in milliseconds")
    viewport_width: Optional[int] = Field(None, gt=0, description="Viewport width (px)")
    viewport_height: Optional[int] = Field(None, gt=0, description="Viewport height (px)")
    user_agent: Optional[str] = Field(None, description="Raw user agent string")

    @model_validator(mode="after")
    def _check_window(self) -> "AnalyzeRequest":
        if self.session_end < self.session_start:
            raise ValueError("session_end must not precede session_start")
        return self
