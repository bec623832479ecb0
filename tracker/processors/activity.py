"""
Composite activity checks.

These look at the mix of interaction kinds and at how soon activity
started, rather than at pointer geometry.
"""

from tracker.config import ScoringConfig
from tracker.schemas.outputs import SignalResult

REASON_IDLE_POINTER = "No clicks or keyboard activity despite movements"
REASON_FAST_START = "Suspiciously fast activity after page load"


def check_idle_pointer(
    move_count: int,
    click_count: int,
    key_count: int,
    config: ScoringConfig,
) -> SignalResult:
    """Many moves with neither clicks nor key presses."""
    triggered = (
        move_count > config.idle_pointer_moves
        and click_count == 0
        and key_count == 0
    )
    return SignalResult(
        name="idle_pointer",
        triggered=triggered,
        weight=config.idle_pointer_weight,
        reason=REASON_IDLE_POINTER,
        metrics={
            "move_count": float(move_count),
            "interaction_count": float(click_count + key_count),
        },
    )


def check_fast_start(
    move_count: int,
    duration_ms: float,
    config: ScoringConfig,
) -> SignalResult:
    """Several moves within the first moments of the session."""
    triggered = duration_ms < config.fast_start_ms and move_count > config.fast_start_moves
    return SignalResult(
        name="fast_start",
        triggered=triggered,
        weight=config.fast_start_weight,
        reason=REASON_FAST_START,
        metrics={"duration_ms": float(duration_ms), "move_count": float(move_count)},
    )
