"""
Tracker Test Suite - Shared Pytest Fixtures

This conftest.py provides fixtures for all test categories including:
- A controllable millisecond clock
- Sample and path builders
- Scorer and session instances

Usage:
    pytest tests/ -v -s
"""

from typing import Callable, List, Optional, Sequence, Tuple

import pytest

from tracker.config import ScoringConfig
from tracker.models.scorer import InteractionScorer
from tracker.schemas.inputs import InteractionKind, InteractionSample
from tracker.session import ObservationSession


# =============================================================================
# Clock
# =============================================================================

class FakeClock:
    """Manually advanced clock returning milliseconds."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> float:
        self.now += ms
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    """Clock starting at t=10_000ms."""
    return FakeClock(10_000.0)


# =============================================================================
# Sample Builders
# =============================================================================

@pytest.fixture
def make_sample() -> Callable[..., InteractionSample]:
    """Factory for stamped samples (elapsed == timestamp)."""
    def _make(
        kind: InteractionKind,
        x: Optional[float] = None,
        y: Optional[float] = None,
        timestamp: float = 0.0,
        key: Optional[str] = None,
    ) -> InteractionSample:
        return InteractionSample(kind=kind, x=x, y=y, key=key, timestamp=timestamp, elapsed=timestamp)
    return _make


@pytest.fixture
def make_path(make_sample) -> Callable[..., List[InteractionSample]]:
    """
    Factory for MOVE paths.

    Args:
        points: (x, y) pairs
        times: absolute timestamps, or None for a uniform 10ms cadence
    """
    def _make(
        points: Sequence[Tuple[float, float]],
        times: Optional[Sequence[float]] = None,
    ) -> List[InteractionSample]:
        if times is None:
            times = [i * 10.0 for i in range(len(points))]
        return [
            make_sample(InteractionKind.MOVE, x, y, ts)
            for (x, y), ts in zip(points, times)
        ]
    return _make


@pytest.fixture
def straight_path(make_path) -> List[InteractionSample]:
    """20 moves along a diagonal, 50px every 10ms."""
    return make_path([(i * 30, i * 40) for i in range(20)])


@pytest.fixture
def humanish_line(make_path) -> List[InteractionSample]:
    """
    Collinear path on y = x / 2 with uneven steps and uneven timing.

    Only the linearity heuristic should object to it.
    """
    xs = [0, 100, 400, 450, 1200, 1300, 1900]
    times = [0, 40, 130, 145, 345, 405, 535]
    return make_path([(x, x // 2) for x in xs], times)


# =============================================================================
# Engine Fixtures
# =============================================================================

@pytest.fixture
def config() -> ScoringConfig:
    """Default scoring configuration."""
    return ScoringConfig()


@pytest.fixture
def scorer(config) -> InteractionScorer:
    """Create an InteractionScorer instance."""
    return InteractionScorer(config)


@pytest.fixture
def session(config, clock) -> ObservationSession:
    """Create an ObservationSession bound to the fake clock."""
    return ObservationSession(config=config, clock=clock)
