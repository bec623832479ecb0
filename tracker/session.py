"""
Observation Session

Owns one bounded observation window over a user's interaction stream.

Usage:
    session = ObservationSession()
    session.start()
    session.record_move(120, 340)
    session.record_click(125, 342)
    session.record_keydown("a")
    session.stop()
    report = session.report(viewport_width=1440, viewport_height=900)

Lifecycle:
    start()  -> buffer cleared, start time recorded, intake sources attached
    record() -> sample stamped and appended (ignored while inactive)
    stop()   -> writes frozen, duration frozen, intake sources detached
    report() -> pure function of the retained samples; callable at any time

Calling start() on a running session restarts tracking from scratch. Callers
that do not want that must stop() first.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, Iterable, List, Optional

from tracker.buffer import SampleRingBuffer
from tracker.config import ScoringConfig
from tracker.intake import EventSource, Handler, Unsubscribe
from tracker.models.scorer import InteractionScorer
from tracker.schemas.inputs import InteractionKind, InteractionSample, RawInteraction
from tracker.schemas.outputs import AnalysisReport, TrackingPayload

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def wall_clock_ms() -> float:
    """Current Unix time in milliseconds."""
    return time.time() * 1000.0


class ObservationSession:
    """
    Session controller for the interaction tracker.

    Attributes:
        config: Scoring configuration (capacity, thresholds, weights).
        scorer: Scorer used by report().
    """

    def __init__(
        self,
        config: Optional[ScoringConfig] = None,
        scorer: Optional[InteractionScorer] = None,
        sources: Optional[Dict[InteractionKind, EventSource]] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.config = config or ScoringConfig()
        self.scorer = scorer or InteractionScorer(self.config)
        self._buffer = SampleRingBuffer(self.config.capacity)
        self._sources: Dict[InteractionKind, EventSource] = dict(sources or {})
        self._unsubscribers: List[Unsubscribe] = []
        self._clock: Clock = clock or wall_clock_ms
        self._started_at: Optional[float] = None
        self._stopped_at: Optional[float] = None
        self._active = False

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def active(self) -> bool:
        return self._active

    @property
    def started_at(self) -> Optional[float]:
        return self._started_at

    @property
    def stopped_at(self) -> Optional[float]:
        return self._stopped_at

    @property
    def samples(self) -> List[InteractionSample]:
        """Retained samples, oldest first."""
        return self._buffer.snapshot()

    @property
    def duration_ms(self) -> float:
        """
        Session duration in milliseconds.

        While active this is the elapsed time of the newest retained sample,
        so it only moves when a sample is recorded. stop() freezes it at the
        stop time.
        """
        if self._started_at is None:
            return 0.0
        if self._stopped_at is not None:
            return max(0.0, self._stopped_at - self._started_at)
        newest = self._buffer.tail(1)
        return newest[0].elapsed if newest else 0.0

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self, timestamp: Optional[float] = None) -> None:
        """Begin (or restart) observation."""
        if self._active:
            logger.warning("start() called on an active session, restarting tracking")
            self._detach()

        self._buffer.clear()
        self._started_at = timestamp if timestamp is not None else self._clock()
        self._stopped_at = None
        self._active = True
        self._attach()

        logger.info(f"Observation started (capacity={self._buffer.capacity})")

    def stop(self, timestamp: Optional[float] = None) -> None:
        """End observation. Safe to call any number of times."""
        if not self._active:
            return

        self._active = False
        self._stopped_at = timestamp if timestamp is not None else self._clock()
        self._detach()

        logger.info(
            f"Observation stopped after {self.duration_ms:.0f}ms "
            f"({len(self._buffer)} samples retained, {self._buffer.evicted} evicted)"
        )

    # -------------------------------------------------------------------------
    # Intake
    # -------------------------------------------------------------------------

    def record(self, raw: RawInteraction) -> Optional[InteractionSample]:
        """
        Stamp and buffer one interaction.

        Returns:
            The stored sample, or None when the session is not active.
        """
        if not self._active:
            return None

        timestamp = raw.timestamp if raw.timestamp is not None else self._clock()
        sample = InteractionSample(
            kind=raw.kind,
            x=raw.x,
            y=raw.y,
            key=raw.key,
            timestamp=timestamp,
            elapsed=max(0.0, timestamp - self._started_at),
        )
        self._buffer.append(sample)
        return sample

    # The convenience handlers skip RawInteraction validation while inactive

    def record_move(self, x: float, y: float, timestamp: Optional[float] = None) -> Optional[InteractionSample]:
        """Record a pointer move at (x, y)."""
        if not self._active:
            return None
        return self.record(RawInteraction(kind=InteractionKind.MOVE, x=x, y=y, timestamp=timestamp))

    def record_click(self, x: float, y: float, timestamp: Optional[float] = None) -> Optional[InteractionSample]:
        """Record a pointer click at (x, y)."""
        if not self._active:
            return None
        return self.record(RawInteraction(kind=InteractionKind.CLICK, x=x, y=y, timestamp=timestamp))

    def record_keydown(self, key: str, timestamp: Optional[float] = None) -> Optional[InteractionSample]:
        """Record a key press."""
        if not self._active:
            return None
        return self.record(RawInteraction(kind=InteractionKind.KEYDOWN, key=key, timestamp=timestamp))

    def _handler_for(self, kind: InteractionKind) -> Handler:
        return {
            InteractionKind.MOVE: self.record_move,
            InteractionKind.CLICK: self.record_click,
            InteractionKind.KEYDOWN: self.record_keydown,
        }[kind]

    def _attach(self) -> None:
        for kind, source in self._sources.items():
            self._unsubscribers.append(source.subscribe(self._handler_for(kind)))

    def _detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def report(
        self,
        viewport_width: Optional[float] = None,
        viewport_height: Optional[float] = None,
    ) -> AnalysisReport:
        """Score the samples retained so far."""
        return self.scorer.score(
            self._buffer.snapshot(),
            self.duration_ms,
            viewport_width=viewport_width,
            viewport_height=viewport_height,
        )

    def payload(
        self,
        user_agent: str = "",
        screen_width: int = 0,
        screen_height: int = 0,
        viewport_width: Optional[int] = None,
        viewport_height: Optional[int] = None,
    ) -> TrackingPayload:
        """Bundle samples, report and client environment for forwarding."""
        if viewport_width is None:
            viewport_width = self.config.viewport_width
        if viewport_height is None:
            viewport_height = self.config.viewport_height

        return TrackingPayload(
            movements=self._buffer.snapshot(),
            analysis=self.report(viewport_width, viewport_height),
            user_agent=user_agent,
            screen_width=screen_width,
            screen_height=screen_height,
            viewport_width=viewport_width,
            viewport_height=viewport_height,
        )


def replay_session(
    samples: Iterable[RawInteraction],
    started_at: float,
    stopped_at: float,
    config: Optional[ScoringConfig] = None,
) -> ObservationSession:
    """
    Rebuild a stopped session from forwarded samples.

    Samples without a timestamp are stamped with stopped_at.
    """
    session = ObservationSession(config=config, clock=lambda: stopped_at)
    session.start(timestamp=started_at)
    for raw in samples:
        session.record(raw)
    session.stop(timestamp=stopped_at)
    return session
