"""
Fixed-capacity sample ring.

Once full, each append overwrites the oldest slot, so the buffer always
holds the most recent `capacity` samples in insertion order.
"""

import logging
from typing import Iterator, List, Optional

from tracker.schemas.inputs import InteractionSample

logger = logging.getLogger(__name__)


class SampleRingBuffer:
    """Circular buffer of InteractionSample with O(1) append."""

    def __init__(self, capacity: int = 100) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._slots: List[Optional[InteractionSample]] = [None] * capacity
        self._head = 0  # index of the oldest sample
        self._size = 0
        self._evicted = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def evicted(self) -> int:
        """Samples dropped since the last clear()."""
        return self._evicted

    def append(self, sample: InteractionSample) -> None:
        if self._size < self._capacity:
            self._slots[(self._head + self._size) % self._capacity] = sample
            self._size += 1
            return

        # Full: the tail slot is the head slot
        self._slots[self._head] = sample
        self._head = (self._head + 1) % self._capacity
        self._evicted += 1
        logger.debug(f"Ring full, evicted oldest sample ({self._evicted} total)")

    def snapshot(self) -> List[InteractionSample]:
        """Return retained samples, oldest first."""
        return [
            self._slots[(self._head + i) % self._capacity]
            for i in range(self._size)
        ]

    def tail(self, n: int) -> List[InteractionSample]:
        """Return the last n samples, oldest first."""
        if n <= 0:
            return []
        return self.snapshot()[-n:]

    def clear(self) -> None:
        self._slots = [None] * self._capacity
        self._head = 0
        self._size = 0
        self._evicted = 0

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[InteractionSample]:
        return iter(self.snapshot())
