"""
Windowed sample buffer and statistics helpers.

A sample is a (timestamp, amount) point. Windows keep samples in arrival
order, which is timestamp order as long as the log is read front to back.
"""

from collections import deque
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Deque, Iterable, Optional, Union


@dataclass(frozen=True)
class Sample:
    """A damage amount observed at a point in time."""

    timestamp: datetime
    amount: int


SampleWindow = Deque[Sample]


class TrimPolicy(Enum):
    """How many stale samples a heartbeat may evict."""

    SINGLE = "single"
    EXHAUSTIVE = "exhaustive"


def new_window(samples: Iterable[Sample] = ()) -> SampleWindow:
    """Create a sample window, optionally seeded with samples."""
    return deque(samples)


def _as_timedelta(retention: Union[timedelta, float]) -> timedelta:
    if isinstance(retention, timedelta):
        return retention
    return timedelta(seconds=retention)


def trim_sample(
    window: SampleWindow,
    retention: Union[timedelta, float],
    now: Optional[datetime] = None,
) -> bool:
    """
    Evict the oldest sample if it fell out of the retention window.

    Only one sample is removed per call; use ``trim_samples`` to evict
    every stale sample.

    Args:
        window: Samples ordered oldest first
        retention: Look-back span (timedelta or seconds)
        now: Reference time, defaults to the current time

    Returns:
        True if a sample was evicted
    """
    if not window:
        return False

    if now is None:
        now = datetime.now()

    if window[0].timestamp >= now - _as_timedelta(retention):
        return False

    window.popleft()
    return True


def trim_samples(
    window: SampleWindow,
    retention: Union[timedelta, float],
    now: Optional[datetime] = None,
) -> int:
    """Evict every stale sample. Returns the number of samples evicted."""
    if now is None:
        now = datetime.now()

    evicted = 0
    while trim_sample(window, retention, now):
        evicted += 1
    return evicted


def total_damage(samples: Iterable[Sample]) -> int:
    """Sum of all sample amounts, 0 for no samples."""
    return sum(sample.amount for sample in samples)


def damage_per_second(samples: Iterable[Sample], end_time: Optional[datetime] = None) -> float:
    """
    Damage rate from the oldest sample up to end_time.

    Returns 0 for no samples, and for a span that is not positive.
    """
    samples = list(samples)
    if not samples:
        return 0

    if end_time is None:
        end_time = datetime.now()

    span = (end_time - samples[0].timestamp).total_seconds()
    if span <= 0:
        return 0.0

    return total_damage(samples) / span


def average_hit(samples: Iterable[Sample]) -> float:
    """Mean sample amount, 0 for no samples."""
    samples = list(samples)
    if not samples:
        return 0

    return total_damage(samples) / len(samples)


def minimum_hit(samples: Iterable[Sample]) -> int:
    """Smallest sample amount, 0 for no samples."""
    return min((sample.amount for sample in samples), default=0)


def maximum_hit(samples: Iterable[Sample]) -> int:
    """Largest sample amount, 0 for no samples."""
    return max((sample.amount for sample in samples), default=0)
