"""
Subscribers that turn dispatched combat log events into running statistics.

Each subscriber owns its aggregation state, decides which events it can
handle, and publishes its recomputed value to an observer after every
update.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Optional, Protocol, Union

from ..parser.events import DamageDealtEvent, GameLogEvent
from .window import (
    Sample,
    SampleWindow,
    TrimPolicy,
    damage_per_second,
    new_window,
    trim_sample,
    trim_samples,
)

logger = logging.getLogger(__name__)

Number = Union[int, float]
Clock = Callable[[], datetime]

DEFAULT_RETENTION = timedelta(seconds=10)


class SubscriberKind(Enum):
    """The closed set of statistics a subscriber can produce."""

    TOTAL_DAMAGE = "total_damage"
    DAMAGE_PER_SECOND = "dps"
    AVERAGE_HIT = "average_hit"
    MINIMUM_HIT = "minimum_hit"
    MAXIMUM_HIT = "maximum_hit"


class UpdateObserver(Protocol):
    """Receives the value a subscriber computed on each update."""

    def on_update(self, kind: SubscriberKind, value: Number) -> None: ...


class Subscriber(ABC):
    """
    Base class for all statistics subscribers.

    Subclasses set ``kind`` and implement ``can_handle``, ``_apply`` and
    ``current_value``. ``update`` applies the event and publishes the new
    value exactly once.
    """

    kind: SubscriberKind

    def __init__(self, observer: Optional[UpdateObserver] = None):
        self.observer = observer

    @abstractmethod
    def can_handle(self, event: Optional[GameLogEvent]) -> bool:
        """Return True if this subscriber wants the event (or heartbeat)."""

    @abstractmethod
    def _apply(self, event: Optional[GameLogEvent]) -> None:
        """Fold the event into the subscriber's state."""

    @property
    @abstractmethod
    def current_value(self) -> Number:
        """The statistic as of the last update."""

    def update(self, event: Optional[GameLogEvent]) -> Number:
        """
        Update state from an event and publish the new value.

        Args:
            event: A handled event, or None for a heartbeat tick

        Returns:
            The recomputed value
        """
        self._apply(event)
        value = self.current_value
        if self.observer is not None:
            self.observer.on_update(self.kind, value)
        return value

    def __repr__(self) -> str:
        return f"{type(self).__name__}(current_value={self.current_value!r})"


class DamageEventSubscriber(Subscriber):
    """Subscriber that only cares about real damage events."""

    def can_handle(self, event: Optional[GameLogEvent]) -> bool:
        return isinstance(event, DamageDealtEvent)


class TotalDamageSubscriber(DamageEventSubscriber):
    """Sum of all damage seen, never trimmed."""

    kind = SubscriberKind.TOTAL_DAMAGE

    def __init__(self, observer: Optional[UpdateObserver] = None):
        super().__init__(observer)
        self.total_damage = 0

    def _apply(self, event: Optional[GameLogEvent]) -> None:
        if isinstance(event, DamageDealtEvent):
            self.total_damage += event.amount

    @property
    def current_value(self) -> int:
        return self.total_damage


class DamagePerSecondSubscriber(Subscriber):
    """
    Damage rate over the recent retention window.

    Damage events are appended to the window. Heartbeats (None) age the
    window out; under ``TrimPolicy.SINGLE`` at most one stale sample is
    evicted per heartbeat, so long quiet gaps may leave the window wider
    than the retention span until enough heartbeats arrive.
    """

    kind = SubscriberKind.DAMAGE_PER_SECOND

    def __init__(
        self,
        observer: Optional[UpdateObserver] = None,
        retention: timedelta = DEFAULT_RETENTION,
        trim_policy: TrimPolicy = TrimPolicy.SINGLE,
        clock: Clock = datetime.now,
    ):
        super().__init__(observer)
        self.retention = retention
        self.trim_policy = trim_policy
        self.clock = clock
        self.samples: SampleWindow = new_window()

    def can_handle(self, event: Optional[GameLogEvent]) -> bool:
        return event is None or isinstance(event, DamageDealtEvent)

    def _apply(self, event: Optional[GameLogEvent]) -> None:
        if isinstance(event, DamageDealtEvent):
            self.samples.append(Sample(event.timestamp, event.amount))
        elif event is None:
            self._trim(self.clock())

    def _trim(self, now: datetime) -> None:
        if self.trim_policy is TrimPolicy.EXHAUSTIVE:
            evicted = trim_samples(self.samples, self.retention, now)
        else:
            evicted = int(trim_sample(self.samples, self.retention, now))

        if evicted:
            logger.debug(f"Evicted {evicted} stale sample(s), {len(self.samples)} left")

    @property
    def current_value(self) -> float:
        return damage_per_second(self.samples, self.clock())


class AverageHitSubscriber(DamageEventSubscriber):
    """Mean damage per hit."""

    kind = SubscriberKind.AVERAGE_HIT

    def __init__(self, observer: Optional[UpdateObserver] = None):
        super().__init__(observer)
        self.hit_sum = 0
        self.hit_count = 0

    def _apply(self, event: Optional[GameLogEvent]) -> None:
        if isinstance(event, DamageDealtEvent):
            self.hit_sum += event.amount
            self.hit_count += 1

    @property
    def current_value(self) -> float:
        if self.hit_count == 0:
            return 0
        return self.hit_sum / self.hit_count


class MinimumHitSubscriber(DamageEventSubscriber):
    """Smallest hit seen."""

    kind = SubscriberKind.MINIMUM_HIT

    def __init__(self, observer: Optional[UpdateObserver] = None):
        super().__init__(observer)
        self.minimum_hit: Optional[int] = None

    def _apply(self, event: Optional[GameLogEvent]) -> None:
        if isinstance(event, DamageDealtEvent):
            if self.minimum_hit is None or event.amount < self.minimum_hit:
                self.minimum_hit = event.amount

    @property
    def current_value(self) -> int:
        return self.minimum_hit if self.minimum_hit is not None else 0


class MaximumHitSubscriber(DamageEventSubscriber):
    """Largest hit seen."""

    kind = SubscriberKind.MAXIMUM_HIT

    def __init__(self, observer: Optional[UpdateObserver] = None):
        super().__init__(observer)
        self.maximum_hit: Optional[int] = None

    def _apply(self, event: Optional[GameLogEvent]) -> None:
        if isinstance(event, DamageDealtEvent):
            if self.maximum_hit is None or event.amount > self.maximum_hit:
                self.maximum_hit = event.amount

    @property
    def current_value(self) -> int:
        return self.maximum_hit if self.maximum_hit is not None else 0


SUBSCRIBER_TYPES = {
    SubscriberKind.TOTAL_DAMAGE: TotalDamageSubscriber,
    SubscriberKind.DAMAGE_PER_SECOND: DamagePerSecondSubscriber,
    SubscriberKind.AVERAGE_HIT: AverageHitSubscriber,
    SubscriberKind.MINIMUM_HIT: MinimumHitSubscriber,
    SubscriberKind.MAXIMUM_HIT: MaximumHitSubscriber,
}
