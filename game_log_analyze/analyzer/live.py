"""
Live damage analyzer wiring the statistics subscribers together.
"""

from datetime import datetime, timedelta
from dataclasses import dataclass, asdict
from typing import TYPE_CHECKING, Dict, Optional, Union

from ..parser.events import GameLogEvent
from .dispatcher import EventDispatcher
from .subscribers import (
    AverageHitSubscriber,
    Clock,
    DamagePerSecondSubscriber,
    DEFAULT_RETENTION,
    MaximumHitSubscriber,
    MinimumHitSubscriber,
    Number,
    SubscriberKind,
    TotalDamageSubscriber,
)
from .window import TrimPolicy

if TYPE_CHECKING:
    from ..config.settings import TrackerSettings


@dataclass(frozen=True)
class AnalyzerSnapshot:
    """Latest published statistics."""

    dps: float = 0
    total_damage: int = 0
    average_hit: float = 0
    minimum_hit: int = 0
    maximum_hit: int = 0
    events_seen: int = 0
    heartbeats_seen: int = 0

    def to_dict(self) -> Dict[str, Number]:
        return asdict(self)


class LiveDamageAnalyzer:
    """
    Tracks live damage statistics for a stream of combat log events.

    One subscriber of each kind is registered at construction. Every
    subscriber publishes back into this analyzer, which keeps the latest
    value of each statistic for the display layer to read between ticks.
    """

    def __init__(
        self,
        retention: Union[timedelta, float] = DEFAULT_RETENTION,
        trim_policy: TrimPolicy = TrimPolicy.SINGLE,
        clock: Clock = datetime.now,
    ):
        """
        Initialize the analyzer.

        Args:
            retention: Look-back window for damage per second
            trim_policy: How many stale samples a heartbeat may evict
            clock: Source of the current time
        """
        if not isinstance(retention, timedelta):
            retention = timedelta(seconds=retention)

        self.retention = retention
        self.trim_policy = trim_policy
        self.clock = clock

        self._values: Dict[SubscriberKind, Number] = {kind: 0 for kind in SubscriberKind}
        self._events_seen = 0
        self._heartbeats_seen = 0

        self.dispatcher = EventDispatcher()
        self._setup_subscribers()

    @classmethod
    def from_settings(
        cls, settings: "TrackerSettings", clock: Clock = datetime.now
    ) -> "LiveDamageAnalyzer":
        """Build an analyzer from tracker settings."""
        return cls(
            retention=timedelta(seconds=settings.window_seconds),
            trim_policy=TrimPolicy(settings.trim_policy),
            clock=clock,
        )

    def _setup_subscribers(self) -> None:
        self.dispatcher.add_subscriber(TotalDamageSubscriber(observer=self))
        self.dispatcher.add_subscriber(
            DamagePerSecondSubscriber(
                observer=self,
                retention=self.retention,
                trim_policy=self.trim_policy,
                clock=self.clock,
            )
        )
        self.dispatcher.add_subscriber(AverageHitSubscriber(observer=self))
        self.dispatcher.add_subscriber(MinimumHitSubscriber(observer=self))
        self.dispatcher.add_subscriber(MaximumHitSubscriber(observer=self))

    def tick(self, event: Optional[GameLogEvent]) -> None:
        """Process one polled event, or None when nothing new was read."""
        if event is None:
            self._heartbeats_seen += 1
        else:
            self._events_seen += 1
        self.dispatcher.notify(event)

    def on_update(self, kind: SubscriberKind, value: Number) -> None:
        """Store a value published by a subscriber."""
        self._values[kind] = value

    @property
    def dps(self) -> float:
        return self._values[SubscriberKind.DAMAGE_PER_SECOND]

    @property
    def total_damage(self) -> int:
        return self._values[SubscriberKind.TOTAL_DAMAGE]

    @property
    def average_hit(self) -> float:
        return self._values[SubscriberKind.AVERAGE_HIT]

    @property
    def minimum_hit(self) -> int:
        return self._values[SubscriberKind.MINIMUM_HIT]

    @property
    def maximum_hit(self) -> int:
        return self._values[SubscriberKind.MAXIMUM_HIT]

    def snapshot(self) -> AnalyzerSnapshot:
        """Return the latest published values."""
        return AnalyzerSnapshot(
            dps=self.dps,
            total_damage=self.total_damage,
            average_hit=self.average_hit,
            minimum_hit=self.minimum_hit,
            maximum_hit=self.maximum_hit,
            events_seen=self._events_seen,
            heartbeats_seen=self._heartbeats_seen,
        )
