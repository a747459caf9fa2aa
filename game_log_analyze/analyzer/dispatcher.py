"""
Event dispatcher fanning combat log events out to statistics subscribers.
"""

import logging
from typing import List, Optional, Tuple

from ..parser.events import GameLogEvent
from .subscribers import SUBSCRIBER_TYPES, Subscriber

logger = logging.getLogger(__name__)


class UnknownSubscriberError(TypeError):
    """Raised when something outside the known subscriber kinds is registered."""


class EventDispatcher:
    """
    Notifies registered subscribers of each tick's event.

    Subscribers are called in registration order and only when their
    ``can_handle`` predicate accepts the event. A tick with no new data is
    dispatched as None.
    """

    def __init__(self):
        self._subscribers: List[Subscriber] = []

    @property
    def subscribers(self) -> Tuple[Subscriber, ...]:
        """Registered subscribers in registration order."""
        return tuple(self._subscribers)

    def add_subscriber(self, subscriber: Subscriber) -> None:
        """
        Register a subscriber.

        Raises:
            UnknownSubscriberError: If the subscriber is not one of the
                known subscriber kinds
        """
        if not isinstance(subscriber, Subscriber):
            raise UnknownSubscriberError(f"Not a subscriber: {subscriber!r}")

        expected = SUBSCRIBER_TYPES.get(getattr(subscriber, "kind", None))
        if expected is None or not isinstance(subscriber, expected):
            raise UnknownSubscriberError(
                f"Unknown subscriber kind for {type(subscriber).__name__}"
            )

        self._subscribers.append(subscriber)
        logger.debug(f"Registered {type(subscriber).__name__} ({subscriber.kind.value})")

    def notify(self, event: Optional[GameLogEvent]) -> None:
        """Dispatch an event, or None for a heartbeat, to eligible subscribers."""
        eligible = [subscriber for subscriber in self._subscribers if subscriber.can_handle(event)]
        for subscriber in eligible:
            subscriber.update(event)
