"""
Line tokenizer for turning raw combat log lines into typed events.
"""

import re
import logging
from datetime import date, datetime, time, timedelta
from typing import Callable, Optional, Pattern, Union

from .events import DamageDealtEvent

logger = logging.getLogger(__name__)


# Star Wars Galaxies attack line, e.g.
# "[Combat]  21:30:23 you use Headshot on a Rill and hit for 375 points of damage."
DEFAULT_ATTACK_PATTERN = (
    r"^\[Combat\]\s+(?P<time>\d{2}:\d{2}:\d{2})\s+.*you use.*\s(?P<damage>\d+)\spoints of damage.*$"
)

REQUIRED_GROUPS = ("time", "damage")


class LineTokenizer:
    """
    Tokenizes individual lines from a combat log into damage events.

    The log only carries a time of day, so timestamps are anchored to the
    date returned by ``today`` (the current date by default). A time that
    would land more than ``MAX_CLOCK_SKEW`` after ``clock()`` was written
    before midnight and is moved back one day.
    """

    TIME_FORMAT = "%H:%M:%S"
    MAX_CLOCK_SKEW = timedelta(minutes=5)

    def __init__(
        self,
        pattern: Union[str, Pattern[str]] = DEFAULT_ATTACK_PATTERN,
        today: Optional[Callable[[], date]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the tokenizer.

        Args:
            pattern: Regex with ``time`` and ``damage`` named groups
            today: Callable returning the date to anchor timestamps to
            clock: Callable returning the current time

        Raises:
            ValueError: If the pattern is invalid or lacks a required group
        """
        try:
            self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        except re.error as e:
            raise ValueError(f"Invalid attack pattern: {e}") from e

        missing = [group for group in REQUIRED_GROUPS if group not in self.pattern.groupindex]
        if missing:
            raise ValueError(f"Attack pattern is missing named groups: {', '.join(missing)}")

        self.today = today or date.today
        self.clock = clock or datetime.now
        self.line_count = 0
        self.error_count = 0

    def parse_line(self, line: Optional[str]) -> Optional[DamageDealtEvent]:
        """
        Parse a single combat log line.

        Args:
            line: Raw line from the combat log, or None when nothing was read

        Returns:
            DamageDealtEvent, or None if the line is not an attack line
        """
        if line is None:
            return None

        self.line_count += 1

        line = line.rstrip()
        if not line:
            return None

        match = self.pattern.match(line)
        if not match:
            self.error_count += 1
            logger.debug(f"Ignoring unmatched line: {line!r}")
            return None

        try:
            time_of_day = datetime.strptime(match.group("time"), self.TIME_FORMAT).time()
        except ValueError:
            self.error_count += 1
            logger.debug(f"Ignoring line with invalid time: {line!r}")
            return None

        try:
            amount = int(match.group("damage"))
            if amount < 0:
                raise ValueError(f"negative damage: {amount}")
        except ValueError:
            self.error_count += 1
            logger.debug(f"Ignoring line with invalid damage: {line!r}")
            return None

        return DamageDealtEvent(timestamp=self._anchor(time_of_day), data=amount)

    def _anchor(self, time_of_day: time) -> datetime:
        """Attach a date to a time of day, rolling back across midnight."""
        timestamp = datetime.combine(self.today(), time_of_day)
        if timestamp - self.clock() > self.MAX_CLOCK_SKEW:
            timestamp -= timedelta(days=1)
        return timestamp
