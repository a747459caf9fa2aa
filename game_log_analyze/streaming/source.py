"""
Event source that tails a combat log stream.

Produces one typed event, or None when nothing usable was read, per poll.
"""

import logging
from typing import Optional, TextIO

from ..parser.events import GameLogEvent
from ..parser.tokenizer import LineTokenizer

logger = logging.getLogger(__name__)


class LogTailer:
    """
    Polls a file-like object for new combat log lines.

    The tailer never blocks or sleeps; an exhausted stream simply yields
    None until more lines are appended.
    """

    def __init__(self, stream: TextIO, tokenizer: Optional[LineTokenizer] = None):
        """
        Initialize the tailer.

        Args:
            stream: Text stream supporting readline()
            tokenizer: Tokenizer turning lines into events
        """
        self.stream = stream
        self.tokenizer = tokenizer or LineTokenizer()

        self._pending = ""

        self.lines_read = 0
        self.events_emitted = 0
        self.lines_rejected = 0

    def skip_existing(self) -> int:
        """
        Consume every line already in the stream.

        Returns:
            Number of lines skipped
        """
        skipped = 0
        while self.stream.readline():
            skipped += 1

        logger.info(f"Skipped {skipped} existing log lines")
        return skipped

    def poll(self) -> Optional[GameLogEvent]:
        """
        Read at most one line and return its event, if any.

        A line the writer has only partly flushed is held back until its
        newline arrives.
        """
        chunk = self.stream.readline()
        if not chunk:
            return None

        if not chunk.endswith("\n"):
            self._pending += chunk
            return None

        line = self._pending + chunk
        self._pending = ""

        self.lines_read += 1
        event = self.tokenizer.parse_line(line)
        if event is None:
            self.lines_rejected += 1
            return None

        self.events_emitted += 1
        return event

    @property
    def stats(self) -> dict:
        return {
            "lines_read": self.lines_read,
            "events_emitted": self.events_emitted,
            "lines_rejected": self.lines_rejected,
        }
