"""
Combat log streaming: polling a growing log for new events.
"""

from .source import LogTailer

__all__ = ["LogTailer"]
