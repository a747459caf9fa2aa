"""
Pytest configuration and shared fixtures for the test suite.

This file provides common configuration and fixtures used across
all test modules in the tracker test suite.
"""

import pytest
from datetime import date, datetime, timedelta
from pathlib import Path

import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from game_log_analyze.parser.events import DamageDealtEvent


class FakeClock:
    """Manually advanced clock for deterministic time-based tests."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> datetime:
        self.current += timedelta(seconds=seconds)
        return self.current

    def set(self, when: datetime) -> None:
        self.current = when


@pytest.fixture
def t0():
    """Reference start time used by time-based tests."""
    return datetime(2024, 1, 1, 21, 30, 0)


@pytest.fixture
def clock(t0):
    """A fake clock starting at t0."""
    return FakeClock(t0)


@pytest.fixture
def make_damage():
    """Factory for damage events relative to a base time."""

    def _make(amount: int, when: datetime) -> DamageDealtEvent:
        return DamageDealtEvent(timestamp=when, data=amount)

    return _make


@pytest.fixture
def log_date():
    """Date that tokenized timestamps are anchored to."""
    return date(2024, 1, 1)


@pytest.fixture
def sample_log_lines():
    """Sample combat log lines for testing."""
    return [
        "[Combat]  21:30:21 you use Headshot on a Rill and hit for 375 points of damage.",
        "[Combat]  21:30:22 A Rill attacks you but misses.",
        "[Combat]  21:30:23 you use Burst Shot on a Rill and hit for 120 points of damage.",
        "[Spatial]  21:30:24 Testplayer: hello there",
        "[Combat]  21:30:25 you use Headshot on a Rill and hit for 410 points of damage (12 absorbed).",
    ]


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: mark test as an integration test")


# Pytest collection configuration
def pytest_collection_modifyitems(config, items):
    """Modify collected test items with markers."""
    for item in items:
        if "test_cli" in item.fspath.basename:
            item.add_marker(pytest.mark.integration)
