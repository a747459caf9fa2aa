"""
Configuration settings for the live combat log tracker.

Handles environment variables and runtime options for the tracker loop,
the statistics window and logging.
"""

import os
import re
import logging
from dataclasses import dataclass

from rich.logging import RichHandler

from ..analyzer.window import TrimPolicy
from ..parser.tokenizer import DEFAULT_ATTACK_PATTERN, REQUIRED_GROUPS

TRIM_POLICIES = tuple(policy.value for policy in TrimPolicy)
LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


@dataclass
class TrackerSettings:
    """Tracker configuration settings."""

    # Statistics window
    window_seconds: float = 10.0
    trim_policy: str = TrimPolicy.SINGLE.value

    # Loop timing
    refresh_interval: float = 1.0
    poll_interval: float = 0.05

    # Line grammar
    attack_pattern: str = DEFAULT_ATTACK_PATTERN

    log_level: str = "info"

    @classmethod
    def from_env(cls) -> "TrackerSettings":
        """Load tracker settings from environment variables."""
        return cls(
            window_seconds=float(os.getenv("GLA_WINDOW_SECONDS", "10")),
            trim_policy=os.getenv("GLA_TRIM_POLICY", TrimPolicy.SINGLE.value).lower(),
            refresh_interval=float(os.getenv("GLA_REFRESH_INTERVAL", "1.0")),
            poll_interval=float(os.getenv("GLA_POLL_INTERVAL", "0.05")),
            attack_pattern=os.getenv("GLA_ATTACK_PATTERN", DEFAULT_ATTACK_PATTERN),
            log_level=os.getenv("GLA_LOG_LEVEL", "info").lower(),
        )

    def validate(self):
        """Validate configuration settings."""
        errors = []

        if self.window_seconds <= 0:
            errors.append(f"Window must be positive: {self.window_seconds}")

        if self.refresh_interval <= 0:
            errors.append(f"Refresh interval must be positive: {self.refresh_interval}")

        if self.poll_interval < 0:
            errors.append(f"Poll interval cannot be negative: {self.poll_interval}")

        if self.trim_policy not in TRIM_POLICIES:
            errors.append(
                f"Unknown trim policy '{self.trim_policy}' (expected one of {', '.join(TRIM_POLICIES)})"
            )

        if self.log_level.lower() not in LOG_LEVELS:
            errors.append(f"Unknown log level: {self.log_level}")

        try:
            pattern = re.compile(self.attack_pattern)
        except re.error as e:
            errors.append(f"Invalid attack pattern: {e}")
        else:
            missing = [group for group in REQUIRED_GROUPS if group not in pattern.groupindex]
            if missing:
                errors.append(f"Attack pattern is missing named groups: {', '.join(missing)}")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

    def setup_logging(self, console=None):
        """Configure logging based on settings."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(message)s",
            handlers=[RichHandler(console=console, rich_tracebacks=True)],
            force=True,
        )

    def log_configuration(self):
        """Log current configuration."""
        logger = logging.getLogger(__name__)

        logger.info("=== Tracker Configuration ===")
        logger.info(f"Window: {self.window_seconds}s ({self.trim_policy} trim)")
        logger.info(f"Refresh Interval: {self.refresh_interval}s")
        logger.info(f"Poll Interval: {self.poll_interval}s")
        logger.info(f"Attack Pattern: {self.attack_pattern}")
        logger.info(f"Log Level: {self.log_level}")
        logger.info("=== End Configuration ===")


def get_settings() -> TrackerSettings:
    """Load settings from the environment."""
    return TrackerSettings.from_env()
