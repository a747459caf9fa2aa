"""
Configuration module for the live combat log tracker.

Provides settings loaded from environment variables and optional YAML files.
"""

from .settings import TrackerSettings, get_settings
from .loader import ConfigLoader, load_settings

__all__ = ["TrackerSettings", "get_settings", "ConfigLoader", "load_settings"]
