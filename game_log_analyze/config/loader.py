"""
Configuration loader for tracker settings.

Allows users to override tracker settings via a YAML configuration file.
"""

import yaml
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .settings import TrackerSettings, get_settings

logger = logging.getLogger(__name__)

# YAML key -> (settings attribute, converter)
SETTING_KEYS = {
    "window_seconds": ("window_seconds", float),
    "trim_policy": ("trim_policy", lambda value: str(value).lower()),
    "refresh_interval": ("refresh_interval", float),
    "poll_interval": ("poll_interval", float),
    "attack_pattern": ("attack_pattern", str),
    "log_level": ("log_level", lambda value: str(value).lower()),
}


class ConfigLoader:
    """Loads and applies custom configuration from YAML files."""

    @staticmethod
    def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to custom config file. If None, looks for:
                        1. game_log_analyze.yaml in current directory
                        2. config/game_log_analyze.yaml
                        3. ~/.game_log_analyze/config.yaml

        Returns:
            Configuration dictionary
        """
        search_paths = [
            Path("game_log_analyze.yaml"),
            Path("config/game_log_analyze.yaml"),
            Path.home() / ".game_log_analyze" / "config.yaml",
        ]

        if config_path:
            search_paths.insert(0, Path(config_path))

        for path in search_paths:
            if path.exists():
                try:
                    with open(path, "r") as f:
                        config = yaml.safe_load(f) or {}
                except (OSError, yaml.YAMLError) as e:
                    logger.error(f"Failed to load config from {path}: {e}")
                    continue

                if not isinstance(config, dict):
                    logger.error(f"Ignoring config from {path}: expected a mapping")
                    continue

                logger.info(f"Loaded configuration from {path}")
                return config

        logger.debug("No custom configuration file found, using defaults")
        return {}

    @staticmethod
    def apply_config(settings: TrackerSettings, config: Dict[str, Any]) -> TrackerSettings:
        """
        Apply custom configuration to tracker settings.

        Args:
            settings: Settings to update in place
            config: Configuration dictionary from YAML

        Returns:
            The updated settings
        """
        for key, value in config.items():
            if key not in SETTING_KEYS:
                logger.warning(f"Ignoring unknown config key: {key}")
                continue

            attribute, convert = SETTING_KEYS[key]
            try:
                setattr(settings, attribute, convert(value))
                logger.debug(f"Set {attribute} = {value!r}")
            except (ValueError, TypeError) as e:
                logger.warning(f"Invalid value for {key}: {e}")

        return settings


def load_settings(config_path: Optional[str] = None) -> TrackerSettings:
    """
    Load settings from the environment, then overlay the YAML config.

    Args:
        config_path: Optional path to custom config file
    """
    settings = get_settings()
    loader = ConfigLoader()
    config = loader.load_config(config_path)
    if config:
        loader.apply_config(settings, config)
    return settings
