"""Configuration management.

Settings are loaded explicitly (no import-time global) and passed to whatever
constructs the dispatcher:

    settings = load_settings()
    dispatcher = CheckpointDispatcher.from_settings(settings)
"""

from agentstamp.config.loader import ConfigError, load_settings, resolve_config_path
from agentstamp.config.schema import AgentstampSettings

__all__ = ["AgentstampSettings", "ConfigError", "load_settings", "resolve_config_path"]
