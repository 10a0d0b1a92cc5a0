import os
import re
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from instrukt_ai_logging import get_logger
from pydantic import BaseModel, ValidationError

from agentstamp.config.schema import AgentstampSettings
from agentstamp.constants import CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH

logger = get_logger(__name__)


class ConfigError(Exception):
    """Configuration file could not be parsed or validated."""


def expand_env_vars(config: object) -> object:
    """Recursively replace ${VAR} patterns with environment variable values."""
    if isinstance(config, dict):
        return {k: expand_env_vars(v) for k, v in config.items()}
    if isinstance(config, list):
        return [expand_env_vars(item) for item in config]
    if isinstance(config, str):

        def replace_env_var(match: re.Match[str]) -> str:
            return os.getenv(match.group(1), match.group(0))

        return re.sub(r"\$\{([^}]+)\}", replace_env_var, config)
    return config


def _warn_unknown_keys(model: BaseModel, config_path: Path) -> None:
    if model.model_extra:
        logger.warning("Unknown keys in %s: %s", config_path, list(model.model_extra.keys()))


def resolve_config_path(path: Optional[Path] = None) -> Path:
    """Explicit path, then $AGENTSTAMP_CONFIG, then ~/.agentstamp/agentstamp.yml."""
    if path is not None:
        return Path(path).expanduser()
    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return Path(DEFAULT_CONFIG_PATH).expanduser()


def load_settings(path: Optional[Path] = None, dotenv_path: Optional[Path] = None) -> AgentstampSettings:
    """Load and validate settings from a YAML file.

    A missing or unreadable file yields defaults. Malformed YAML or invalid
    values raise ConfigError.
    """
    load_dotenv(dotenv_path)
    config_path = resolve_config_path(path)
    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return AgentstampSettings()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except OSError as e:
        logger.warning("Failed to read config file %s: %s", config_path, e)
        return AgentstampSettings()
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed YAML in {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Config root in {config_path} must be a mapping")

    try:
        settings = AgentstampSettings.model_validate(expand_env_vars(raw))
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {config_path}: {e}") from e

    _warn_unknown_keys(settings, config_path)
    return settings
