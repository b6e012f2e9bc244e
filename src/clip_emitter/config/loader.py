"""Configuration loader for clip-emitter.

Loads a JSON configuration file and returns a validated EmitterConfig.
Uses module-level caching so each file is only parsed once per process.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import platformdirs
from pydantic import ValidationError

from clip_emitter.config.models import EmitterConfig
from clip_emitter.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

_APP_NAME = "clip_emitter"
_USER_CONFIG_FILENAME = "config.json"

# Module-level cache
_config_cache: dict[str, EmitterConfig] = {}

# Default config path — lives next to this module
_DEFAULT_CONFIG_PATH = Path(__file__).parent / "emitter_default.json"


def user_config_path() -> Path:
    """Return the per-user config file location (may not exist)."""
    return Path(platformdirs.user_config_dir(_APP_NAME)) / _USER_CONFIG_FILENAME


def load_config(path: Optional[Path] = None) -> EmitterConfig:
    """Load and validate emitter config from a JSON file.

    Parameters
    ----------
    path : Path | None
        Path to a custom JSON config file.
        If ``None``, the built-in ``emitter_default.json`` is used.

    Returns
    -------
    EmitterConfig
        Validated configuration instance.

    Raises
    ------
    ConfigurationError
        If the file does not exist, is not valid JSON, or does not match
        the expected schema.
    """
    config_path = Path(path) if path else _DEFAULT_CONFIG_PATH
    cache_key = str(config_path.resolve())

    if cache_key in _config_cache:
        return _config_cache[cache_key]

    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in {config_path}: {exc}") from exc

    try:
        config = EmitterConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration in {config_path}:\n{exc}") from exc

    logger.debug("Loaded configuration from %s", config_path)
    _config_cache[cache_key] = config
    return config


def get_config() -> EmitterConfig:
    """Get the active configuration (cached).

    The user's config file wins over the built-in defaults when present.
    """
    user_path = user_config_path()
    if user_path.exists():
        return load_config(user_path)
    return load_config()


def resolve_config(path: Optional[Path] = None, **overrides: Any) -> EmitterConfig:
    """Load a config and apply command-line overrides on top of it.

    ``None`` overrides are ignored so unset flags keep the file's values.
    The merged result is validated again.

    Raises:
        ConfigurationError: The file or the merged values are invalid.
    """
    base = load_config(path) if path else get_config()
    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return base

    try:
        return EmitterConfig.model_validate({**base.model_dump(), **updates})
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration:\n{exc}") from exc


def clear_cache() -> None:
    """Clear the config cache — useful for testing."""
    _config_cache.clear()
