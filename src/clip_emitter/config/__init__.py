"""Emitter configuration package."""

from clip_emitter.config.loader import get_config, load_config, resolve_config
from clip_emitter.config.models import EmitterConfig

__all__ = ["EmitterConfig", "get_config", "load_config", "resolve_config"]
