"""Configuration management for scrollstory."""

from scrollstory.core.config.loader import (
    apply_logging,
    detect_format,
    load_config,
    load_engine_config,
    load_scene,
)
from scrollstory.core.config.models import EngineConfig, LoggingConfig, RuntimeConfig

__all__ = [
    # Loaders
    "apply_logging",
    "detect_format",
    "load_config",
    "load_engine_config",
    "load_scene",
    # Models
    "EngineConfig",
    "LoggingConfig",
    "RuntimeConfig",
]
