"""Configuration and scene loading with JSON and YAML support."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from scrollstory.core.config.models import EngineConfig
from scrollstory.core.scene.models import Scene
from scrollstory.core.scene.validator import build_scene
from scrollstory.core.utils.logging import configure_logging

if TYPE_CHECKING:
    from scrollstory.core.rendering.registry import RendererRegistry

logger = logging.getLogger(__name__)


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("scene.json")
        'json'
        >>> detect_format("scene.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return a raw configuration dictionary.

    Args:
        path: Path to a .json, .yaml or .yml file

    Returns:
        Raw configuration dictionary (empty for an empty YAML file)

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the format is unsupported, the content is invalid or
            the top level is not a mapping
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            with path.open("r", encoding="utf-8") as f:
                content = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    else:
        try:
            with path.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        # safe_load returns None for empty files
        if content is None:
            content = {}

    if not isinstance(content, dict):
        raise ValueError(
            f"Expected a mapping at the top level of {path}, got {type(content).__name__}"
        )
    return content


def load_engine_config(path: str | Path | None = None) -> EngineConfig:
    """Load and validate engine configuration.

    Args:
        path: Path to a config file. Defaults are used when None.

    Returns:
        Validated EngineConfig

    Raises:
        ValidationError: If config values are invalid
    """
    if path is None:
        return EngineConfig()

    config = EngineConfig.model_validate(load_config(path))
    logger.debug("Loaded engine config from %s", path)
    return config


def load_scene(path: str | Path, renderers: RendererRegistry | None = None) -> Scene:
    """Load and validate a scene file.

    Args:
        path: Path to a scene file (.json, .yaml or .yml)
        renderers: Registry used to check custom renderer keys

    Returns:
        Validated Scene

    Raises:
        SceneValidationError: If the scene has structural errors
    """
    scene = build_scene(load_config(path), renderers)
    logger.info("Loaded scene from %s: %d sections", path, len(scene.sections))
    return scene


def apply_logging(config: EngineConfig) -> None:
    """Configure logging from an engine config."""
    configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )


__all__ = [
    "apply_logging",
    "detect_format",
    "load_config",
    "load_engine_config",
    "load_scene",
]
