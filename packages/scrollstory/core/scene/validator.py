"""Structural validation of scene descriptions.

Runs before a scene is built so authors get every defect in one pass
instead of the first pydantic error. The checks here are the fatal ones;
geometric overlap is advisory and lives in ``scrollstory.core.geometry``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from scrollstory.core.geometry.positioning import POSITION_PRESETS
from scrollstory.core.scene.models import Scene
from scrollstory.core.scene.vocabulary import MAX_LAYER_DEPTH, MIN_LAYER_DEPTH, LayerType
from scrollstory.core.timing.constants import DEFAULT_TIMING

if TYPE_CHECKING:
    from scrollstory.core.rendering.registry import RendererRegistry

logger = logging.getLogger(__name__)

_DEFAULT_DEPTH = {LayerType.BACKGROUND.value: 0}
_LAYER_TYPES = {t.value for t in LayerType}


class SchemaValidationResult(BaseModel):
    """Outcome of structural validation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    valid: bool
    errors: list[str] = Field(default_factory=list)


class SceneValidationError(Exception):
    """Raised when a scene fails structural validation.

    Attributes:
        errors: Every defect found, in scene order.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        summary = "; ".join(self.errors[:3])
        if len(self.errors) > 3:
            summary += f"; ... ({len(self.errors) - 3} more)"
        super().__init__(f"Scene failed validation with {len(self.errors)} error(s): {summary}")


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _validate_layer(
    layer: Any,
    prefix: str,
    renderers: RendererRegistry | None,
) -> list[str]:
    if not isinstance(layer, Mapping):
        return [f"{prefix}: layer must be a mapping"]

    errors: list[str] = []
    layer_type = layer.get("type")

    depth = layer.get("depth", _DEFAULT_DEPTH.get(layer_type, 1))
    if not isinstance(depth, int) or isinstance(depth, bool):
        errors.append(f"{prefix}: depth {depth!r} must be an integer")
    elif depth > MAX_LAYER_DEPTH:
        errors.append(
            f"{prefix}: depth {depth} exceeds max of {MAX_LAYER_DEPTH} (focal zone protection)"
        )
    elif depth < MIN_LAYER_DEPTH:
        errors.append(f"{prefix}: depth {depth} is below min of {MIN_LAYER_DEPTH}")

    if layer_type not in _LAYER_TYPES:
        errors.append(f'{prefix}: invalid layer type "{layer_type}"')
        return errors

    if layer_type == LayerType.IMAGE.value:
        if not layer.get("src"):
            errors.append(f"{prefix}: image layer missing src")
        position = layer.get("position")
        if isinstance(position, str) and position not in POSITION_PRESETS:
            errors.append(f'{prefix}: unknown position preset "{position}"')

    elif layer_type == LayerType.CUSTOM.value:
        key = layer.get("renderer")
        if not key:
            errors.append(f"{prefix}: custom layer missing renderer key")
        elif renderers is not None and key not in renderers:
            errors.append(f'{prefix}: custom renderer "{key}" is not registered')

    return errors


def _validate_scroll(scroll: Any, has_cards: bool, prefix: str) -> list[str]:
    if scroll is None:
        return []
    if not isinstance(scroll, Mapping):
        return [f"{prefix}: scroll config must be a mapping"]

    hold = scroll.get("hold_zone")
    fade = scroll.get("fade_zone")
    if hold is None and not has_cards:
        # Card sections take their hold zone from the card timing instead
        hold = DEFAULT_TIMING.default_hold_zone
    if fade is None and not has_cards:
        fade = DEFAULT_TIMING.default_fade_zone
    if _is_number(hold) and _is_number(fade) and hold >= fade:
        return [f"{prefix}: hold zone {hold} must be less than fade zone {fade}"]
    return []


def _validate_cards(cards: Any, prefix: str) -> list[str]:
    if cards is None:
        return []
    if not isinstance(cards, list):
        return [f"{prefix}: cards must be a list"]
    return [
        f"{prefix}, card {k}: missing text"
        for k, card in enumerate(cards)
        if not isinstance(card, Mapping) or not card.get("text")
    ]


def validate_schema(
    scene: Mapping[str, Any] | Scene,
    renderers: RendererRegistry | None = None,
) -> SchemaValidationResult:
    """Validate a scene description, collecting every structural error.

    Args:
        scene: Raw scene mapping (as loaded from YAML/JSON) or a built Scene
        renderers: Optional registry; when given, custom layers must name a
            registered renderer key

    Returns:
        SchemaValidationResult with valid flag and all error messages
    """
    raw: Any = scene.model_dump(mode="json") if isinstance(scene, Scene) else scene

    sections = raw.get("sections") if isinstance(raw, Mapping) else None
    if not isinstance(sections, list):
        return SchemaValidationResult(valid=False, errors=['Scene must have a "sections" list'])
    if not sections:
        return SchemaValidationResult(
            valid=False, errors=["Scene must contain at least one section"]
        )

    errors: list[str] = []
    seen_ids: set[str] = set()

    for idx, section in enumerate(sections):
        prefix = f"Section {idx}"
        if not isinstance(section, Mapping):
            errors.append(f"{prefix}: must be a mapping")
            continue

        section_id = section.get("id")
        if not section_id or not isinstance(section_id, str):
            errors.append(f"{prefix}: missing id")
        elif section_id in seen_ids:
            errors.append(f'{prefix}: duplicate id "{section_id}"')
        else:
            seen_ids.add(section_id)

        focal = section.get("focal")
        if not isinstance(focal, Mapping):
            errors.append(f"{prefix}: missing focal config")
        elif not focal.get("text"):
            errors.append(f"{prefix}: focal missing text")

        layers = section.get("layers")
        if not isinstance(layers, list):
            errors.append(f"{prefix}: missing or invalid layers list")
        else:
            for layer_idx, layer in enumerate(layers):
                errors.extend(_validate_layer(layer, f"{prefix}, layer {layer_idx}", renderers))

        cards = section.get("cards")
        has_cards = isinstance(cards, list) and len(cards) > 0
        errors.extend(_validate_scroll(section.get("scroll"), has_cards, prefix))
        errors.extend(_validate_cards(cards, prefix))

    if errors:
        logger.debug("Scene validation found %d error(s)", len(errors))

    return SchemaValidationResult(valid=not errors, errors=errors)


def build_scene(
    raw: Mapping[str, Any],
    renderers: RendererRegistry | None = None,
) -> Scene:
    """Validate a raw scene description and build the Scene model.

    Args:
        raw: Scene mapping
        renderers: Optional registry used to check custom renderer keys

    Returns:
        Validated Scene

    Raises:
        SceneValidationError: If structural validation or model construction fails
    """
    result = validate_schema(raw, renderers)
    if not result.valid:
        raise SceneValidationError(result.errors)

    try:
        return Scene.model_validate(raw)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        ]
        raise SceneValidationError(errors) from e


__all__ = [
    "SceneValidationError",
    "SchemaValidationResult",
    "build_scene",
    "validate_schema",
]
