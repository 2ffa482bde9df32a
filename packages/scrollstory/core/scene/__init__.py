"""Scene domain - declarative description of sections and their layers."""

from scrollstory.core.scene.models import (
    BackgroundLayer,
    Card,
    CustomLayer,
    FocalConfig,
    ImageLayer,
    Layer,
    Position,
    Scene,
    ScrollConfig,
    Section,
    Size,
)
from scrollstory.core.scene.validator import (
    SceneValidationError,
    SchemaValidationResult,
    build_scene,
    validate_schema,
)
from scrollstory.core.scene.vocabulary import (
    FOCAL_DEPTH,
    MAX_LAYER_DEPTH,
    MIN_LAYER_DEPTH,
    CardPhase,
    FocalAlign,
    LayerType,
    VisibilityState,
)

__all__ = [
    "FOCAL_DEPTH",
    "MAX_LAYER_DEPTH",
    "MIN_LAYER_DEPTH",
    "BackgroundLayer",
    "Card",
    "CardPhase",
    "CustomLayer",
    "FocalAlign",
    "FocalConfig",
    "ImageLayer",
    "Layer",
    "LayerType",
    "Position",
    "Scene",
    "SceneValidationError",
    "SchemaValidationResult",
    "ScrollConfig",
    "Section",
    "Size",
    "VisibilityState",
    "build_scene",
    "validate_schema",
]
