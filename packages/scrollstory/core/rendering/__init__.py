"""Rendering domain - layer dispatch, custom renderers and node trees."""

from scrollstory.core.rendering.builder import (
    SectionNodes,
    apply_visuals,
    build_section,
    render_focal,
    render_layer,
    render_scene,
)
from scrollstory.core.rendering.custom import (
    ChallengeCardsRenderer,
    ChecklistRenderer,
    StarfieldRenderer,
    load_builtin_renderers,
)
from scrollstory.core.rendering.protocol import CustomRenderer, RenderContext, RenderedNode
from scrollstory.core.rendering.registry import RendererRegistry, UnknownRendererError
from scrollstory.core.rendering.styles import StyleBuilder, format_opacity, to_css

__all__ = [
    "ChallengeCardsRenderer",
    "ChecklistRenderer",
    "CustomRenderer",
    "RenderContext",
    "RenderedNode",
    "RendererRegistry",
    "SectionNodes",
    "StarfieldRenderer",
    "StyleBuilder",
    "UnknownRendererError",
    "apply_visuals",
    "build_section",
    "format_opacity",
    "load_builtin_renderers",
    "render_focal",
    "render_layer",
    "render_scene",
    "to_css",
]
