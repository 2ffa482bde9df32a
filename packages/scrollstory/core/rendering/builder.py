"""Section builder.

Renders a section into layer nodes plus one focal node, and applies the
scroll controller's visual decisions back onto those nodes. The focal node
always sits at ``FOCAL_DEPTH``; layer nodes keep their own depth, which the
schema caps below it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import assert_never

from scrollstory.core.geometry.bounds import FocalMetrics, Viewport, is_centering_offset
from scrollstory.core.rendering.custom.challenge_cards import CARD_INDEX_ATTR
from scrollstory.core.rendering.protocol import RenderContext, RenderedNode
from scrollstory.core.rendering.registry import RendererRegistry
from scrollstory.core.rendering.styles import StyleBuilder, format_opacity
from scrollstory.core.runtime.store import SectionVisual
from scrollstory.core.scene.models import (
    BackgroundLayer,
    CustomLayer,
    ImageLayer,
    Layer,
    Scene,
    Section,
)
from scrollstory.core.scene.vocabulary import FOCAL_DEPTH, CardPhase

logger = logging.getLogger(__name__)

DEFAULT_FOCAL_TOP = "50%"
DEFAULT_FOCAL_FONT = FocalMetrics().default_font_size
EXIT_AT_ATTR = "data-exit-at"


@dataclass(frozen=True)
class SectionNodes:
    """Rendered nodes of one section.

    Attributes:
        container: Scroll-height container that drives the section's geometry.
        layers: Layer nodes in declaration order.
        focal: Focal text node (always at FOCAL_DEPTH).
    """

    container: RenderedNode
    layers: list[RenderedNode] = field(default_factory=list)
    focal: RenderedNode | None = None

    @property
    def section_id(self) -> str:
        return self.container.section_id

    @property
    def painted(self) -> list[RenderedNode]:
        """Nodes painted over the viewport, bottom to top."""
        nodes = sorted(self.layers, key=lambda n: n.depth)
        if self.focal is not None:
            nodes.append(self.focal)
        return nodes


def render_background(layer: BackgroundLayer, ctx: RenderContext) -> RenderedNode:
    style = (
        StyleBuilder()
        .add_fixed_fill()
        .add_hidden_fade()
        .add_depth(layer.depth)
        .add("background", layer.color)
        .build()
    )
    return RenderedNode(
        classes=["section-background"],
        section_id=ctx.section_id,
        depth=layer.depth,
        style=style,
    )


def render_image(layer: ImageLayer, ctx: RenderContext) -> RenderedNode:
    position = layer.position.model_dump(exclude_none=True) if layer.position else {}
    size = layer.size.model_dump(exclude_none=True) if layer.size else {}

    # 50% offsets center the image on that axis unless the opposite edge is pinned
    center_x = is_centering_offset(position.get("left")) and "right" not in position
    center_y = is_centering_offset(position.get("top")) and "bottom" not in position
    transform = None
    if center_x and center_y:
        transform = "translate(-50%, -50%)"
    elif center_x:
        transform = "translateX(-50%)"
    elif center_y:
        transform = "translateY(-50%)"

    style = (
        StyleBuilder()
        .add("position", "fixed")
        .add_all(position)
        .add("transform", transform)
        .add_all(size)
        .add_depth(layer.depth)
        .add_hidden_fade()
        .add("max-width", "100%")
        .add("object-fit", "contain")
        .add("animation", layer.animation)
        .build()
    )
    return RenderedNode(
        tag="img",
        classes=["section-image"],
        section_id=ctx.section_id,
        depth=layer.depth,
        attributes={"src": layer.src},
        style=style,
    )


def render_layer(layer: Layer, ctx: RenderContext, registry: RendererRegistry) -> RenderedNode:
    """Render one layer.

    Args:
        layer: Background, image or custom layer
        ctx: Rendering context
        registry: Custom renderer registry

    Returns:
        Layer node at the layer's depth

    Raises:
        UnknownRendererError: If a custom layer's key is not registered
    """
    match layer:
        case BackgroundLayer():
            return render_background(layer, ctx)
        case ImageLayer():
            return render_image(layer, ctx)
        case CustomLayer():
            return registry.render(layer, ctx)
        case _:
            assert_never(layer)


def render_focal(section: Section) -> RenderedNode:
    """Focal text node, fixed over the viewport at FOCAL_DEPTH."""
    focal = section.focal
    text = RenderedNode(
        tag="h1",
        classes=["section-text"],
        section_id=section.id,
        depth=FOCAL_DEPTH,
        text=focal.text,
        style=StyleBuilder()
        .add("font-size", focal.font_size or DEFAULT_FOCAL_FONT)
        .add("font-weight", 900)
        .add("text-align", focal.align.value)
        .add("color", focal.color)
        .add("max-width", "1000px")
        .add("margin", "0 auto")
        .add("line-height", 1.2)
        .build(),
    )
    style = (
        StyleBuilder()
        .add("position", "fixed")
        .add("top", focal.top or DEFAULT_FOCAL_TOP)
        .add("left", "50%")
        .add("transform", "translate(-50%, -50%)")
        .add("width", "100%")
        .add("max-width", "1200px")
        .add("padding", "40px")
        .add_depth(FOCAL_DEPTH)
        .add_hidden_fade()
        .add("pointer-events", "none")
        .build()
    )
    return RenderedNode(
        classes=["section-content"],
        section_id=section.id,
        depth=FOCAL_DEPTH,
        style=style,
        children=[text],
    )


def build_section(
    section: Section,
    registry: RendererRegistry,
    viewport: Viewport | None = None,
    seed: int | None = None,
) -> SectionNodes:
    """Render a section's container, layers and focal text.

    Args:
        section: Section with a computed ``scroll.height_vh``
        registry: Custom renderer registry
        viewport: Viewport for renderers that lay out against it
        seed: Seed for renderers with random layouts

    Returns:
        SectionNodes
    """
    ctx = RenderContext(
        section_id=section.id,
        viewport=viewport or Viewport(),
        cards=list(section.cards),
        seed=seed,
    )
    height = section.scroll.height_vh
    container = RenderedNode(
        classes=["fullscreen-section"],
        section_id=section.id,
        attributes={"id": section.id, "data-section-id": section.id},
        style=StyleBuilder()
        .add("height", f"{height}vh" if height is not None else None)
        .add("position", "relative")
        .build(),
    )
    layers = [render_layer(layer, ctx, registry) for layer in section.layers]
    logger.debug("Built section '%s': %d layers", section.id, len(layers))
    return SectionNodes(container=container, layers=layers, focal=render_focal(section))


def render_scene(
    scene: Scene,
    registry: RendererRegistry,
    viewport: Viewport | None = None,
    seed: int | None = None,
) -> dict[str, SectionNodes]:
    """Bind a scene to a registry and render every section.

    Raises:
        UnknownRendererError: If any custom layer's key is not registered
    """
    registry.check_scene(scene)
    return {s.id: build_section(s, registry, viewport, seed) for s in scene.sections}


def _apply_cards(node: RenderedNode, visual: SectionVisual) -> RenderedNode:
    classes = [c for c in node.classes if c not in ("section-active", "cards-exit")]
    if visual.sequence_armed:
        classes.append("section-active")
    if visual.cards and all(c.phase is CardPhase.EXITING for c in visual.cards):
        classes.append("cards-exit")

    def update(child: RenderedNode) -> RenderedNode:
        index = child.attributes.get(CARD_INDEX_ATTR)
        children = [update(c) for c in child.children]
        if index is None or int(index) >= len(visual.cards):
            return child.model_copy(update={"children": children})

        phase = visual.cards[int(index)].phase
        card_classes = [c for c in child.classes if c not in ("revealed", "exiting")]
        if phase is not CardPhase.PENDING:
            card_classes.append(phase.value)
        style = dict(child.style)
        style["opacity"] = "1" if phase is CardPhase.REVEALED else "0"
        style["transform"] = "scale(1)" if phase is CardPhase.REVEALED else "scale(0.8)"
        return child.model_copy(update={"classes": card_classes, "style": style})

    attributes = {k: v for k, v in node.attributes.items() if k != EXIT_AT_ATTR}
    if visual.next_exit_at is not None:
        attributes[EXIT_AT_ATTR] = f"{visual.next_exit_at:.3f}"
    updated = node.model_copy(update={"classes": classes, "attributes": attributes})
    return updated.model_copy(update={"children": [update(c) for c in node.children]})


def apply_visuals(nodes: SectionNodes, visual: SectionVisual) -> SectionNodes:
    """Apply a section's visual state to its rendered nodes.

    Off-screen sections get ``display: none``. Otherwise every node shows at
    the section opacity, except the card container, whose cards follow their
    own reveal phases. While a revealed card is waiting to exit, the container
    carries the deadline in ``data-exit-at`` (clock seconds) so the host can
    schedule the tick that applies it.

    Args:
        nodes: Rendered section
        visual: Visual state from the store

    Returns:
        New SectionNodes
    """
    display = "block" if visual.displayed else "none"
    opacity = format_opacity(visual.opacity)

    def update(node: RenderedNode) -> RenderedNode:
        if node.has_class("challenge-cards"):
            return _apply_cards(node, visual).with_style(display=display)
        return node.with_style(display=display, opacity=opacity)

    return SectionNodes(
        container=nodes.container,
        layers=[update(n) for n in nodes.layers],
        focal=update(nodes.focal) if nodes.focal is not None else None,
    )


__all__ = [
    "DEFAULT_FOCAL_FONT",
    "DEFAULT_FOCAL_TOP",
    "EXIT_AT_ATTR",
    "SectionNodes",
    "apply_visuals",
    "build_section",
    "render_background",
    "render_focal",
    "render_image",
    "render_layer",
    "render_scene",
]
