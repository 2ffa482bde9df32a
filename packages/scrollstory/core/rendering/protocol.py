"""Renderer protocol and node models.

Renderers do not touch a real document. They produce ``RenderedNode``
trees carrying tag, classes, inline style and depth, which a host turns
into elements.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from scrollstory.core.geometry.bounds import Viewport
from scrollstory.core.rendering.styles import to_css
from scrollstory.core.scene.models import Card


class RenderedNode(BaseModel):
    """One element of a rendered section.

    Attributes:
        tag: Element tag name.
        classes: CSS classes.
        style: Inline style (kebab-case property names).
        depth: Stacking depth (z-index).
        section_id: Owning section.
        text: Text or inline markup content.
        attributes: Extra element attributes.
        children: Child nodes.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    tag: str = "div"
    classes: list[str] = Field(default_factory=list)
    style: dict[str, str] = Field(default_factory=dict)
    depth: int = 0
    section_id: str
    text: str | None = None
    attributes: dict[str, str] = Field(default_factory=dict)
    children: list[RenderedNode] = Field(default_factory=list)

    @property
    def css(self) -> str:
        return to_css(self.style)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def with_style(self, **updates: str) -> RenderedNode:
        """Copy with style declarations replaced (``_`` in keys becomes ``-``)."""
        style = dict(self.style)
        style.update({k.replace("_", "-"): v for k, v in updates.items()})
        return self.model_copy(update={"style": style})

    def walk(self) -> Iterator[RenderedNode]:
        """This node and every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


class RenderContext(BaseModel):
    """Context handed to custom renderers.

    Attributes:
        section_id: Section being rendered.
        viewport: Viewport used for layout estimates.
        cards: The section's sequenced cards.
        seed: Seed for renderers with random layouts.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    section_id: str
    viewport: Viewport = Field(default_factory=Viewport)
    cards: list[Card] = Field(default_factory=list)
    seed: int | None = None


@runtime_checkable
class CustomRenderer(Protocol):
    """Protocol for custom layer renderers.

    Each renderer owns one renderer key and turns the layer's opaque config
    into a node tree at the layer's depth.
    """

    @property
    def renderer_key(self) -> str:
        """Key custom layers use to select this renderer."""
        ...

    @property
    def renderer_version(self) -> str:
        """Renderer version string for deterministic output tracking."""
        ...

    def render(
        self,
        config: Mapping[str, Any],
        ctx: RenderContext,
        depth: int,
    ) -> RenderedNode:
        """Render a custom layer.

        Args:
            config: Layer config, passed through untouched.
            ctx: Rendering context.
            depth: Layer depth.

        Returns:
            Root node of the rendered visual.
        """
        ...


__all__ = [
    "CustomRenderer",
    "RenderContext",
    "RenderedNode",
]
