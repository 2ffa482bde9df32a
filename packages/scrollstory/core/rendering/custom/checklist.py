"""Checklist renderer."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from scrollstory.core.rendering.protocol import RenderContext, RenderedNode
from scrollstory.core.rendering.styles import StyleBuilder


class ChecklistRenderer:
    """Renderer for the 'checklist' custom layer.

    Supported config keys:
        - title: str (optional)
        - items: list[str]
        - side: "left" | "right" (default "right")
    """

    @property
    def renderer_key(self) -> str:
        return "checklist"

    @property
    def renderer_version(self) -> str:
        return "1.0.0"

    def render(
        self,
        config: Mapping[str, Any],
        ctx: RenderContext,
        depth: int,
    ) -> RenderedNode:
        side = config.get("side", "right")
        if side not in ("left", "right"):
            raise ValueError(f"checklist side must be 'left' or 'right', got {side!r}")

        children: list[RenderedNode] = []
        title = config.get("title")
        if title:
            children.append(
                RenderedNode(
                    tag="h3",
                    classes=["checklist-title"],
                    section_id=ctx.section_id,
                    depth=depth,
                    text=str(title),
                )
            )
        items = [
            RenderedNode(
                tag="li",
                classes=["checklist-item"],
                section_id=ctx.section_id,
                depth=depth,
                text=str(item),
            )
            for item in config.get("items", [])
        ]
        children.append(
            RenderedNode(
                tag="ul",
                classes=["checklist-items"],
                section_id=ctx.section_id,
                depth=depth,
                children=items,
            )
        )

        style = (
            StyleBuilder()
            .add("position", "fixed")
            .add("top", "50%")
            .add(side, "5vw")
            .add("transform", "translateY(-50%)")
            .add("max-width", "25vw")
            .add_depth(depth)
            .add_hidden_fade()
            .build()
        )
        return RenderedNode(
            classes=["visual-container", "checklist"],
            section_id=ctx.section_id,
            depth=depth,
            style=style,
            children=children,
        )


__all__ = ["ChecklistRenderer"]
