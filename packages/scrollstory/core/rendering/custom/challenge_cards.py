"""Challenge cards renderer.

Two columns of cards pinned to the viewport edges. Cards start hidden; the
scroll controller reveals them one at a time.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from scrollstory.core.geometry.positioning import column_layout
from scrollstory.core.rendering.protocol import RenderContext, RenderedNode
from scrollstory.core.rendering.styles import StyleBuilder
from scrollstory.core.scene.models import Card

CARD_INDEX_ATTR = "data-card-index"


class ChallengeCardsRenderer:
    """Renderer for the 'challenge-cards' custom layer.

    Cards come from the section. A ``cards`` list in the config
    (``{"text": ..., "side": "left" | "right"}``) is used when the section
    has none.
    """

    @property
    def renderer_key(self) -> str:
        return "challenge-cards"

    @property
    def renderer_version(self) -> str:
        return "1.0.0"

    def render(
        self,
        config: Mapping[str, Any],
        ctx: RenderContext,
        depth: int,
    ) -> RenderedNode:
        cards = ctx.cards or [Card.model_validate(c) for c in config.get("cards", [])]

        columns: dict[str, list[RenderedNode]] = {"left": [], "right": []}
        for idx, card in enumerate(cards):
            columns[card.side].append(
                RenderedNode(
                    classes=["challenge"],
                    section_id=ctx.section_id,
                    depth=depth,
                    text=card.text,
                    attributes={CARD_INDEX_ATTR: str(idx)},
                    style=StyleBuilder()
                    .add("opacity", 0)
                    .add("transform", "scale(0.8)")
                    .add("transition", "opacity 0.4s ease-out, transform 0.4s ease-out")
                    .build(),
                )
            )

        children = [
            RenderedNode(
                classes=["challenge-column", f"challenge-column-{side}"],
                section_id=ctx.section_id,
                depth=depth,
                style=StyleBuilder().add_all(column_layout(side)).build(),
                children=nodes,
            )
            for side, nodes in columns.items()
        ]

        return RenderedNode(
            classes=["visual-container", "challenge-cards"],
            section_id=ctx.section_id,
            depth=depth,
            style=StyleBuilder().add_fixed_fill().add_depth(depth).build(),
            children=children,
        )


__all__ = ["CARD_INDEX_ATTR", "ChallengeCardsRenderer"]
