"""Starfield renderer.

Scattered twinkling dots that keep clear of the focal zone.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import numpy as np

from scrollstory.core.geometry.positioning import scattered_positions
from scrollstory.core.rendering.protocol import RenderContext, RenderedNode
from scrollstory.core.rendering.styles import StyleBuilder


class StarfieldRenderer:
    """Renderer for the 'starfield' custom layer.

    Supported config keys:
        - count: int (default 100)
        - color: str (default "#7A9E9F")
        - exclusion_radius: float (default 0.3)
        - seed: int (default: the context seed)
    """

    @property
    def renderer_key(self) -> str:
        return "starfield"

    @property
    def renderer_version(self) -> str:
        return "1.0.0"

    def render(
        self,
        config: Mapping[str, Any],
        ctx: RenderContext,
        depth: int,
    ) -> RenderedNode:
        count = int(config.get("count", 100))
        color = config.get("color", "#7A9E9F")
        seed = config.get("seed", ctx.seed)

        positions = scattered_positions(
            count,
            avoid_center=True,
            exclusion_radius=float(config.get("exclusion_radius", 0.3)),
            seed=seed,
        )
        # Separate stream so sizes don't shift positions
        rng = np.random.default_rng(None if seed is None else seed + 1)
        sizes = rng.uniform(1.0, 5.0, size=count)
        delays = rng.uniform(0.0, 3.0, size=count)

        stars = [
            RenderedNode(
                classes=["star"],
                section_id=ctx.section_id,
                depth=depth,
                style=StyleBuilder()
                .add("position", "absolute")
                .add("background", color)
                .add("border-radius", "50%")
                .add_all(pos)
                .add("width", f"{size:.2f}px")
                .add("height", f"{size:.2f}px")
                .add("animation", "twinkle 3s ease-in-out infinite")
                .add("animation-delay", f"{delay:.2f}s")
                .build(),
            )
            for pos, size, delay in zip(positions, sizes, delays, strict=True)
        ]

        return RenderedNode(
            classes=["visual-container", "starfield"],
            section_id=ctx.section_id,
            depth=depth,
            style=StyleBuilder().add_fixed_fill().add_depth(depth).add_hidden_fade().build(),
            children=stars,
        )


__all__ = ["StarfieldRenderer"]
