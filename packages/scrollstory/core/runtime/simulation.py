"""Offline scroll simulation.

Samples a scene's visibility across its whole scroll range with a fixed
clock. Used by the CLI preview and by round-trip checks.
"""

from __future__ import annotations

from dataclasses import dataclass

from scrollstory.core.geometry.bounds import Viewport
from scrollstory.core.runtime.controller import ScrollController
from scrollstory.core.runtime.store import SectionVisual, TrailingVisual
from scrollstory.core.scene.models import Scene
from scrollstory.core.timing.constants import TimingConstants
from scrollstory.core.utils.math import sample_range


@dataclass(frozen=True)
class ScrollSample:
    """Store snapshot at one scroll offset."""

    offset: float
    sections: dict[str, SectionVisual]
    trailing: TrailingVisual

    def opacity(self, section_id: str) -> float:
        return self.sections[section_id].opacity

    @property
    def visible_ids(self) -> list[str]:
        return [sid for sid, visual in self.sections.items() if visual.opacity > 0]


def simulate_scroll(
    scene: Scene,
    viewport: Viewport | None = None,
    samples: int = 50,
    *,
    default_fade_zone: float | None = None,
    constants: TimingConstants | None = None,
    overscroll: float = 1.0,
) -> list[ScrollSample]:
    """Scroll a scene from top to bottom and record every tick.

    Offsets run from one viewport above the first section to ``overscroll``
    viewports past the last section's bottom edge.

    Args:
        scene: Validated scene
        viewport: Viewport (defaults to 1440x900)
        samples: Number of evenly spaced offsets (>= 2)
        default_fade_zone: Fade zone for sections declaring none
        constants: Timing constants
        overscroll: Viewport heights to keep scrolling past the end

    Returns:
        One ScrollSample per offset
    """
    viewport = viewport or Viewport()
    controller = ScrollController(
        scene,
        viewport,
        default_fade_zone=default_fade_zone,
        constants=constants,
        clock=lambda: 0.0,
    )
    start = -viewport.height
    stop = controller.layout.total_height + viewport.height * overscroll

    result: list[ScrollSample] = []
    for offset in sample_range(start, stop, samples):
        controller.update(offset)
        result.append(
            ScrollSample(
                offset=offset,
                sections=controller.store.snapshot(),
                trailing=controller.store.trailing,
            )
        )
    return result


__all__ = [
    "ScrollSample",
    "simulate_scroll",
]
