"""Scroll event wiring.

``ScrollEvents`` stands in for the host's scroll/load/resize notifications;
``setup_scroll_behavior`` attaches a controller to it and runs the first
pass immediately so the initial state is correct before any scroll.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from scrollstory.core.geometry.bounds import Viewport
from scrollstory.core.runtime.controller import Clock, ScrollController
from scrollstory.core.runtime.store import VisualStateStore
from scrollstory.core.scene.models import Scene
from scrollstory.core.timing.constants import TimingConstants

logger = logging.getLogger(__name__)


class ScrollEvents:
    """Synchronous event hub for scroll, load and resize notifications.

    Args:
        offset: Initial scroll offset
    """

    def __init__(self, offset: float = 0.0) -> None:
        self.offset = offset
        self._scroll: list[Callable[[float], None]] = []
        self._load: list[Callable[[], None]] = []
        self._resize: list[Callable[[Viewport], None]] = []

    def on_scroll(self, handler: Callable[[float], None]) -> None:
        self._scroll.append(handler)

    def on_load(self, handler: Callable[[], None]) -> None:
        self._load.append(handler)

    def on_resize(self, handler: Callable[[Viewport], None]) -> None:
        self._resize.append(handler)

    def emit_scroll(self, offset: float) -> None:
        """Record a new scroll offset and notify scroll handlers."""
        self.offset = offset
        for handler in self._scroll:
            handler(offset)

    def emit_load(self) -> None:
        for handler in self._load:
            handler()

    def emit_resize(self, viewport: Viewport) -> None:
        for handler in self._resize:
            handler(viewport)

    @property
    def handler_count(self) -> int:
        return len(self._scroll) + len(self._load) + len(self._resize)


def setup_scroll_behavior(
    scene: Scene,
    viewport: Viewport,
    events: ScrollEvents,
    *,
    default_fade_zone: float = 0.7,
    store: VisualStateStore | None = None,
    constants: TimingConstants | None = None,
    card_exit_delay_s: float = 4.6,
    trailing_transition: float = 0.3,
    reset_opacity: float = 0.5,
    clock: Clock = time.monotonic,
) -> None:
    """Attach scroll handling for a scene to an event hub.

    Registers the controller on scroll, load and resize, then runs one
    pass at the hub's current offset. Results land in ``store``.

    Args:
        scene: Validated scene
        viewport: Current viewport
        events: Event hub to register on
        default_fade_zone: Fade zone for sections declaring none
        store: State store the controller writes to
        constants: Timing constants
        card_exit_delay_s: Time from a card's reveal to its exit transition
        trailing_transition: Fade-in distance of the trailing element
        reset_opacity: Opacity below which card sequences reset
        clock: Monotonic time source in seconds
    """
    controller = ScrollController(
        scene,
        viewport,
        store,
        default_fade_zone=default_fade_zone,
        constants=constants,
        card_exit_delay_s=card_exit_delay_s,
        trailing_transition=trailing_transition,
        reset_opacity=reset_opacity,
        clock=clock,
    )

    def handle_resize(new_viewport: Viewport) -> None:
        controller.resize(new_viewport)
        controller.update(events.offset)

    events.on_scroll(controller.update)
    events.on_load(lambda: controller.update(events.offset))
    events.on_resize(handle_resize)

    logger.info(
        "Scroll behavior attached: %d sections, default fade zone %.2f",
        len(controller.scene.sections),
        default_fade_zone,
    )
    controller.update(events.offset)


__all__ = [
    "ScrollEvents",
    "setup_scroll_behavior",
]
