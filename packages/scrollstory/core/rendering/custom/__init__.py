"""Built-in custom renderers."""

from scrollstory.core.rendering.custom.challenge_cards import (
    CARD_INDEX_ATTR,
    ChallengeCardsRenderer,
)
from scrollstory.core.rendering.custom.checklist import ChecklistRenderer
from scrollstory.core.rendering.custom.starfield import StarfieldRenderer
from scrollstory.core.rendering.registry import RendererRegistry


def load_builtin_renderers() -> RendererRegistry:
    """Create a RendererRegistry with all built-in renderers registered.

    Returns:
        RendererRegistry with starfield, challenge-cards and checklist.
    """
    registry = RendererRegistry()
    registry.register(StarfieldRenderer())
    registry.register(ChallengeCardsRenderer())
    registry.register(ChecklistRenderer())
    return registry


__all__ = [
    "CARD_INDEX_ATTR",
    "ChallengeCardsRenderer",
    "ChecklistRenderer",
    "StarfieldRenderer",
    "load_builtin_renderers",
]
