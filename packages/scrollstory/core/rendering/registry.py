"""Custom renderer registry.

Maps custom renderer keys to CustomRenderer instances. Scenes are checked
against the registry when bound, so an unknown key fails before anything
is rendered.
"""

from __future__ import annotations

import logging

from scrollstory.core.rendering.protocol import CustomRenderer, RenderContext, RenderedNode
from scrollstory.core.scene.models import CustomLayer, Scene

logger = logging.getLogger(__name__)


class UnknownRendererError(KeyError):
    """Raised when a custom layer names a renderer that is not registered.

    Attributes:
        key: The unknown renderer key.
        available: Registered keys at the time of the lookup.
        locations: ``(section_id, layer_index)`` pairs using the key.
    """

    def __init__(
        self,
        key: str,
        available: list[str],
        locations: list[tuple[str, int]] | None = None,
    ) -> None:
        self.key = key
        self.available = available
        self.locations = locations or []
        where = ""
        if self.locations:
            where = " (used by " + ", ".join(
                f"section '{sid}' layer {idx}" for sid, idx in self.locations
            ) + ")"
        self.message = (
            f"Custom renderer '{key}' is not registered{where}. "
            f"Available: {', '.join(available) or 'none'}"
        )
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class RendererRegistry:
    """Registry for CustomRenderer instances.

    Example:
        >>> registry = RendererRegistry()
        >>> registry.register(StarfieldRenderer())
        >>> "starfield" in registry
        True
    """

    def __init__(self) -> None:
        self._renderers: dict[str, CustomRenderer] = {}

    def register(self, renderer: CustomRenderer) -> None:
        """Register a custom renderer.

        Args:
            renderer: CustomRenderer implementation to register.
        """
        key = renderer.renderer_key
        if key in self._renderers:
            logger.warning(
                "Overwriting renderer for key '%s' (old=%s, new=%s)",
                key,
                type(self._renderers[key]).__name__,
                type(renderer).__name__,
            )
        self._renderers[key] = renderer
        logger.debug("Registered renderer '%s' for key '%s'", type(renderer).__name__, key)

    def get(self, key: str) -> CustomRenderer | None:
        """Get the renderer for a key, or None if not registered."""
        return self._renderers.get(key)

    def require(self, key: str) -> CustomRenderer:
        """Get the renderer for a key.

        Raises:
            UnknownRendererError: If the key is not registered
        """
        renderer = self._renderers.get(key)
        if renderer is None:
            raise UnknownRendererError(key, self.registered_types)
        return renderer

    def check_scene(self, scene: Scene) -> None:
        """Check that every custom layer in a scene has a renderer.

        Raises:
            UnknownRendererError: For the first unknown key, listing every
                layer that uses it
        """
        missing: dict[str, list[tuple[str, int]]] = {}
        for section in scene.sections:
            for idx, layer in enumerate(section.layers):
                if isinstance(layer, CustomLayer) and layer.renderer not in self._renderers:
                    missing.setdefault(layer.renderer, []).append((section.id, idx))

        if missing:
            key, locations = next(iter(missing.items()))
            if len(missing) > 1:
                logger.error("Unknown custom renderers: %s", ", ".join(sorted(missing)))
            raise UnknownRendererError(key, self.registered_types, locations)

    def render(self, layer: CustomLayer, ctx: RenderContext) -> RenderedNode:
        """Dispatch a custom layer to its renderer.

        Raises:
            UnknownRendererError: If the layer's key is not registered
        """
        node = self.require(layer.renderer).render(layer.config, ctx, layer.depth)
        if node.depth != layer.depth:
            node = node.model_copy(update={"depth": layer.depth})
        return node

    @property
    def registered_types(self) -> list[str]:
        """List all registered renderer keys."""
        return sorted(self._renderers.keys())

    def __contains__(self, key: object) -> bool:
        return key in self._renderers

    def __len__(self) -> int:
        return len(self._renderers)


__all__ = [
    "RendererRegistry",
    "UnknownRendererError",
]
