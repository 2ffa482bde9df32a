"""Helper for building inline CSS style mappings.

Style mappings keep the property names as written (camelCase or kebab-case);
``to_css`` normalizes them to kebab-case when serializing.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def css_property(name: str) -> str:
    """Normalize a property name to kebab-case (``zIndex`` -> ``z-index``)."""
    if "-" in name:
        return name.lower()
    return _CAMEL_BOUNDARY.sub("-", name).lower()


def format_opacity(value: float) -> str:
    """Opacity as a short CSS number (``1``, ``0.5``, ``0.1235``)."""
    return f"{round(value, 4):g}"


def to_css(style: Mapping[str, Any]) -> str:
    """Serialize a style mapping to a CSS declaration string.

    Example:
        >>> to_css({"zIndex": 100, "opacity": 0})
        'z-index: 100; opacity: 0;'
    """
    return " ".join(f"{css_property(k)}: {v};" for k, v in style.items())


class StyleBuilder:
    """Fluent builder for inline style mappings.

    Example:
        >>> b = StyleBuilder()
        >>> b.add("position", "fixed").add_depth(3)
        >>> b.build()
        {'position': 'fixed', 'z-index': '3'}
    """

    def __init__(self) -> None:
        self._style: dict[str, str] = {}

    def add(self, prop: str, value: Any) -> StyleBuilder:
        """Add a declaration; ``None`` values are skipped.

        Args:
            prop: CSS property name
            value: Property value

        Returns:
            Self for chaining.
        """
        if value is not None:
            self._style[css_property(prop)] = str(value)
        return self

    def add_all(self, style: Mapping[str, Any]) -> StyleBuilder:
        for prop, value in style.items():
            self.add(prop, value)
        return self

    def add_depth(self, depth: int) -> StyleBuilder:
        return self.add("z-index", depth)

    def add_fixed_fill(self) -> StyleBuilder:
        """Pin the element over the whole viewport."""
        return (
            self.add("position", "fixed")
            .add("top", 0)
            .add("left", 0)
            .add("width", "100%")
            .add("height", "100vh")
        )

    def add_hidden_fade(self, transition: str = "opacity 0.3s ease-out") -> StyleBuilder:
        """Start transparent; opacity changes animate."""
        return self.add("opacity", 0).add("transition", transition)

    def build(self) -> dict[str, str]:
        return dict(self._style)


__all__ = [
    "StyleBuilder",
    "css_property",
    "format_opacity",
    "to_css",
]
