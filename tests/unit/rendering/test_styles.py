"""Tests for style helpers."""

from __future__ import annotations

from scrollstory.core.rendering.styles import StyleBuilder, css_property, format_opacity, to_css


class TestStyles:
    """Tests for StyleBuilder and CSS serialization."""

    def test_css_property(self) -> None:
        assert css_property("zIndex") == "z-index"
        assert css_property("flexDirection") == "flex-direction"
        assert css_property("max-width") == "max-width"

    def test_builder_skips_none(self) -> None:
        style = StyleBuilder().add("top", None).add("left", "5vw").add_depth(3).build()
        assert style == {"left": "5vw", "z-index": "3"}

    def test_add_all_normalizes(self) -> None:
        style = StyleBuilder().add_all({"maxWidth": "15vw"}).build()
        assert style == {"max-width": "15vw"}

    def test_to_css(self) -> None:
        assert to_css({"zIndex": 100, "opacity": 0}) == "z-index: 100; opacity: 0;"

    def test_format_opacity(self) -> None:
        assert format_opacity(1.0) == "1"
        assert format_opacity(0.0) == "0"
        assert format_opacity(0.5) == "0.5"
        assert format_opacity(0.123456) == "0.1235"
