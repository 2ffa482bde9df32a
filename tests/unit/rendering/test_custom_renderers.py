"""Tests for the built-in custom renderers."""

from __future__ import annotations

import pytest

from scrollstory.core.rendering.custom import (
    ChallengeCardsRenderer,
    ChecklistRenderer,
    StarfieldRenderer,
)
from scrollstory.core.rendering.protocol import RenderContext


class TestStarfieldRenderer:
    """Tests for StarfieldRenderer."""

    def test_star_count(self) -> None:
        ctx = RenderContext(section_id="s")
        node = StarfieldRenderer().render({"count": 25, "seed": 4}, ctx, 2)
        assert len(node.children) == 25
        assert node.has_class("starfield")
        assert node.depth == 2

    def test_seeded_layout_reproducible(self) -> None:
        ctx = RenderContext(section_id="s", seed=9)
        first = StarfieldRenderer().render({"count": 10}, ctx, 1)
        second = StarfieldRenderer().render({"count": 10}, ctx, 1)
        assert first == second

    def test_stars_avoid_focal_zone(self) -> None:
        ctx = RenderContext(section_id="s")
        node = StarfieldRenderer().render({"count": 150, "seed": 2}, ctx, 1)
        for star in node.children:
            left = float(star.style["left"].rstrip("%"))
            top = float(star.style["top"].rstrip("%"))
            assert not (abs(left - 50) < 15 and abs(top - 50) < 15)


class TestChallengeCardsRenderer:
    """Tests for ChallengeCardsRenderer."""

    def test_cards_from_config(self) -> None:
        config = {"cards": [{"text": "A", "side": "right"}, {"text": "B"}]}
        node = ChallengeCardsRenderer().render(config, RenderContext(section_id="s"), 4)
        left, right = node.children
        assert left.has_class("challenge-column-left")
        assert [c.text for c in left.children] == ["B"]
        assert [c.text for c in right.children] == ["A"]
        assert right.children[0].attributes["data-card-index"] == "0"


class TestChecklistRenderer:
    """Tests for ChecklistRenderer."""

    def test_title_and_items(self) -> None:
        config = {"title": "Before launch", "items": ["Owner", "Rollback"], "side": "left"}
        node = ChecklistRenderer().render(config, RenderContext(section_id="s"), 3)
        title, items = node.children
        assert title.text == "Before launch"
        assert [i.text for i in items.children] == ["Owner", "Rollback"]
        assert node.style["left"] == "5vw"
        assert node.css.startswith("position: fixed; top: 50%; left: 5vw;")

    def test_invalid_side(self) -> None:
        with pytest.raises(ValueError, match="side"):
            ChecklistRenderer().render({"side": "top"}, RenderContext(section_id="s"), 3)
