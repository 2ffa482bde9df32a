"""Tests for positioning helpers."""

from __future__ import annotations

import pytest

from scrollstory.core.geometry.positioning import (
    POSITION_PRESETS,
    circular_positions,
    column_layout,
    get_position,
    scattered_positions,
)


class TestPresets:
    """Tests for position presets."""

    def test_get_position_returns_copy(self) -> None:
        pos = get_position("top-left")
        pos["top"] = "99vh"
        assert POSITION_PRESETS["top-left"]["top"] == "5vh"

    def test_unknown_preset(self) -> None:
        with pytest.raises(KeyError, match="Available"):
            get_position("nowhere")

    def test_every_preset_has_both_axes(self) -> None:
        for name, pos in POSITION_PRESETS.items():
            assert {"top", "bottom"} & pos.keys(), name
            assert {"left", "right"} & pos.keys(), name


class TestLayouts:
    """Tests for layout helpers."""

    def test_column_layout_sides(self) -> None:
        left = column_layout("left")
        right = column_layout("right")
        assert left["left"] == "3vw"
        assert "right" not in left
        assert right["alignItems"] == "flex-end"

    def test_scattered_reproducible(self) -> None:
        assert scattered_positions(10, seed=3) == scattered_positions(10, seed=3)

    def test_scattered_avoids_center(self) -> None:
        for pos in scattered_positions(200, exclusion_radius=0.3, seed=11):
            left = float(pos["left"].rstrip("%"))
            top = float(pos["top"].rstrip("%"))
            assert not (abs(left - 50) < 15 and abs(top - 50) < 15)

    def test_scattered_rejects_full_exclusion(self) -> None:
        with pytest.raises(ValueError):
            scattered_positions(5, exclusion_radius=2.0)

    def test_circular_positions(self) -> None:
        positions = circular_positions(4, radius="20vw")
        assert len(positions) == 4
        assert positions[0]["left"] == "calc(50% + 1.0000 * 20vw)"
        assert circular_positions(0) == []
