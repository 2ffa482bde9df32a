"""Tests for viewport geometry estimates."""

from __future__ import annotations

import pytest

from scrollstory.core.geometry.bounds import (
    DEFAULT_IMAGE_PX,
    BoundingBox,
    FocalMetrics,
    Viewport,
    estimate_font_px,
    focal_bounds,
    image_bounds,
    resolve_length,
)
from scrollstory.core.scene.models import FocalConfig, ImageLayer


class TestResolveLength:
    """Tests for resolve_length."""

    @pytest.mark.parametrize(
        ("value", "axis", "expected"),
        [
            ("50%", 900.0, 450.0),
            ("10vw", 0.0, 144.0),
            ("5vh", 0.0, 45.0),
            ("120px", 0.0, 120.0),
            ("2rem", 0.0, 32.0),
            ("64", 0.0, 64.0),
            (12, 0.0, 12.0),
        ],
    )
    def test_units(
        self, viewport: Viewport, value: str | int, axis: float, expected: float
    ) -> None:
        assert resolve_length(value, axis, viewport) == pytest.approx(expected)

    @pytest.mark.parametrize("value", [None, "auto", "calc(10px + 2vw)", ""])
    def test_unresolvable(self, viewport: Viewport, value: str | None) -> None:
        assert resolve_length(value, 900.0, viewport) is None


class TestFontEstimate:
    """Tests for estimate_font_px."""

    def test_default_clamp_uses_preferred_term(self, viewport: Viewport) -> None:
        assert estimate_font_px(None, viewport, FocalMetrics()) == pytest.approx(86.4)

    def test_plain_length(self, viewport: Viewport) -> None:
        assert estimate_font_px("48px", viewport, FocalMetrics()) == pytest.approx(48.0)

    def test_unparseable_falls_back(self, viewport: Viewport) -> None:
        expr = "clamp(1rem, calc(2vw + 1rem), 3rem)"
        assert estimate_font_px(expr, viewport, FocalMetrics()) == pytest.approx(80.0)


class TestFocalBounds:
    """Tests for focal_bounds."""

    def test_single_line_box(self, viewport: Viewport) -> None:
        box = focal_bounds(FocalConfig(text="Headline"), viewport)
        assert box.left == pytest.approx(180.0)
        assert box.right == pytest.approx(1260.0)
        assert box.top == pytest.approx(358.16)
        assert box.bottom == pytest.approx(541.84)

    def test_focal_top_is_box_center(self, viewport: Viewport) -> None:
        box = focal_bounds(FocalConfig(text="Headline", top="20%"), viewport)
        assert box.top == pytest.approx(88.16)
        assert box.bottom == pytest.approx(271.84)
        assert box.left == pytest.approx(180.0)

    def test_more_lines_grow_box(self, viewport: Viewport) -> None:
        one = focal_bounds(FocalConfig(text="a"), viewport)
        two = focal_bounds(FocalConfig(text="a<br>b"), viewport)
        assert two.height > one.height
        assert two.width == one.width

    def test_narrow_viewport_caps_width(self) -> None:
        box = focal_bounds(FocalConfig(text="a"), Viewport(width=600, height=800))
        assert box.left == pytest.approx(0.0)
        assert box.right == pytest.approx(600.0)


class TestImageBounds:
    """Tests for image_bounds."""

    def test_centered_auto_height(self, viewport: Viewport) -> None:
        layer = ImageLayer(
            src="a.png",
            position={"top": "40%", "left": "50%"},
            size={"width": "25vw", "height": "auto"},
        )
        box = image_bounds(layer, viewport)
        assert box is not None
        assert box.top == pytest.approx(360.0)
        assert box.left == pytest.approx(540.0)
        assert box.bottom == pytest.approx(720.0)
        assert box.right == pytest.approx(900.0)

    def test_far_edge_offsets(self, viewport: Viewport) -> None:
        layer = ImageLayer(
            src="a.png",
            position={"bottom": "10vh", "right": "5vw"},
            size={"width": "100px", "height": "50px"},
        )
        box = image_bounds(layer, viewport)
        assert box is not None
        assert box.bottom == pytest.approx(810.0)
        assert box.right == pytest.approx(1368.0)
        assert box.height == pytest.approx(50.0)

    def test_missing_size_uses_default(self, viewport: Viewport) -> None:
        box = image_bounds(ImageLayer(src="a.png", position="top-left"), viewport)
        assert box is not None
        assert box.width == DEFAULT_IMAGE_PX
        assert box.height == DEFAULT_IMAGE_PX

    def test_no_position(self, viewport: Viewport) -> None:
        assert image_bounds(ImageLayer(src="a.png"), viewport) is None

    def test_missing_axis_anchor(self, viewport: Viewport) -> None:
        assert image_bounds(ImageLayer(src="a.png", position={"top": "10px"}), viewport) is None


class TestBoundingBox:
    """Tests for BoundingBox."""

    def test_touching_edges_overlap(self) -> None:
        a = BoundingBox(top=0, left=0, bottom=10, right=10)
        b = BoundingBox(top=10, left=0, bottom=20, right=10)
        assert a.overlaps(b)

    def test_separated_boxes(self) -> None:
        a = BoundingBox(top=0, left=0, bottom=10, right=10)
        b = BoundingBox(top=11, left=0, bottom=20, right=10)
        assert not a.overlaps(b)

    def test_overlap_is_symmetric(self) -> None:
        a = BoundingBox(top=0, left=0, bottom=10, right=10)
        b = BoundingBox(top=5, left=5, bottom=15, right=15)
        assert a.overlaps(b)
        assert b.overlaps(a)
