"""Tests for structural scene validation."""

from __future__ import annotations

from typing import Any

import pytest

from scrollstory.core.rendering.registry import RendererRegistry
from scrollstory.core.scene.models import Scene
from scrollstory.core.scene.validator import (
    SceneValidationError,
    build_scene,
    validate_schema,
)
from tests.conftest import make_section


def _scene(*sections: dict[str, Any]) -> dict[str, Any]:
    return {"sections": list(sections)}


def _with_layer(layer: dict[str, Any]) -> dict[str, Any]:
    return _scene(make_section("s", layers=[layer]))


class TestValidScenes:
    """Scenes that pass structural validation."""

    def test_minimal_scene(self, minimal_scene_dict: dict[str, Any]) -> None:
        result = validate_schema(minimal_scene_dict)
        assert result.valid
        assert result.errors == []

    def test_card_scene_with_registry(
        self, card_scene_dict: dict[str, Any], registry: RendererRegistry
    ) -> None:
        assert validate_schema(card_scene_dict, registry).valid

    def test_built_scene_accepted(self, card_scene: Scene) -> None:
        assert validate_schema(card_scene).valid

    def test_depth_at_ceiling(self) -> None:
        result = validate_schema(_with_layer({"type": "image", "src": "a.png", "depth": 50}))
        assert result.valid


class TestLayerErrors:
    """Per-layer structural errors."""

    def test_depth_above_ceiling_is_single_error(self) -> None:
        result = validate_schema(_with_layer({"type": "image", "src": "a.png", "depth": 51}))
        assert not result.valid
        assert len(result.errors) == 1
        assert "Section 0, layer 0" in result.errors[0]
        assert "exceeds max of 50 (focal zone protection)" in result.errors[0]

    def test_negative_depth(self) -> None:
        result = validate_schema(_with_layer({"type": "background", "color": "#000", "depth": -1}))
        assert result.errors == ["Section 0, layer 0: depth -1 is below min of 0"]

    def test_non_integer_depth(self) -> None:
        result = validate_schema(_with_layer({"type": "image", "src": "a.png", "depth": "high"}))
        assert "must be an integer" in result.errors[0]

    def test_invalid_type(self) -> None:
        result = validate_schema(_with_layer({"type": "video", "src": "a.mp4"}))
        assert result.errors == ['Section 0, layer 0: invalid layer type "video"']

    def test_image_missing_src(self) -> None:
        result = validate_schema(_with_layer({"type": "image"}))
        assert result.errors == ["Section 0, layer 0: image layer missing src"]

    def test_unknown_position_preset(self) -> None:
        result = validate_schema(_with_layer({"type": "image", "src": "a", "position": "moon"}))
        assert result.errors == ['Section 0, layer 0: unknown position preset "moon"']

    def test_custom_missing_renderer(self) -> None:
        result = validate_schema(_with_layer({"type": "custom"}))
        assert result.errors == ["Section 0, layer 0: custom layer missing renderer key"]

    def test_unregistered_renderer_with_registry(self, registry: RendererRegistry) -> None:
        result = validate_schema(_with_layer({"type": "custom", "renderer": "fireworks"}), registry)
        assert result.errors == [
            'Section 0, layer 0: custom renderer "fireworks" is not registered'
        ]

    def test_renderer_keys_unchecked_without_registry(self) -> None:
        assert validate_schema(_with_layer({"type": "custom", "renderer": "fireworks"})).valid


class TestSectionErrors:
    """Section-level structural errors."""

    def test_missing_sections(self) -> None:
        result = validate_schema({})
        assert result.errors == ['Scene must have a "sections" list']

    def test_empty_sections(self) -> None:
        result = validate_schema({"sections": []})
        assert result.errors == ["Scene must contain at least one section"]

    def test_missing_id(self) -> None:
        section = make_section("s")
        del section["id"]
        assert validate_schema(_scene(section)).errors == ["Section 0: missing id"]

    def test_duplicate_id(self) -> None:
        result = validate_schema(_scene(make_section("a"), make_section("a")))
        assert result.errors == ['Section 1: duplicate id "a"']

    def test_missing_focal(self) -> None:
        section = make_section("s")
        del section["focal"]
        assert validate_schema(_scene(section)).errors == ["Section 0: missing focal config"]

    def test_focal_missing_text(self) -> None:
        result = validate_schema(_scene(make_section("s", focal={"align": "left"})))
        assert result.errors == ["Section 0: focal missing text"]

    def test_missing_layers(self) -> None:
        section = make_section("s")
        del section["layers"]
        assert validate_schema(_scene(section)).errors == [
            "Section 0: missing or invalid layers list"
        ]

    def test_card_missing_text(self) -> None:
        section = make_section("s", cards=[{"text": "ok"}, {"side": "left"}])
        result = validate_schema(_scene(section))
        assert result.errors == ["Section 0, card 1: missing text"]

    def test_errors_collected_across_sections(self) -> None:
        result = validate_schema(
            _scene(
                make_section("a", layers=[{"type": "image", "depth": 99}]),
                make_section("b", focal={}),
                make_section("a"),
            )
        )
        assert len(result.errors) == 4
        assert result.errors[0].startswith("Section 0, layer 0: depth 99")
        assert result.errors[1] == "Section 0, layer 0: image layer missing src"
        assert result.errors[2] == "Section 1: focal missing text"
        assert result.errors[3] == 'Section 2: duplicate id "a"'


class TestScrollErrors:
    """Hold/fade ordering checks."""

    def test_explicit_hold_not_below_fade(self) -> None:
        result = validate_schema(
            _scene(make_section("s", scroll={"hold_zone": 0.5, "fade_zone": 0.5}))
        )
        assert result.errors == ["Section 0: hold zone 0.5 must be less than fade zone 0.5"]

    def test_default_hold_against_small_fade(self) -> None:
        result = validate_schema(_scene(make_section("s", scroll={"fade_zone": 0.3})))
        assert result.errors == ["Section 0: hold zone 0.4 must be less than fade zone 0.3"]

    def test_hold_against_default_fade(self) -> None:
        result = validate_schema(_scene(make_section("s", scroll={"hold_zone": 0.8})))
        assert result.errors == ["Section 0: hold zone 0.8 must be less than fade zone 0.7"]
        with pytest.raises(SceneValidationError, match="fade zone 0.7"):
            build_scene(_scene(make_section("s", scroll={"hold_zone": 0.8})))

    def test_card_section_ignores_default_hold(self) -> None:
        section = make_section("s", scroll={"fade_zone": 0.3}, cards=[{"text": "a"}])
        assert validate_schema(_scene(section)).valid


class TestBuildScene:
    """Tests for build_scene."""

    def test_builds_valid_scene(self, card_scene_dict: dict[str, Any]) -> None:
        scene = build_scene(card_scene_dict)
        assert [s.id for s in scene.sections] == ["intro", "challenges", "outro"]

    def test_structural_errors_raise(self) -> None:
        with pytest.raises(SceneValidationError, match="1 error") as exc_info:
            build_scene(_with_layer({"type": "image", "src": "a.png", "depth": 51}))
        assert len(exc_info.value.errors) == 1

    def test_model_errors_wrapped(self) -> None:
        raw = _scene(make_section("s", focal={"text": "hi", "align": "diagonal"}))
        with pytest.raises(SceneValidationError) as exc_info:
            build_scene(raw)
        assert any("align" in err for err in exc_info.value.errors)

    def test_error_summary_truncated(self) -> None:
        error = SceneValidationError([f"e{i}" for i in range(5)])
        assert "e0; e1; e2; ... (2 more)" in str(error)
