"""Shared pytest fixtures for scrollstory tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from scrollstory.core.geometry.bounds import Viewport
from scrollstory.core.rendering.custom import load_builtin_renderers
from scrollstory.core.rendering.registry import RendererRegistry
from scrollstory.core.scene.models import Scene

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def project_root() -> Path:
    """Get project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def scenes_dir(project_root: Path) -> Path:
    """Get the example scenes directory."""
    return project_root / "scenes"


# ============================================================================
# Scene Fixtures
# ============================================================================


def make_section(section_id: str, **overrides: Any) -> dict[str, Any]:
    """Raw section mapping with a background layer and one line of focal text."""
    section: dict[str, Any] = {
        "id": section_id,
        "focal": {"text": f"{section_id} headline"},
        "layers": [{"type": "background", "color": "#0B2532"}],
    }
    section.update(overrides)
    return section


@pytest.fixture
def viewport() -> Viewport:
    """Desktop viewport (1440x900)."""
    return Viewport()


@pytest.fixture
def minimal_scene_dict() -> dict[str, Any]:
    """Single valid section."""
    return {"sections": [make_section("intro")]}


@pytest.fixture
def card_scene_dict() -> dict[str, Any]:
    """Intro, a four-card section and an outro."""
    return {
        "sections": [
            make_section("intro"),
            make_section(
                "challenges",
                layers=[
                    {"type": "background", "color": "#12394D"},
                    {"type": "custom", "renderer": "challenge-cards", "depth": 5},
                ],
                cards=[
                    {"text": "Unclear ownership", "side": "left"},
                    {"text": "Late reviews", "side": "right"},
                    {"text": "Flaky releases", "side": "left"},
                    {"text": "No rollback plan", "side": "right"},
                ],
            ),
            make_section("outro"),
        ]
    }


@pytest.fixture
def card_scene(card_scene_dict: dict[str, Any]) -> Scene:
    """Validated card scene."""
    return Scene.model_validate(card_scene_dict)


@pytest.fixture
def registry() -> RendererRegistry:
    """Registry with the built-in custom renderers."""
    return load_builtin_renderers()


# ============================================================================
# Clock Fixtures
# ============================================================================


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Fake clock starting at t=0."""
    return FakeClock()
