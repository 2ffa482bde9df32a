"""End-to-end tests: load, prepare, render and scroll a scene."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from scrollstory.core.config.loader import load_scene
from scrollstory.core.geometry.bounds import Viewport
from scrollstory.core.rendering.builder import SectionNodes, apply_visuals, render_scene
from scrollstory.core.rendering.custom.challenge_cards import CARD_INDEX_ATTR
from scrollstory.core.rendering.registry import RendererRegistry
from scrollstory.core.runtime.controller import ScrollController
from scrollstory.core.runtime.simulation import simulate_scroll
from scrollstory.core.runtime.store import VisualStateStore
from scrollstory.core.scene.models import Scene
from scrollstory.core.scene.vocabulary import CardPhase, VisibilityState
from tests.conftest import FakeClock, make_section


def _center_offset(controller: ScrollController, section_id: str) -> float:
    top, bottom = controller.layout.span(section_id)
    return (top + bottom) / 2 - controller.viewport.height / 2


@pytest.mark.integration
class TestRoundTrip:
    """Every section gets its moment at full opacity and fades away."""

    @pytest.fixture
    def landing(self, scenes_dir: Path, registry: RendererRegistry) -> Scene:
        return load_scene(scenes_dir / "landing.yaml", registry)

    def test_each_section_reaches_full_opacity(self, landing: Scene) -> None:
        controller = ScrollController(landing, Viewport(), clock=lambda: 0.0)
        for section in controller.scene.sections:
            controller.update(_center_offset(controller, section.id))
            assert controller.store.get(section.id).opacity == 1.0
            assert controller.store.get(section.id).state is VisibilityState.HELD

    def test_nothing_visible_outside_story(self, landing: Scene) -> None:
        controller = ScrollController(landing, Viewport(), clock=lambda: 0.0)
        for offset in (-Viewport().height, controller.layout.total_height):
            controller.update(offset)
            assert all(v.opacity == 0.0 for v in controller.store.snapshot().values())

    def test_six_card_section(self) -> None:
        cards = [{"text": f"card {i}"} for i in range(6)]
        scene = Scene.model_validate(
            {"sections": [make_section("a"), make_section("b", cards=cards), make_section("c")]}
        )
        controller = ScrollController(scene, Viewport(), clock=lambda: 0.0)
        assert controller.scene.section("b").scroll.height_vh == 711

        controller.update(_center_offset(controller, "b"))
        assert controller.store.get("b").opacity == 1.0

        top, bottom = controller.layout.span("b")
        controller.update(bottom + 1)
        assert controller.store.get("b").opacity == 0.0
        controller.update(top - Viewport().height - 1)
        assert controller.store.get("b").opacity == 0.0

    def test_simulation_covers_every_section(self, landing: Scene) -> None:
        samples = simulate_scroll(landing, samples=200)
        for section in landing.sections:
            assert max(s.opacity(section.id) for s in samples) > 0.9
        assert samples[0].visible_ids == []
        assert samples[-1].trailing.interactive


def _cards(count: int) -> list[dict[str, str]]:
    return [{"text": f"card {i}"} for i in range(count)]


@pytest.mark.integration
class TestGreySpace:
    """Adjacent panels never share the screen."""

    @pytest.mark.parametrize(
        "sections",
        [
            [make_section("a"), make_section("b"), make_section("c")],
            [make_section("a", cards=_cards(4)), make_section("b")],
            [make_section("a"), make_section("b", cards=_cards(6))],
            [make_section("a", cards=_cards(4)), make_section("b", cards=_cards(4))],
            [
                make_section("a", cards=_cards(1)),
                make_section("b", cards=_cards(8)),
                make_section("c", scroll={"hold_zone": 0.3, "fade_zone": 0.9}),
            ],
        ],
        ids=["plain", "cards-then-plain", "plain-then-cards", "cards-cards", "mixed"],
    )
    def test_at_most_one_section_visible(self, sections: list[dict[str, Any]]) -> None:
        scene = Scene.model_validate({"sections": sections})
        samples = simulate_scroll(scene, Viewport(), samples=4000)
        assert all(len(sample.visible_ids) <= 1 for sample in samples)
        for section in scene.sections:
            assert max(s.opacity(section.id) for s in samples) == 1.0

    def test_wide_default_fade(self, card_scene: Scene) -> None:
        samples = simulate_scroll(card_scene, Viewport(), samples=4000, default_fade_zone=1.2)
        assert all(len(sample.visible_ids) <= 1 for sample in samples)


@pytest.mark.integration
class TestCardSequence:
    """Scroll through the card section and watch every card's lifecycle."""

    def test_full_sequence(self, card_scene: Scene, clock: FakeClock) -> None:
        controller = ScrollController(card_scene, Viewport(), clock=clock)
        top, _ = controller.layout.span("challenges")
        assert top == pytest.approx(3015)

        # Held from 300px of progress on; nothing is revealed yet
        controller.update(top + 300)
        visual = controller.store.get("challenges")
        assert visual.sequence_armed
        assert all(c.phase is CardPhase.PENDING for c in visual.cards)

        # 1400px of progress crosses the first two thresholds
        controller.update(top + 1400)
        visual = controller.store.get("challenges")
        assert [c.phase for c in visual.cards] == [
            CardPhase.REVEALED,
            CardPhase.REVEALED,
            CardPhase.PENDING,
            CardPhase.PENDING,
        ]

        controller.update(top + 1900)
        visual = controller.store.get("challenges")
        assert all(c.phase is CardPhase.REVEALED for c in visual.cards)

        clock.advance(5.0)
        controller.update(top + 1900)
        assert all(
            c.phase is CardPhase.EXITING for c in controller.store.get("challenges").cards
        )

        controller.update(9000)
        visual = controller.store.get("challenges")
        assert not visual.displayed
        assert not visual.sequence_armed
        assert all(c.phase is CardPhase.PENDING for c in visual.cards)


@pytest.mark.integration
class TestRenderedStory:
    """Rendered nodes follow the store through a subscription."""

    def test_store_drives_rendered_nodes(
        self, card_scene: Scene, registry: RendererRegistry, clock: FakeClock
    ) -> None:
        store = VisualStateStore()
        controller = ScrollController(card_scene, Viewport(), store, clock=clock)
        rendered = render_scene(controller.scene, registry)
        applied: dict[str, SectionNodes] = {}

        def on_write(s: VisualStateStore) -> None:
            for section_id, nodes in rendered.items():
                applied[section_id] = apply_visuals(nodes, s.get(section_id))

        store.subscribe(on_write)
        top, _ = controller.layout.span("challenges")
        controller.update(top + 1900)

        intro = applied["intro"]
        assert intro.focal is not None
        assert intro.focal.style["display"] == "none"

        challenges = applied["challenges"]
        assert challenges.focal is not None
        assert challenges.focal.style["display"] == "block"
        assert challenges.focal.style["opacity"] == "1"

        container = next(n for n in challenges.layers if n.has_class("challenge-cards"))
        assert container.has_class("section-active")
        cards = [n for n in container.walk() if CARD_INDEX_ATTR in n.attributes]
        assert len(cards) == 4
        assert all(n.has_class("revealed") for n in cards)
        assert all(n.style["opacity"] == "1" for n in cards)
