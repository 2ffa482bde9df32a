"""Scene schema models.

A scene is an ordered list of fullscreen sections. Each section owns one
focal text zone, a stack of decorative layers and optional sequenced cards.
Models are frozen: sections are authored once and only replaced wholesale
(e.g. when computed scroll heights are written back).
"""

from __future__ import annotations

import re
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from scrollstory.core.scene.vocabulary import (
    MAX_LAYER_DEPTH,
    MIN_LAYER_DEPTH,
    FocalAlign,
    LayerType,
)

_LINE_BREAK = re.compile(r"<br\s*/?>|\n", re.IGNORECASE)


class FocalConfig(BaseModel):
    """Focal (headline) text of a section.

    Attributes:
        text: Headline text; ``<br>`` tags or newlines mark explicit line breaks.
        align: Text alignment.
        font_size: Optional CSS font-size expression override.
        color: Optional CSS color override.
        top: Optional vertical center of the fixed focal container
            (defaults to the viewport center).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: str = Field(min_length=1)
    align: FocalAlign = FocalAlign.CENTER
    font_size: str | None = None
    color: str | None = None
    top: str | None = None

    @property
    def line_count(self) -> int:
        """Explicit line breaks + 1."""
        return len(_LINE_BREAK.findall(self.text)) + 1


class Position(BaseModel):
    """CSS edge offsets of a positioned layer."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    top: str | None = None
    right: str | None = None
    bottom: str | None = None
    left: str | None = None


class Size(BaseModel):
    """CSS dimensions of a positioned layer; ``auto`` is allowed."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    width: str | None = None
    height: str | None = None


class _LayerBase(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    depth: int = Field(default=1, ge=MIN_LAYER_DEPTH, le=MAX_LAYER_DEPTH)

    @property
    def layer_type(self) -> LayerType:
        return LayerType(getattr(self, "type"))


class BackgroundLayer(_LayerBase):
    """Full-viewport color fill."""

    type: Literal["background"] = "background"
    color: str
    depth: int = Field(default=0, ge=MIN_LAYER_DEPTH, le=MAX_LAYER_DEPTH)


class ImageLayer(_LayerBase):
    """Positioned image layer.

    ``position`` accepts either explicit offsets or the name of a position
    preset, which is expanded at construction.
    """

    type: Literal["image"] = "image"
    src: str = Field(min_length=1)
    position: Position | None = None
    size: Size | None = None
    animation: str | None = None
    opacity: float = Field(default=1.0, ge=0.0, le=1.0)

    @field_validator("position", mode="before")
    @classmethod
    def _expand_preset(cls, value: Any) -> Any:
        if isinstance(value, str):
            # Deferred: the geometry package imports these models
            from scrollstory.core.geometry.positioning import get_position

            try:
                return get_position(value)
            except KeyError as e:
                raise ValueError(str(e.args[0])) from e
        return value


class CustomLayer(_LayerBase):
    """Layer drawn by a registered custom renderer.

    Custom layers are opaque to the overlap detector; ``config`` is passed
    through to the renderer untouched.
    """

    type: Literal["custom"] = "custom"
    renderer: str = Field(min_length=1)
    config: dict[str, Any] = Field(default_factory=dict)


Layer = Annotated[BackgroundLayer | ImageLayer | CustomLayer, Field(discriminator="type")]


class Card(BaseModel):
    """Sequenced card revealed while its section is held."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: str = Field(min_length=1)
    side: Literal["left", "right"] = "left"


class ScrollConfig(BaseModel):
    """Scroll geometry of a section.

    Attributes:
        height_vh: Scroll height in whole vh. Computed from the timing
            constants when absent.
        fade_zone: Distance from the viewport center (fraction of viewport
            height) at which opacity reaches 0. Falls back to the
            controller default.
        hold_zone: Distance from the viewport center (fraction of viewport
            height) within which opacity stays at 1. Ignored for sections
            with cards, whose zones come from the card timing.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    height_vh: int | None = Field(default=None, gt=0)
    fade_zone: float | None = Field(default=None, gt=0.0)
    hold_zone: float | None = Field(default=None, ge=0.0)

    @model_validator(mode="after")
    def _validate_zone_order(self) -> ScrollConfig:
        if (
            self.hold_zone is not None
            and self.fade_zone is not None
            and self.hold_zone >= self.fade_zone
        ):
            raise ValueError(
                f"hold_zone ({self.hold_zone}) must be less than fade_zone ({self.fade_zone})"
            )
        return self


class Section(BaseModel):
    """One fullscreen panel of the scroll story."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(min_length=1)
    focal: FocalConfig
    layers: list[Layer] = Field(default_factory=list)
    cards: list[Card] = Field(default_factory=list)
    scroll: ScrollConfig = Field(default_factory=ScrollConfig)

    @property
    def card_count(self) -> int:
        return len(self.cards)


class Scene(BaseModel):
    """Ordered collection of sections."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    sections: list[Section] = Field(min_length=1)

    @model_validator(mode="after")
    def _validate_unique_ids(self) -> Scene:
        seen: set[str] = set()
        for section in self.sections:
            if section.id in seen:
                raise ValueError(f"Duplicate section id '{section.id}'")
            seen.add(section.id)
        return self

    def section(self, section_id: str) -> Section:
        """Look up a section by id.

        Raises:
            KeyError: If no section has that id
        """
        for section in self.sections:
            if section.id == section_id:
                return section
        raise KeyError(f"Unknown section id '{section_id}'")

    def is_last(self, section_id: str) -> bool:
        return self.sections[-1].id == section_id


__all__ = [
    "BackgroundLayer",
    "Card",
    "CustomLayer",
    "FocalConfig",
    "ImageLayer",
    "Layer",
    "Position",
    "Scene",
    "ScrollConfig",
    "Section",
    "Size",
]
