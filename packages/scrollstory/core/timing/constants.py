"""Scroll timing constants.

Every duration is a scroll distance expressed in viewport heights
(1.0 == 100vh), so pacing stays the same across screen sizes.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TimingConstants(BaseModel):
    """Named scroll distances that drive the whole page's pacing.

    Attributes:
        panel_reading_hold: Hold at full opacity for reading the focal text.
        card_reading_hold: Hold after each card before the next appears.
        card_fade_distance: Distance over which each card fades in.
        panel_fade_in: Distance over which a panel fades in.
        panel_fade_out: Distance over which a panel fades out. Must be
            positive: it is the gap between hold and fade zones.
        grey_space_between: Empty scroll distance between two panels.
        last_panel_extra_hold: Extra hold for the terminal panel.
        default_hold_zone: Hold zone of sections without cards.
        default_fade_zone: Fade zone of sections without cards.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    panel_reading_hold: float = Field(default=1.2, ge=0.0)
    card_reading_hold: float = Field(default=0.2, ge=0.0)
    card_fade_distance: float = Field(default=0.08, ge=0.0)
    panel_fade_in: float = Field(default=0.3, ge=0.0)
    panel_fade_out: float = Field(default=0.3, gt=0.0)
    grey_space_between: float = Field(default=0.75, ge=0.0)
    last_panel_extra_hold: float = Field(default=0.2, ge=0.0)
    default_hold_zone: float = Field(default=0.4, ge=0.0)
    default_fade_zone: float = Field(default=0.7, gt=0.0)

    @model_validator(mode="after")
    def _validate_default_zones(self) -> TimingConstants:
        if self.default_hold_zone >= self.default_fade_zone:
            raise ValueError(
                f"default_hold_zone ({self.default_hold_zone}) must be less than "
                f"default_fade_zone ({self.default_fade_zone})"
            )
        return self

    @property
    def card_step(self) -> float:
        """Scroll distance consumed by one card (fade in + reading hold)."""
        return self.card_fade_distance + self.card_reading_hold


DEFAULT_TIMING = TimingConstants()

__all__ = [
    "DEFAULT_TIMING",
    "TimingConstants",
]
