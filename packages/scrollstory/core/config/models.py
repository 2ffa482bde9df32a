"""Engine configuration models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from scrollstory.core.geometry.bounds import FocalMetrics, Viewport
from scrollstory.core.timing.constants import TimingConstants


class RuntimeConfig(BaseModel):
    """Scroll controller settings.

    Attributes:
        default_fade_zone: Fade zone (viewport heights) for sections that
            declare none.
        card_exit_delay_s: Seconds from a card's reveal to its exit transition.
        trailing_transition: Fade-in distance of the trailing element, as a
            fraction of viewport height.
        reset_opacity: Section opacity below which card sequences reset.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    default_fade_zone: float = Field(default=0.7, gt=0.0)
    card_exit_delay_s: float = Field(default=4.6, ge=0.0)
    trailing_transition: float = Field(default=0.3, gt=0.0)
    reset_opacity: float = Field(default=0.5, ge=0.0, le=1.0)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False
    filename: str | None = None


class EngineConfig(BaseModel):
    """Top-level engine configuration.

    Every section is optional; missing values fall back to defaults.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    viewport: Viewport = Field(default_factory=Viewport)
    timing: TimingConstants = Field(default_factory=TimingConstants)
    focal: FocalMetrics = Field(default_factory=FocalMetrics)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def _validate_default_fade(self) -> EngineConfig:
        if self.runtime.default_fade_zone <= self.timing.default_hold_zone:
            raise ValueError(
                f"runtime.default_fade_zone ({self.runtime.default_fade_zone}) must exceed "
                f"timing.default_hold_zone ({self.timing.default_hold_zone})"
            )
        return self


__all__ = [
    "EngineConfig",
    "LoggingConfig",
    "RuntimeConfig",
]
