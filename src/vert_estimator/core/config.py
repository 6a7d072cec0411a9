"""Application configuration via Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SamplingSettings(BaseSettings):
    """Virtual frame grid used when sampling a clip."""

    model_config = SettingsConfigDict(env_prefix="SAMPLING_")

    sample_rate: Literal[30, 60, 120, 240] = 60


class DetectionSettings(BaseSettings):
    """Motion signal and peak detection parameters."""

    model_config = SettingsConfigDict(env_prefix="DETECTION_")

    smoothing_half_window: int = Field(default=5, ge=0)
    threshold_multiplier: float = 2.5
    edge_margin: int = Field(default=5, ge=0)
    neighbor_span: int = Field(default=2, ge=1)
    relevant_start_fraction: float = Field(default=0.1, ge=0.0, le=1.0)
    relevant_end_fraction: float = Field(default=0.7, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_relevant_window(self) -> "DetectionSettings":
        if self.relevant_start_fraction >= self.relevant_end_fraction:
            raise ValueError("relevant_start_fraction must be below relevant_end_fraction")
        return self


class FallbackSettings(BaseSettings):
    """Takeoff/landing pair used when detection is inconclusive.

    The defaults match one reference clip and are a guess for anything else.
    """

    model_config = SettingsConfigDict(env_prefix="FALLBACK_")

    takeoff_s: float = Field(default=0.85, ge=0.0)
    landing_s: float = Field(default=1.55, ge=0.0)

    @model_validator(mode="after")
    def _check_order(self) -> "FallbackSettings":
        if self.landing_s <= self.takeoff_s:
            raise ValueError("landing_s must be after takeoff_s")
        return self


class DisplaySettings(BaseSettings):
    """Output presentation settings."""

    model_config = SettingsConfigDict(env_prefix="DISPLAY_")

    unit: Literal["inches", "cm"] = "inches"


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = "INFO"
    file: str | None = None


class Settings(BaseSettings):
    """Root settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    sampling: SamplingSettings = Field(default_factory=SamplingSettings)
    detection: DetectionSettings = Field(default_factory=DetectionSettings)
    fallback: FallbackSettings = Field(default_factory=FallbackSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings instance."""
    return Settings()
