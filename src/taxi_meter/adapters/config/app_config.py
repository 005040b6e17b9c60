"""12-factor configuration adapter using environment variables."""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from taxi_meter.domain.models import PositionOptions


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles.

    The tariff itself is fixed and deliberately not part of the configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Meter clock
    tick_interval_seconds: float = Field(
        default=1.0, description="Seconds between elapsed-time ticks while hired"
    )
    fallback_step_km: float = Field(
        default=0.001,
        description="Distance added per positioning failure while hired",
    )

    # Positioning
    high_accuracy: bool = Field(default=True, description="Request high-accuracy fixes")
    initial_fix_timeout_ms: int = Field(
        default=10_000, description="Maximum wait for the one-shot origin fix in milliseconds"
    )
    initial_fix_max_age_ms: int = Field(
        default=0, description="Maximum age of a cached fix accepted as origin in milliseconds"
    )
    watch_timeout_ms: int = Field(
        default=5_000, description="Maximum wait between continuous fixes in milliseconds"
    )
    watch_max_age_ms: int = Field(
        default=1_000, description="Maximum age of a cached fix accepted by the watch"
    )

    # Track replay
    track_file: str | None = Field(
        default=None,
        description="JSON track to replay instead of live positioning (None: no positioning)",
    )
    replay_speed: float = Field(
        default=1.0, description="Playback speed factor for track replay"
    )

    # Display
    currency_label: str = Field(default="HK$", description="Currency label shown with fares")
    log_level: str = Field(default="INFO", description="Logging level name")

    @field_validator("tick_interval_seconds", "replay_speed")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Validate intervals and speed factors are strictly positive."""
        if v <= 0:
            raise ValueError("value must be greater than zero")
        return v

    @field_validator("initial_fix_timeout_ms", "watch_timeout_ms")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Validate position timeouts are strictly positive."""
        if v <= 0:
            raise ValueError("timeout must be greater than zero")
        return v

    @field_validator("initial_fix_max_age_ms", "watch_max_age_ms", "fallback_step_km")
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        """Validate cache ages and fallback step are not negative."""
        if v < 0:
            raise ValueError("value must not be negative")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard logging level names."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("log_level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return level

    def initial_position_options(self) -> PositionOptions:
        """Options for the one-shot fix that marks the trip origin."""
        return PositionOptions(
            high_accuracy=self.high_accuracy,
            timeout_ms=self.initial_fix_timeout_ms,
            max_cache_age_ms=self.initial_fix_max_age_ms,
        )

    def watch_position_options(self) -> PositionOptions:
        """Options for continuous position observation."""
        return PositionOptions(
            high_accuracy=self.high_accuracy,
            timeout_ms=self.watch_timeout_ms,
            max_cache_age_ms=self.watch_max_age_ms,
        )

    def logging_level(self) -> int:
        """Numeric logging level for ``logging.basicConfig``."""
        return logging.getLevelName(self.log_level)
