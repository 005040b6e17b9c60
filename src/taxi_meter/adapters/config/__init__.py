"""Configuration adapters."""

from taxi_meter.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
