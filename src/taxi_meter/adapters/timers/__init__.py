"""Tickers driving the meter clock."""

from taxi_meter.adapters.timers.asyncio_ticker import AsyncioTicker
from taxi_meter.adapters.timers.manual_ticker import ManualTicker

__all__ = ["AsyncioTicker", "ManualTicker"]
