"""Taxi fare meter: hired-session state machine, tiered tariff and GPS distance tracking."""

__version__ = "0.1.0"
