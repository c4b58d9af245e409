"""Thermostat control state machine and tick simulator."""

__version__ = "0.1.0"
