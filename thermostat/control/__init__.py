"""Thermostat control for the thermostat package."""

from .state_machine import ThermostatController, Thermostat, Mode, FanSpeed, initialize
from .simulation import ThermostatSimulator, TickRecord

__all__ = [
    "ThermostatController",
    "Thermostat",
    "Mode",
    "FanSpeed",
    "initialize",
    "ThermostatSimulator",
    "TickRecord",
]
