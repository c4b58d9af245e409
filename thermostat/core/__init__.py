"""Core infrastructure for the thermostat."""

from .exceptions import ThermostatError, ConfigurationError, SimulationError

__all__ = ["ThermostatError", "ConfigurationError", "SimulationError"]
