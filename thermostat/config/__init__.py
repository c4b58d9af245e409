"""Configuration management for the thermostat."""

from .settings import Settings, ApplicationOptions, SimulationOptions, LogLevel
from .loader import ConfigLoader

__all__ = ["Settings", "ApplicationOptions", "SimulationOptions", "LogLevel", "ConfigLoader"]
