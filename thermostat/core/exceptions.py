"""
Custom exceptions for the thermostat system.

The controller itself never raises; these cover configuration and the
simulation driver around it.
"""

class ThermostatError(Exception):
    """Base exception for the thermostat system."""

    def __init__(self, message: str, context: dict | None = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} (context: {self.context})"
        return self.message

class ConfigurationError(ThermostatError):
    """Configuration-related errors."""

    pass

class SimulationError(ThermostatError):
    """Simulation driver errors, e.g. a session that never settles."""

    pass
