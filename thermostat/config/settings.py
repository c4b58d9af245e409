"""
Configuration models for the thermostat simulator.

Type-safe configuration structures with Pydantic validation.
"""

from typing import List
from enum import Enum
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class LogLevel(str, Enum):
    """Logging levels."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

class ApplicationOptions(BaseModel):
    """Application-level configuration options."""
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")

class SimulationOptions(BaseModel):
    """Options for the tick driver."""
    max_ticks: int = Field(default=100, description="Ticks allowed per target before giving up")
    reconcile_each_tick: bool = Field(default=False, description="Run reconcile after every tick")
    targets: List[int] = Field(default_factory=list, description="Target temperatures to play in order")

    @field_validator('max_ticks')
    @classmethod
    def validate_max_ticks(cls, v):
        """Validate tick budget."""
        if v < 1 or v > 10000:
            raise ValueError('max_ticks must be between 1 and 10000')
        return v

    @field_validator('targets')
    @classmethod
    def validate_targets(cls, v):
        """Validate scripted targets.

        Targets outside the thermostat's own range are allowed here so a
        session can script rejected requests.
        """
        for target in v:
            if target < -50 or target > 60:
                raise ValueError('Target temperature must be between -50°C and 60°C')
        return v

class Settings(BaseSettings):
    """Main application settings."""
    app_options: ApplicationOptions = Field(default_factory=ApplicationOptions)
    simulation_options: SimulationOptions = Field(default_factory=SimulationOptions)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )
