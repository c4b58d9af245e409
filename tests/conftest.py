"""
Pytest configuration and fixtures for thermostat tests.
"""

import pytest

from thermostat.config.settings import SimulationOptions
from thermostat.control.state_machine import ThermostatController, initialize
from thermostat.control.simulation import ThermostatSimulator

@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep tests away from local config files and environment overrides."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("THERMOSTAT_CONFIG_FILE", raising=False)
    monkeypatch.delenv("SIMULATION_OPTIONS__MAX_TICKS", raising=False)
    monkeypatch.delenv("APP_OPTIONS__LOG_LEVEL", raising=False)

@pytest.fixture
def controller() -> ThermostatController:
    """Controller at power-on defaults (20°C, target 22°C)."""
    return initialize()

@pytest.fixture
def simulation_options():
    """Small tick budget for simulator tests."""
    return SimulationOptions(max_ticks=20, reconcile_each_tick=False)

@pytest.fixture
def simulator(controller, simulation_options):
    """Simulator driving the default controller."""
    return ThermostatSimulator(controller, simulation_options)

@pytest.fixture
def config_data():
    """Sample configuration data."""
    return {
        "app_options": {
            "log_level": "debug"
        },
        "simulation_options": {
            "max_ticks": 50,
            "reconcile_each_tick": True,
            "targets": [25, 15, 18]
        }
    }
