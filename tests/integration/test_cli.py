"""
Integration tests for the container and the command line entry point.
"""

import pytest
import yaml

from thermostat.control.state_machine import Mode
from thermostat.control.simulation import ThermostatSimulator
from thermostat.core.container import create_container
from thermostat.core.exceptions import ConfigurationError
from thermostat.main import main, build_parser

@pytest.fixture
def config_file(tmp_path, config_data):
    """Config file with targets 25, 15 and 18."""
    path = tmp_path / "thermostat.yaml"
    path.write_text(yaml.dump(config_data), encoding="utf-8")
    return str(path)

class TestContainer:
    """Dependency injection wiring."""

    def test_defaults_without_config(self):
        container = create_container()

        settings = container.settings()
        simulator = container.simulator()

        assert settings.simulation_options.max_ticks == 100
        assert isinstance(simulator, ThermostatSimulator)
        assert simulator.controller is container.thermostat_controller()
        assert simulator.controller.thermostat.mode == Mode.IDLE

    def test_settings_from_file(self, config_file):
        container = create_container(config_file)

        simulator = container.simulator()

        assert simulator.options.max_ticks == 50
        assert simulator.options.targets == [25, 15, 18]

    def test_missing_config_file(self):
        container = create_container("missing.yaml")

        with pytest.raises(ConfigurationError):
            container.settings()

class TestMain:
    """Command line runs."""

    def test_single_target(self, capsys):
        exit_code = main(["--target", "23", "--log-level", "error"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "set_target" in out
        assert out.count("advance_heating") == 3
        assert "Final: 23°C (target 23°C), mode=idle, fan=low" in out

    def test_config_targets(self, config_file, capsys):
        exit_code = main(["--config", config_file, "--log-level", "error"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert out.count("advance_heating") == 5
        assert out.count("advance_cooling") == 7
        assert "Final: 18°C (target 18°C), mode=idle, fan=low" in out

    def test_cli_targets_override_config(self, config_file, capsys):
        exit_code = main(["-c", config_file, "-t", "19", "--log-level", "error"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "advance_heating" not in out
        assert "Final: 19°C" in out

    def test_default_config_discovery(self, tmp_path, config_data, capsys):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "thermostat.yaml").write_text(
            yaml.dump({"simulation_options": {"targets": [21]}}), encoding="utf-8"
        )

        exit_code = main(["--log-level", "error"])

        assert exit_code == 0
        assert "Final: 21°C" in capsys.readouterr().out

    def test_max_ticks_exceeded(self, capsys):
        exit_code = main(["-t", "30", "--max-ticks", "2", "--log-level", "error"])

        out = capsys.readouterr().out
        assert exit_code == 1
        assert "did not settle within 2 ticks" in out

    def test_failed_session_prints_completed_ticks(self, capsys):
        exit_code = main(["-t", "21", "-t", "30", "--max-ticks", "3", "--log-level", "error"])

        out = capsys.readouterr().out
        assert exit_code == 1
        # Target 21 settled before target 30 ran out of ticks
        assert out.count("advance_heating") == 1 + 3
        assert "21°C ->  21°C  mode=idle" in out
        assert "did not settle within 3 ticks" in out

    def test_invalid_max_ticks(self, capsys):
        exit_code = main(["-t", "25", "--max-ticks", "0", "--log-level", "error"])

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "max_ticks" in captured.out
        assert "max_ticks" in captured.err

    def test_missing_config(self, capsys):
        exit_code = main(["--config", "missing.yaml", "--log-level", "error"])

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "Configuration file not found: missing.yaml" in captured.out
        assert "missing.yaml" in captured.err
        assert "\n\n" not in captured.err

    def test_validate_config(self, config_file, capsys):
        exit_code = main(["--validate-config", "-c", config_file, "--log-level", "error"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Configuration is valid" in out
        assert "Max ticks: 50" in out
        assert "Targets: [25, 15, 18]" in out

    def test_validate_missing_config(self, capsys):
        exit_code = main(["--validate-config", "-c", "missing.yaml", "--log-level", "error"])

        assert exit_code == 1
        assert "Configuration validation failed" in capsys.readouterr().out

    def test_parser_collects_targets(self):
        args = build_parser().parse_args(["-t", "25", "-t", "18", "--reconcile"])

        assert args.targets == [25, 18]
        assert args.reconcile is True
        assert args.log_level is None
