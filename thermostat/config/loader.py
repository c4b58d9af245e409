"""
Configuration loader for the thermostat simulator.

Reads a YAML file with ``app_options`` and ``simulation_options`` sections,
expands ``${ENV_VAR}`` placeholders and validates the result as ``Settings``.
"""

import os
import re
import yaml
from typing import Dict, Any, Optional
from pathlib import Path
import structlog
from pydantic import ValidationError

from thermostat.config.settings import Settings
from thermostat.core.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)

CONFIG_ENV_VAR = "THERMOSTAT_CONFIG_FILE"
DEFAULT_CONFIG_PATHS = [
    "config/thermostat.yaml",
    "thermostat.yaml",
]

# ${NAME} anywhere inside a string value
ENV_PLACEHOLDER = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")

class ConfigLoader:
    """Configuration loader with YAML support and environment overrides."""

    @staticmethod
    def load_yaml(file_path: str) -> Dict[str, Any]:
        """
        Read the option sections from a YAML file.

        The document must be a mapping. Sections the thermostat does not know
        are reported and left for ``Settings`` to ignore.
        """
        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        try:
            config_data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML configuration: {e}") from e

        if config_data is None:
            raise ValueError(f"Empty configuration file: {file_path}")
        if not isinstance(config_data, dict):
            raise ValueError(
                f"Configuration must be a mapping of option sections, got {type(config_data).__name__}"
            )

        unknown = sorted(set(config_data) - set(Settings.model_fields))
        if unknown:
            logger.warning("Unknown configuration sections", sections=", ".join(unknown))

        logger.info("Loaded configuration", path=path.name,
                    sections=", ".join(sorted(config_data)))
        return config_data

    @staticmethod
    def apply_env_overrides(config_data: Any) -> Any:
        """
        Expand ``${ENV_VAR}`` placeholders in string values.

        Placeholders may sit inside longer strings. Unset variables are left
        as written.
        """

        def _expand(match: re.Match) -> str:
            value = os.getenv(match.group(1))
            if value is None:
                logger.warning("Environment variable not found", env_var=match.group(1))
                return match.group(0)
            return value

        if isinstance(config_data, dict):
            return {k: ConfigLoader.apply_env_overrides(v) for k, v in config_data.items()}
        if isinstance(config_data, list):
            return [ConfigLoader.apply_env_overrides(item) for item in config_data]
        if isinstance(config_data, str):
            return ENV_PLACEHOLDER.sub(_expand, config_data)
        return config_data

    @classmethod
    def load_settings(cls, config_file: Optional[str] = None, apply_env: bool = True) -> Settings:
        """Load and validate settings from a YAML file.

        Without a file the defaults (plus environment overrides) are used.
        """
        if not config_file:
            logger.debug("No configuration file, using defaults")
            return Settings()

        logger.info("Loading thermostat configuration", config_file=str(config_file))

        try:
            config_data = cls.load_yaml(config_file)

            if apply_env:
                config_data = cls.apply_env_overrides(config_data)

            settings = Settings(**config_data)

        except (FileNotFoundError, ValueError, ValidationError) as e:
            logger.error(
                "Failed to load configuration", config_file=str(config_file), error=str(e)
            )
            raise ConfigurationError(
                f"Invalid configuration: {e}", {"config_file": str(config_file)}
            ) from e

        logger.info(
            "Configuration loaded and validated successfully",
            log_level=settings.app_options.log_level.value,
            max_ticks=settings.simulation_options.max_ticks,
            targets_count=len(settings.simulation_options.targets),
        )

        return settings

    @staticmethod
    def get_default_config_path() -> Optional[str]:
        """Get default configuration file path, if one exists."""
        config_path = os.getenv(CONFIG_ENV_VAR)
        if config_path:
            return config_path

        for path in DEFAULT_CONFIG_PATHS:
            if Path(path).exists():
                return path

        return None
