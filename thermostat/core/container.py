"""
Dependency injection container for the thermostat simulator.

"""

from dependency_injector import containers, providers
import structlog

from thermostat.config.loader import ConfigLoader
from thermostat.control.state_machine import initialize
from thermostat.control.simulation import ThermostatSimulator

logger = structlog.get_logger(__name__)


class ApplicationContainer(containers.DeclarativeContainer):
    """
    Main dependency injection container.


    """

    # Configuration
    config = providers.Configuration()

    # Settings from file, or defaults when no file is configured
    settings = providers.Singleton(
        ConfigLoader.load_settings, config_file=config.config_file
    )

    # A fresh controller at power-on defaults
    thermostat_controller = providers.Singleton(initialize)

    simulator = providers.Singleton(
        ThermostatSimulator,
        controller=thermostat_controller,
        options=settings.provided.simulation_options,
    )


class ContainerBuilder:
    """
    Builder for setting up the application container.


    """

    def __init__(self):
        self.container = ApplicationContainer()
        self._config_file: str | None = None

    def with_config_file(self, config_file: str | None) -> "ContainerBuilder":
        """Set configuration file path."""
        self._config_file = config_file
        return self

    def build(self) -> ApplicationContainer:
        """Build and configure the container."""

        logger.debug("Building application container", config_file=self._config_file)

        self.container.config.from_dict({"config_file": self._config_file})

        return self.container


def create_container(config_file: str | None = None) -> ApplicationContainer:
    """
    Convenience function to create a configured container.
    """

    return ContainerBuilder().with_config_file(config_file).build()
