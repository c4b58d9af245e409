"""
Thermostat state machine.

The controller tracks a single ``Thermostat`` record and moves it between
Idle, Heating and Cooling one tick at a time. Operations whose preconditions
do not hold are skipped silently; the caller detects them by comparing the
record before and after the call.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional

from statemachine import StateMachine, State
import structlog

logger = structlog.get_logger(__name__)

MIN_TARGET_TEMP = 16
MAX_TARGET_TEMP = 30
DEFAULT_CURRENT_TEMP = 20
DEFAULT_TARGET_TEMP = 22

class Mode(str, Enum):
    """Thermostat operating modes."""
    IDLE = "idle"
    HEATING = "heating"
    COOLING = "cooling"

class FanSpeed(str, Enum):
    """Fan speeds."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

@dataclass
class Thermostat:
    """Thermostat record. ``mode`` is the state field of the controller."""
    current_temp: int = DEFAULT_CURRENT_TEMP
    target_temp: int = DEFAULT_TARGET_TEMP
    mode: Mode = Mode.IDLE
    fan_speed: FanSpeed = FanSpeed.LOW

class ThermostatController(StateMachine):
    """
    Thermostat state machine.

    Mode changes go through the declared transitions below; fan speed is
    set by the transition actions.
    """

    # States
    idle = State("Idle", value=Mode.IDLE, initial=True)
    heating = State("Heating", value=Mode.HEATING)
    cooling = State("Cooling", value=Mode.COOLING)

    # Transitions
    heat = idle.to(heating) | cooling.to(heating) | heating.to(heating)
    cool = idle.to(cooling) | heating.to(cooling) | cooling.to(cooling)
    settle = heating.to(idle) | cooling.to(idle) | idle.to(idle)
    step_heating = heating.to.itself(internal=True)
    step_cooling = cooling.to.itself(internal=True)

    def __init__(self, thermostat: Optional[Thermostat] = None):
        super().__init__(model=thermostat or Thermostat(), state_field="mode")
        logger.debug("Thermostat controller initialized",
                     current_state=self.current_state.name,
                     **self._context())

    @property
    def thermostat(self) -> Thermostat:
        """The record this controller drives."""
        return self.model

    def _context(self) -> Dict[str, Any]:
        t = self.model
        return {
            "current_temp": t.current_temp,
            "target_temp": t.target_temp,
            "mode": Mode(t.mode).value,
            "fan_speed": FanSpeed(t.fan_speed).value,
        }

    def snapshot(self) -> Thermostat:
        """Copy of the record, for before/after comparison."""
        return replace(self.model)

    def reset(self) -> "ThermostatController":
        """Restore the power-on defaults in place."""
        self.model.current_temp = DEFAULT_CURRENT_TEMP
        self.model.target_temp = DEFAULT_TARGET_TEMP
        self.settle()
        return self

    def set_target(self, new_target: int) -> "ThermostatController":
        """
        Set a new target temperature and pick the matching mode.

        Targets outside [16, 30], non-integers and the current target are
        ignored.
        """
        t = self.model
        if (isinstance(new_target, bool) or not isinstance(new_target, int)
                or not MIN_TARGET_TEMP <= new_target <= MAX_TARGET_TEMP
                or new_target == t.target_temp):
            logger.debug("Target rejected", new_target=new_target, **self._context())
            return self

        t.target_temp = new_target
        logger.info("🎯 Target changed", **self._context())

        if new_target > t.current_temp:
            self.heat()
        elif new_target < t.current_temp:
            self.cool()
        else:
            self.settle()
        return self

    def advance_heating(self) -> "ThermostatController":
        """Raise the current temperature by one degree while heating."""
        t = self.model
        if t.mode != Mode.HEATING or t.current_temp >= t.target_temp:
            logger.debug("Heating step skipped", **self._context())
            return self

        t.current_temp += 1
        if t.current_temp == t.target_temp:
            self.settle()
        else:
            self.step_heating()
        return self

    def advance_cooling(self) -> "ThermostatController":
        """Lower the current temperature by one degree while cooling."""
        t = self.model
        if t.mode != Mode.COOLING or t.current_temp <= t.target_temp:
            logger.debug("Cooling step skipped", **self._context())
            return self

        t.current_temp -= 1
        if t.current_temp == t.target_temp:
            self.settle()
        else:
            self.step_cooling()
        return self

    def reconcile(self) -> "ThermostatController":
        """Force Idle/Low when current and target temperatures already match."""
        t = self.model
        if t.current_temp != t.target_temp:
            return self
        self.settle()
        return self

    def tick(self) -> bool:
        """
        Run the operation matching the current mode.

        Returns True when the record changed.
        """
        before = self.snapshot()
        if self.model.mode == Mode.HEATING:
            self.advance_heating()
        elif self.model.mode == Mode.COOLING:
            self.advance_cooling()
        else:
            self.reconcile()
        return self.model != before

    # Transition actions
    def on_heat(self) -> None:
        self.model.fan_speed = FanSpeed.HIGH

    def on_cool(self) -> None:
        self.model.fan_speed = FanSpeed.HIGH

    def on_settle(self) -> None:
        self.model.fan_speed = FanSpeed.LOW

    def on_step_heating(self) -> None:
        self.model.fan_speed = FanSpeed.MEDIUM

    def on_step_cooling(self) -> None:
        self.model.fan_speed = FanSpeed.MEDIUM

    # State event handlers
    def on_enter_heating(self) -> None:
        """Handler for entering heating state."""
        logger.info("🔥 Entering heating mode",
                    current_temp=self.model.current_temp,
                    target_temp=self.model.target_temp)

    def on_enter_cooling(self) -> None:
        """Handler for entering cooling state."""
        logger.info("❄️ Entering cooling mode",
                    current_temp=self.model.current_temp,
                    target_temp=self.model.target_temp)

    def on_enter_idle(self) -> None:
        """Handler for entering idle state."""
        logger.info("⏸️ Entering idle mode",
                    current_temp=self.model.current_temp,
                    target_temp=self.model.target_temp)

    def get_status(self) -> Dict[str, Any]:
        """Get status information."""
        t = self.model
        return {
            "current_state": self.current_state.name,
            "mode": Mode(t.mode).value,
            "fan_speed": FanSpeed(t.fan_speed).value,
            "current_temp": t.current_temp,
            "target_temp": t.target_temp,
            "delta": t.target_temp - t.current_temp,
            "converged": t.current_temp == t.target_temp,
        }

def initialize() -> ThermostatController:
    """Create a controller at the power-on defaults."""
    return ThermostatController(Thermostat())

def set_target(controller: ThermostatController, new_target: int) -> ThermostatController:
    return controller.set_target(new_target)

def advance_heating(controller: ThermostatController) -> ThermostatController:
    return controller.advance_heating()

def advance_cooling(controller: ThermostatController) -> ThermostatController:
    return controller.advance_cooling()

def reconcile(controller: ThermostatController) -> ThermostatController:
    return controller.reconcile()
