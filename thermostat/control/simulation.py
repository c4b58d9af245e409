"""
Tick driver for the thermostat controller.

Plays target changes against a controller and ticks it until it settles,
recording one entry per tick.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List, Optional
import structlog

from thermostat.config.settings import SimulationOptions
from thermostat.control.state_machine import ThermostatController, Mode, FanSpeed
from thermostat.core.exceptions import SimulationError

logger = structlog.get_logger(__name__)

@dataclass
class TickRecord:
    """One step of a simulation session."""
    tick: int
    operation: str
    current_temp: int
    target_temp: int
    mode: Mode
    fan_speed: FanSpeed
    changed: bool

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["mode"] = Mode(self.mode).value
        data["fan_speed"] = FanSpeed(self.fan_speed).value
        return data

class ThermostatSimulator:
    """Drives a controller one tick at a time."""

    def __init__(self, controller: ThermostatController,
                 options: Optional[SimulationOptions] = None):
        self.controller = controller
        self.options = options or SimulationOptions()
        self.tick_count = 0
        # Every record of the session, kept when a run fails part way
        self.history: List[TickRecord] = []

        logger.debug("Simulator initialized",
                     max_ticks=self.options.max_ticks,
                     reconcile_each_tick=self.options.reconcile_each_tick)

    def _record(self, operation: str, changed: bool) -> TickRecord:
        t = self.controller.thermostat
        record = TickRecord(
            tick=self.tick_count,
            operation=operation,
            current_temp=t.current_temp,
            target_temp=t.target_temp,
            mode=Mode(t.mode),
            fan_speed=FanSpeed(t.fan_speed),
            changed=changed,
        )
        self.history.append(record)
        return record

    def _step(self) -> TickRecord:
        mode = self.controller.thermostat.mode
        if mode == Mode.HEATING:
            operation = "advance_heating"
        elif mode == Mode.COOLING:
            operation = "advance_cooling"
        else:
            operation = "reconcile"

        before = self.controller.snapshot()
        self.controller.tick()
        if self.options.reconcile_each_tick:
            self.controller.reconcile()

        self.tick_count += 1
        return self._record(operation, self.controller.thermostat != before)

    def run_to_target(self, target: int) -> List[TickRecord]:
        """
        Apply ``target`` and tick until the controller is idle again.

        A rejected target yields a single unchanged ``set_target`` record.
        Raises SimulationError when ``max_ticks`` ticks do not settle it.
        """
        before = self.controller.snapshot()
        self.controller.set_target(target)
        history = [self._record("set_target", self.controller.thermostat != before)]

        if not history[0].changed:
            logger.info("Target ignored", new_target=target,
                        **self.controller.get_status())
            return history

        ticks = 0
        while self.controller.thermostat.mode != Mode.IDLE:
            if ticks >= self.options.max_ticks:
                status = self.controller.get_status()
                logger.error("Thermostat did not settle", max_ticks=self.options.max_ticks,
                             **status)
                raise SimulationError(
                    f"Thermostat did not settle within {self.options.max_ticks} ticks",
                    status,
                )
            record = self._step()
            history.append(record)
            ticks += 1

        logger.info("✅ Thermostat settled", ticks=ticks,
                    current_temp=self.controller.thermostat.current_temp,
                    target_temp=self.controller.thermostat.target_temp)
        return history

    def run(self, targets: Optional[Iterable[int]] = None) -> List[TickRecord]:
        """
        Play each target in order and return the records of this run.

        On SimulationError the records up to the failure stay in ``history``.
        """
        if targets is None:
            targets = self.options.targets

        start = len(self.history)
        for target in targets:
            self.run_to_target(target)
        return self.history[start:]
