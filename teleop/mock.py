"""
mock.py

A mock ROV that reflects the state the real vehicle should be in, given the
exact command sequence sent to it. Used only for on-screen feedback; it never
talks to the link and ignores whether the real vehicle acknowledged anything.
"""

import time

from .commands import (
    ALL_SAMPLES,
    MOTOR_COUNT,
    CollectSamples,
    ControlMotor,
    LightsOff,
    LightsOn,
    MasterOff,
    MasterOn,
)
from .errors import InvariantError


class MockRov:
    """
    Local mirror of the vehicle's actuators.

    - motors: last throttle applied per motor.
    - light_relay / robot_is_on: relay states.
    - sampler_relay: energized for sampler_pulse_s after a CollectSamples.
    - samples_loaded: samples left in the sampler.
    """

    def __init__(self, sampler_capacity: int = 4, sampler_pulse_s: float = 0.5, clock=time.monotonic):
        self.sampler_capacity = sampler_capacity
        self.sampler_pulse_s = sampler_pulse_s
        self.clock = clock
        self.reset()

    def reset(self):
        """Return to the power-on state."""
        self.motors = [0] * MOTOR_COUNT
        self.light_relay = False
        self.sampler_relay = False
        self.robot_is_on = False
        self.samples_loaded = self.sampler_capacity
        self._sampler_release_at = None

    def snapshot(self) -> dict:
        return {
            "motors": list(self.motors),
            "light_relay": self.light_relay,
            "sampler_relay": self.sampler_relay,
            "robot_is_on": self.robot_is_on,
            "samples_loaded": self.samples_loaded,
        }

    def apply_all(self, commands, now: float | None = None) -> list[InvariantError]:
        """
        Apply *commands* in order.

        A rejected command does not stop the ones after it.

        Returns:
            list[InvariantError]: One entry per rejected command, for the caller to report.
        """
        rejected = []
        for command in commands:
            try:
                self.apply(command, now)
            except InvariantError as e:
                rejected.append(e)
        return rejected

    def apply(self, command, now: float | None = None):
        """
        Apply a single command.

        Args:
            command: Command to mirror.
            now (float, optional): Time a sampler pulse starts from; read from the clock if omitted.
        Raises:
            InvariantError: For an out-of-range motor index or an unmodeled command kind.
                The mirror is left unchanged.
        """
        if isinstance(command, ControlMotor):
            if not 0 <= command.id < len(self.motors):
                raise InvariantError(f"Motor index {command.id} out of range for {len(self.motors)} motors")
            self.motors[command.id] = command.throttle
        elif isinstance(command, CollectSamples):
            self._collect_samples(command.amount, now)
        elif isinstance(command, LightsOn):
            self.light_relay = True
        elif isinstance(command, LightsOff):
            self.light_relay = False
        elif isinstance(command, MasterOn):
            self.robot_is_on = True
        elif isinstance(command, MasterOff):
            self.robot_is_on = False
        else:
            raise InvariantError(f"Command not modeled by the mirror: {command!r}")

    def _collect_samples(self, amount: int, now: float | None):
        if amount == ALL_SAMPLES:
            amount = self.samples_loaded
        if amount < 0:
            raise InvariantError(f"Negative sample amount {amount}")
        self.samples_loaded = max(self.samples_loaded - amount, 0)
        # Pulses even when empty.
        self.sampler_relay = True
        now = self.clock() if now is None else now
        self._sampler_release_at = now + self.sampler_pulse_s

    def update(self, now: float | None = None):
        """De-energize the sampler relay once its pulse has elapsed."""
        if self._sampler_release_at is None:
            return
        now = self.clock() if now is None else now
        if now >= self._sampler_release_at:
            self.sampler_relay = False
            self._sampler_release_at = None
