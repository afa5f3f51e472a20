"""
session.py

Implements the ControlSession, the per-frame loop of the control screen:
apply input, dispatch command diffs to the mirror and the link on a fixed
cadence, and drain the vehicle's responses.
"""

import logging
import time
from collections import deque
from dataclasses import dataclass
from enum import Enum

from .command_diff import DEFAULT_MOTOR_MIX, diff
from .communication import SerialCommandChannel
from .control_state import ControlState, Key, KeyUp, QuitRequested
from .errors import LinkError
from .mock import MockRov


class SessionState(Enum):
    ACTIVE = "active"
    TERMINATING = "terminating"


@dataclass(frozen=True)
class Continue:
    pass


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class SwitchTo:
    screen: object


def is_quit_event(event) -> bool:
    return isinstance(event, QuitRequested) or (
        isinstance(event, KeyUp) and event.key is Key.ESCAPE
    )


class ControlSession:
    """
    Drives one ROV from operator input.

    - Input events update the current ControlState immediately.
    - At most once per dispatch interval, the diff against the previous state
      is applied to the mirror and sent over the channel in the same order.
    - A failed send is logged and counted; the session keeps dispatching on
      the following cycles.
    - Works without a channel (mirror only).
    """

    def __init__(self, channel, config, logger=None, clock=time.monotonic):
        """
        Args:
            channel: VehicleCommandChannel, or None to drive the mirror only.
            config: Settings with dispatch_interval_ms, motor_mix,
                sampler_capacity, sampler_pulse_s and response_history.
            logger: Logger used to surface recoverable errors and responses.
            clock: Monotonic time source in seconds.
        """
        self.channel = channel
        self.config = config
        self.log = logger or logging.getLogger(__name__)
        self.clock = clock

        self.dispatch_interval = config.dispatch_interval_ms / 1000.0
        self.motor_mix = config.motor_mix or DEFAULT_MOTOR_MIX

        self.state = SessionState.ACTIVE
        self.control_state = ControlState()
        self.prev_control_state = ControlState()
        self.mock_rov = MockRov(
            sampler_capacity=config.sampler_capacity,
            sampler_pulse_s=config.sampler_pulse_s,
            clock=clock,
        )
        self.last_write_time = clock()
        self.responses = deque(maxlen=config.response_history)
        self.send_failures = 0

    def update(self, events, now: float | None = None):
        """
        Run one frame.

        Args:
            events: Decoded input events pending since the last frame.
            now (float, optional): Current clock reading; read from the clock if omitted.
        Returns:
            Continue or Quit.
        """
        if self.state is SessionState.TERMINATING:
            return Quit()

        for event in events:
            if is_quit_event(event):
                self.state = SessionState.TERMINATING
                return Quit()
            self.control_state.apply_input_event(event)

        now = self.clock() if now is None else now
        if now - self.last_write_time >= self.dispatch_interval:
            self.dispatch(now)

        self.drain_responses()
        self.mock_rov.update(now)
        return Continue()

    def dispatch(self, now: float) -> list:
        """
        Diff, apply to the mirror, send, then roll the previous state forward.

        Returns:
            list: The commands emitted this cycle.
        """
        commands = diff(self.prev_control_state, self.control_state, self.motor_mix)

        for error in self.mock_rov.apply_all(commands, now):
            self.log.error(f"[Mirror] Rejected command: {error}")

        if self.channel is not None:
            for command in commands:
                try:
                    self.channel.send_command(command)
                except LinkError as e:
                    self.send_failures += 1
                    self.log.error(f"Failed to send {command!r}: {e}")

        self.control_state.sampler_release = False
        self.prev_control_state = self.control_state.snapshot()
        self.last_write_time = now
        return commands

    def drain_responses(self):
        if self.channel is None:
            return
        for response in self.channel.poll_responses():
            self.responses.append(response)
            self.log.info(f"[ROV] {response.text}")

    def close(self):
        """Release the channel. Safe to call more than once."""
        self.state = SessionState.TERMINATING
        if self.channel is not None:
            self.channel.close()
            self.channel = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def open_session(path: str | None, config, logger=None) -> ControlSession:
    """
    Open the serial link at *path* and wrap it in a session.

    Raises:
        LinkError: If the link cannot be opened. Callers treat this as fatal.
    """
    channel = None
    if path is not None:
        channel = SerialCommandChannel(
            path,
            baudrate=config.serial_baudrate,
            write_timeout=config.serial_write_timeout_s,
        )
    return ControlSession(channel, config, logger=logger)
