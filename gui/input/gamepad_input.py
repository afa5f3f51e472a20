"""
gamepad_input.py

Provides the GamepadInput class, which turns pygame joystick events into the
control core's input events (AxisMotion, ButtonDown, ButtonUp, QuitRequested).
Handles deadzone logic, trigger rescaling and the configurable axis/button layout.
"""

import pygame
import logging

from teleop.control_state import Axis, AxisMotion, Button, ButtonDown, ButtonUp, QuitRequested
from teleop.utils import scale

log = logging.getLogger(__name__)

_TRIGGERS = (Axis.TRIGGER_LEFT, Axis.TRIGGER_RIGHT)
# Pushing a stick forward reads negative on SDL
_INVERTED = (Axis.LEFT_Y, Axis.RIGHT_Y)


class GamepadInput:
    """
    Event-driven gamepad source for the control screen.

    - Initializes pygame's joystick subsystem and opens the first joystick.
    - Picks up a joystick plugged in later.
    - Maps joystick axis/button numbers to logical axes/buttons via config.
    """

    def __init__(self, cfg):
        """
        Args:
            cfg: Configuration object with gamepad parameters:
                - gamepad_deadzone (float)
                - gamepad_trigger_rescale (bool)
                - gamepad_axis_map (dict[str, int])
                - gamepad_button_map (dict[str, int])
        Raises:
            RuntimeError: If no joystick is detected on initialization.
        """
        pygame.init()
        pygame.joystick.init()

        self.axis_deadzone = cfg.gamepad_deadzone
        self.trigger_rescale = cfg.gamepad_trigger_rescale
        self.axis_map = {index: Axis(name) for name, index in cfg.gamepad_axis_map.items()}
        self.button_map = {index: Button(name) for name, index in cfg.gamepad_button_map.items()}

        if pygame.joystick.get_count() == 0:
            raise RuntimeError("No joystick detected")

        self.joystick = pygame.joystick.Joystick(0)
        self.joystick.init()
        log.info(f"Initialized joystick: {self.joystick.get_name()}")

    def _linear_thrust(self, axis: Axis, value: float) -> float:
        """
        Rescale triggers to [0, 1], flip forward-negative sticks and apply the deadzone.

        Args:
            axis (Axis): Logical axis the reading belongs to.
            value (float): Raw pygame axis reading in [-1, 1].
        Returns:
            float: Thrust value after rescaling and deadzone.
        """
        if axis in _TRIGGERS and self.trigger_rescale:
            value = scale(value, -1.0, 1.0, 0.0, 1.0)
        elif axis in _INVERTED:
            value = -value
        return 0.0 if abs(value) < self.axis_deadzone else value

    def translate(self, event):
        """
        Convert one pygame event into a control event.

        Returns:
            The control event, or None if the event has no binding.
        """
        if event.type == pygame.QUIT:
            return QuitRequested()
        if event.type == pygame.JOYAXISMOTION:
            axis = self.axis_map.get(event.axis)
            if axis is None:
                return None
            return AxisMotion(axis, self._linear_thrust(axis, event.value))
        if event.type in (pygame.JOYBUTTONDOWN, pygame.JOYBUTTONUP):
            button = self.button_map.get(event.button)
            if button is None:
                return None
            if event.type == pygame.JOYBUTTONDOWN:
                return ButtonDown(button)
            return ButtonUp(button)
        if event.type == pygame.JOYDEVICEADDED and self.joystick is None:
            self.joystick = pygame.joystick.Joystick(event.device_index)
            self.joystick.init()
            log.info(f"Joystick connected: {self.joystick.get_name()}")
        elif event.type == pygame.JOYDEVICEREMOVED:
            log.warning("Joystick disconnected")
            self.joystick = None
        return None

    def close(self):
        pygame.joystick.quit()
        pygame.quit()

    def poll_events(self) -> list:
        """Drain pygame's queue and return the translated control events."""
        events = []
        for event in pygame.event.get():
            translated = self.translate(event)
            if translated is not None:
                events.append(translated)
            elif event.type == pygame.JOYDEVICEREMOVED:
                events.extend(self._release_all())
        return events

    def _release_all(self) -> list:
        """Neutral sticks and released buttons, for a controller that dropped out mid-input."""
        events = [AxisMotion(axis, 0.0) for axis in self.axis_map.values()]
        events.extend(ButtonUp(button) for button in self.button_map.values())
        return events
