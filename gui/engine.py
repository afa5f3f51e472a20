"""
engine.py

Shared resources handed to whichever screen is active: the window, the gamepad
and the configuration.
"""

from dataclasses import dataclass


@dataclass
class Engine:
    window: object
    gamepad: object
    config: object

    def poll_events(self) -> list:
        """Window events first, then gamepad events, in arrival order per source."""
        events = self.window.take_events()
        if self.gamepad is not None:
            events.extend(self.gamepad.poll_events())
        return events
