"""
control_state.py

Operator intent for the ROV: thrust axes plus mode and relay flags.
ControlState is updated immediately by decoded controller events and copied
into a "previous" snapshot after every dispatch cycle.
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from .utils import clamp

AXIS_SCALE = 32768.0


class ThrustMode(Enum):
    NORMAL = "normal"
    EMERGENCY = "emergency"


class SamplerReleaseMode(Enum):
    ONE = "one"
    ALL = "all"


class Axis(Enum):
    LEFT_X = "left_x"
    LEFT_Y = "left_y"
    RIGHT_X = "right_x"
    RIGHT_Y = "right_y"
    TRIGGER_LEFT = "trigger_left"
    TRIGGER_RIGHT = "trigger_right"


class Button(Enum):
    A = "a"
    B = "b"
    X = "x"
    Y = "y"
    BACK = "back"
    START = "start"
    LEFT_SHOULDER = "left_shoulder"
    RIGHT_SHOULDER = "right_shoulder"


class Key(Enum):
    ESCAPE = "escape"


@dataclass(frozen=True)
class AxisMotion:
    """Axis reading; raw signed 16-bit int or an already normalized float."""

    axis: Axis
    value: int | float


@dataclass(frozen=True)
class ButtonDown:
    button: Button


@dataclass(frozen=True)
class ButtonUp:
    button: Button


@dataclass(frozen=True)
class KeyUp:
    key: Key


@dataclass(frozen=True)
class QuitRequested:
    pass


def normalize_axis(value: int | float) -> float:
    """
    Convert an axis reading to a thrust value in [-1.0, 1.0].

    Ints are treated as raw signed 16-bit readings and divided by 32768,
    so -32768 maps to exactly -1.0 and 32767 to just under 1.0.
    """
    if isinstance(value, int):
        value = value / AXIS_SCALE
    return clamp(float(value), -1.0, 1.0)


_AXIS_FIELDS = {
    Axis.LEFT_Y: "forward_thrust",
    Axis.LEFT_X: "sideways_thrust",
    Axis.RIGHT_X: "rotational_thrust",
    Axis.TRIGGER_LEFT: "ascent_thrust",
    Axis.TRIGGER_RIGHT: "descent_thrust",
}


@dataclass
class ControlState:
    """
    Snapshot of what the operator is asking the vehicle to do.

    Toggles (lights, master power) flip on a button-down edge; a repeated
    button-down for a button that is already held is not a new edge.
    Mode fields follow the shoulder buttons' held state.
    """

    forward_thrust: float = 0.0
    sideways_thrust: float = 0.0
    rotational_thrust: float = 0.0
    ascent_thrust: float = 0.0
    descent_thrust: float = 0.0
    power_master: bool = False
    power_lights: bool = False
    sampler_release: bool = False
    thrust_mode: ThrustMode = ThrustMode.NORMAL
    sampler_release_mode: SamplerReleaseMode = SamplerReleaseMode.ONE
    held_buttons: set = field(default_factory=set, repr=False, compare=False)

    def axes(self) -> tuple[float, float, float, float, float]:
        """Thrust axes in mixing order: forward, sideways, rotational, ascent, descent."""
        return (
            self.forward_thrust,
            self.sideways_thrust,
            self.rotational_thrust,
            self.ascent_thrust,
            self.descent_thrust,
        )

    def snapshot(self) -> "ControlState":
        """Independent copy, used as the previous state of the next cycle."""
        return replace(self, held_buttons=set(self.held_buttons))

    def apply_input_event(self, event) -> None:
        """
        Update the one field bound to *event*.

        Args:
            event: AxisMotion, ButtonDown or ButtonUp. Anything else is ignored.
        """
        if isinstance(event, AxisMotion):
            name = _AXIS_FIELDS.get(event.axis)
            if name is not None:
                setattr(self, name, normalize_axis(event.value))
        elif isinstance(event, ButtonDown):
            if event.button in self.held_buttons:
                return
            self.held_buttons.add(event.button)
            self._on_button_down(event.button)
        elif isinstance(event, ButtonUp):
            self.held_buttons.discard(event.button)
            self._on_button_up(event.button)

    def _on_button_down(self, button: Button) -> None:
        if button is Button.Y:
            self.power_lights = not self.power_lights
        elif button is Button.START:
            self.power_master = not self.power_master
        elif button is Button.B:
            self.sampler_release = True
        elif button is Button.RIGHT_SHOULDER:
            self.thrust_mode = ThrustMode.EMERGENCY
        elif button is Button.LEFT_SHOULDER:
            self.sampler_release_mode = SamplerReleaseMode.ALL

    def _on_button_up(self, button: Button) -> None:
        if button is Button.RIGHT_SHOULDER:
            self.thrust_mode = ThrustMode.NORMAL
        elif button is Button.LEFT_SHOULDER:
            self.sampler_release_mode = SamplerReleaseMode.ONE
