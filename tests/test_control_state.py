"""Tests for ControlState input handling."""

from teleop.control_state import (
    Axis,
    AxisMotion,
    Button,
    ButtonDown,
    ButtonUp,
    ControlState,
    SamplerReleaseMode,
    ThrustMode,
    normalize_axis,
)


def test_raw_axis_extremes() -> None:
    """Signed 16-bit extremes map to -1.0 and just under 1.0."""
    assert normalize_axis(-32768) == -1.0
    assert 0.9999 < normalize_axis(32767) < 1.0
    assert normalize_axis(0) == 0.0


def test_float_axis_values_are_clamped() -> None:
    assert normalize_axis(1.7) == 1.0
    assert normalize_axis(-3.0) == -1.0
    assert normalize_axis(0.25) == 0.25


def test_axis_motion_sets_bound_field() -> None:
    state = ControlState()
    state.apply_input_event(AxisMotion(Axis.LEFT_Y, 16384))
    state.apply_input_event(AxisMotion(Axis.LEFT_X, -0.5))
    state.apply_input_event(AxisMotion(Axis.RIGHT_X, 2.0))
    state.apply_input_event(AxisMotion(Axis.TRIGGER_LEFT, 32767))
    state.apply_input_event(AxisMotion(Axis.TRIGGER_RIGHT, -32768))

    assert state.forward_thrust == 0.5
    assert state.sideways_thrust == -0.5
    assert state.rotational_thrust == 1.0
    assert 0.9999 < state.ascent_thrust < 1.0
    assert state.descent_thrust == -1.0


def test_unbound_axis_and_unknown_events_are_ignored() -> None:
    state = ControlState()
    state.apply_input_event(AxisMotion(Axis.RIGHT_Y, 12000))
    state.apply_input_event("not an event")
    state.apply_input_event(ButtonDown(Button.X))

    assert state == ControlState()


def test_lights_toggle_on_each_press() -> None:
    state = ControlState()
    state.apply_input_event(ButtonDown(Button.Y))
    assert state.power_lights is True

    state.apply_input_event(ButtonUp(Button.Y))
    state.apply_input_event(ButtonDown(Button.Y))
    assert state.power_lights is False


def test_repeated_button_down_is_not_a_new_edge() -> None:
    """Identical repeated events leave the state as the first one did."""
    state = ControlState()
    state.apply_input_event(ButtonDown(Button.START))
    state.apply_input_event(ButtonDown(Button.START))

    assert state.power_master is True


def test_repeated_axis_events_are_idempotent() -> None:
    state = ControlState()
    for _ in range(3):
        state.apply_input_event(AxisMotion(Axis.LEFT_X, 8192))
    assert state.sideways_thrust == 0.25


def test_shoulder_buttons_are_level_triggered() -> None:
    state = ControlState()
    state.apply_input_event(ButtonDown(Button.RIGHT_SHOULDER))
    state.apply_input_event(ButtonDown(Button.LEFT_SHOULDER))
    assert state.thrust_mode is ThrustMode.EMERGENCY
    assert state.sampler_release_mode is SamplerReleaseMode.ALL

    state.apply_input_event(ButtonUp(Button.RIGHT_SHOULDER))
    state.apply_input_event(ButtonUp(Button.LEFT_SHOULDER))
    assert state.thrust_mode is ThrustMode.NORMAL
    assert state.sampler_release_mode is SamplerReleaseMode.ONE


def test_sampler_release_button_sets_one_shot_flag() -> None:
    state = ControlState()
    state.apply_input_event(ButtonDown(Button.B))
    assert state.sampler_release is True


def test_snapshot_is_independent() -> None:
    state = ControlState()
    state.apply_input_event(ButtonDown(Button.Y))
    snapshot = state.snapshot()

    state.apply_input_event(ButtonUp(Button.Y))
    state.apply_input_event(AxisMotion(Axis.LEFT_Y, 0.3))

    assert snapshot.forward_thrust == 0.0
    assert Button.Y in snapshot.held_buttons
    assert Button.Y not in state.held_buttons
