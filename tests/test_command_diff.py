"""Tests for the command diff engine."""

import itertools

import pytest

from teleop.command_diff import DEFAULT_MOTOR_MIX, THROTTLE_MAX, diff, motor_outputs
from teleop.commands import (
    ALL_SAMPLES,
    CollectSamples,
    ControlMotor,
    LightsOff,
    LightsOn,
    MasterOff,
    MasterOn,
)
from teleop.control_state import ControlState, SamplerReleaseMode, ThrustMode


def _states():
    for lights, release, mode, forward in itertools.product(
        (False, True), (False, True), ThrustMode, (0.0, 0.5, -1.0)
    ):
        yield ControlState(
            forward_thrust=forward,
            ascent_thrust=0.3,
            power_lights=lights,
            sampler_release=release,
            thrust_mode=mode,
        )


@pytest.mark.parametrize("state", list(_states()))
def test_same_state_only_emits_sampler_release(state) -> None:
    commands = diff(state, state)
    if state.sampler_release:
        assert commands == [CollectSamples(amount=1)]
    else:
        assert commands == []


def test_forward_thrust_and_lights_scenario() -> None:
    """Forward thrust drives the four horizontal motors, then the lights switch on."""
    previous = ControlState()
    current = ControlState(forward_thrust=0.5, power_lights=True)

    commands = diff(previous, current)

    assert commands == [
        ControlMotor(id=0, throttle=8192),
        ControlMotor(id=1, throttle=8192),
        ControlMotor(id=2, throttle=8192),
        ControlMotor(id=3, throttle=8192),
        LightsOn(),
    ]


def test_emergency_mode_alone_changes_motor_outputs() -> None:
    previous = ControlState(forward_thrust=0.5)
    current = ControlState(forward_thrust=0.5, thrust_mode=ThrustMode.EMERGENCY)

    commands = diff(previous, current)

    assert commands == [ControlMotor(id=motor, throttle=16384) for motor in range(4)]


def test_emergency_output_is_clamped_to_throttle_range() -> None:
    state = ControlState(
        forward_thrust=1.0, sideways_thrust=1.0, thrust_mode=ThrustMode.EMERGENCY
    )
    outputs = motor_outputs(state)
    assert max(outputs) == THROTTLE_MAX
    assert all(-THROTTLE_MAX <= value <= THROTTLE_MAX for value in outputs)


def test_vertical_motors_follow_ascent_and_descent() -> None:
    outputs = motor_outputs(ControlState(ascent_thrust=1.0, descent_thrust=0.5))
    assert outputs[:4] == [0, 0, 0, 0]
    assert outputs[4] == outputs[5] == round(0.25 * THROTTLE_MAX)


def test_lights_and_master_off() -> None:
    previous = ControlState(power_lights=True, power_master=True)
    current = ControlState()

    assert diff(previous, current) == [LightsOff(), MasterOff()]


def test_master_on_precedes_sampler_release() -> None:
    previous = ControlState()
    current = ControlState(
        power_master=True,
        sampler_release=True,
        sampler_release_mode=SamplerReleaseMode.ALL,
    )

    assert diff(previous, current) == [MasterOn(), CollectSamples(amount=ALL_SAMPLES)]


def test_diff_is_idempotent_and_pure() -> None:
    previous = ControlState()
    current = ControlState(rotational_thrust=-0.4, power_lights=True, sampler_release=True)
    before = (previous.snapshot(), current.snapshot())

    assert diff(previous, current) == diff(previous, current)
    assert (previous, current) == before


def test_custom_mix_is_used() -> None:
    mix = [[1.0, 0.0, 0.0, 0.0, 0.0]] + [[0.0] * 5] * 5
    commands = diff(ControlState(), ControlState(forward_thrust=0.5), mix)
    assert commands == [ControlMotor(id=0, throttle=16384)]


def test_default_mix_covers_every_motor() -> None:
    assert len(DEFAULT_MOTOR_MIX) == 6
    assert all(len(weights) == 5 for weights in DEFAULT_MOTOR_MIX)
