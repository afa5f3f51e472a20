"""
command_diff.py

Turns two ControlState snapshots into the minimal ordered list of commands
that moves the vehicle from the old intent to the new one.
Motor outputs are mixed from the five thrust axes using the vehicle geometry.
"""

from .commands import (
    ALL_SAMPLES,
    CollectSamples,
    ControlMotor,
    LightsOff,
    LightsOn,
    MasterOff,
    MasterOn,
    MotorId,
)
from .control_state import ControlState, SamplerReleaseMode, ThrustMode
from .utils import clamp

THROTTLE_MAX = 32767
EMERGENCY_MULTIPLIER = 2.0

# Weights over (forward, sideways, rotational, ascent, descent).
# Motors 1-4 are vectored horizontal thrusters at the corners, 5-6 vertical.
DEFAULT_MOTOR_MIX = (
    (0.5, -0.5, -0.5, 0.0, 0.0),  # MOTOR_1 front right
    (0.5, 0.5, 0.5, 0.0, 0.0),  # MOTOR_2 front left
    (0.5, 0.5, -0.5, 0.0, 0.0),  # MOTOR_3 rear right
    (0.5, -0.5, 0.5, 0.0, 0.0),  # MOTOR_4 rear left
    (0.0, 0.0, 0.0, 0.5, -0.5),  # MOTOR_5 vertical
    (0.0, 0.0, 0.0, 0.5, -0.5),  # MOTOR_6 vertical
)


def motor_outputs(state: ControlState, mix=DEFAULT_MOTOR_MIX) -> list[int]:
    """
    Compute the throttle of every motor for *state*.

    Emergency mode scales the mixed value before clamping, so the result
    changes on a mode switch even when the axes do not.

    Returns:
        list[int]: One signed 16-bit throttle per motor, indexed by MotorId.
    """
    multiplier = EMERGENCY_MULTIPLIER if state.thrust_mode is ThrustMode.EMERGENCY else 1.0
    axes = state.axes()
    outputs = []
    for weights in mix:
        mixed = sum(w * a for w, a in zip(weights, axes)) * multiplier
        outputs.append(int(round(clamp(mixed, -1.0, 1.0) * THROTTLE_MAX)))
    return outputs


def diff(previous: ControlState, current: ControlState, mix=DEFAULT_MOTOR_MIX) -> list:
    """
    Commands needed to go from *previous* to *current*.

    Order: motor changes by motor id, lights, master power, then the
    sampler release, which is emitted whenever it is set on *current*.
    Pure function; calling it twice with the same snapshots gives the same list.
    """
    commands = []

    before = motor_outputs(previous, mix)
    after = motor_outputs(current, mix)
    for motor in MotorId:
        if after[motor] != before[motor]:
            commands.append(ControlMotor(id=int(motor), throttle=after[motor]))

    if current.power_lights != previous.power_lights:
        commands.append(LightsOn() if current.power_lights else LightsOff())

    if current.power_master != previous.power_master:
        commands.append(MasterOn() if current.power_master else MasterOff())

    if current.sampler_release:
        if current.sampler_release_mode is SamplerReleaseMode.ALL:
            commands.append(CollectSamples(amount=ALL_SAMPLES))
        else:
            commands.append(CollectSamples(amount=1))

    return commands
