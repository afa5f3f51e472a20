"""
commands.py

Discrete hardware commands sent to the ROV and their wire encoding.

Frames are: b"$R" + [version] + [payload_size] + [cmd_id] + payload + checksum.
The checksum is the XOR of size, command id and each payload byte.
Bump PROTOCOL_VERSION whenever the byte layout changes.
"""

import struct
from dataclasses import dataclass
from enum import IntEnum

from .errors import DecodeError, EncodingError

MOTOR_COUNT = 6
ALL_SAMPLES = 0xFF

FRAME_HEADER = b"$R"
PROTOCOL_VERSION = 1
# header + version + size + cmd id + checksum
FRAME_OVERHEAD = len(FRAME_HEADER) + 4


class MotorId(IntEnum):
    MOTOR_1 = 0
    MOTOR_2 = 1
    MOTOR_3 = 2
    MOTOR_4 = 3
    MOTOR_5 = 4
    MOTOR_6 = 5


@dataclass(frozen=True)
class ControlMotor:
    id: int
    throttle: int


@dataclass(frozen=True)
class CollectSamples:
    amount: int


@dataclass(frozen=True)
class LightsOn:
    pass


@dataclass(frozen=True)
class LightsOff:
    pass


@dataclass(frozen=True)
class MasterOn:
    pass


@dataclass(frozen=True)
class MasterOff:
    pass


RovCommand = ControlMotor | CollectSamples | LightsOn | LightsOff | MasterOn | MasterOff


@dataclass(frozen=True)
class RovResponse:
    """One line of text reported back by the vehicle."""

    text: str


class CommandId(IntEnum):
    CONTROL_MOTOR = 0x01
    COLLECT_SAMPLES = 0x02
    LIGHTS_ON = 0x03
    LIGHTS_OFF = 0x04
    MASTER_ON = 0x05
    MASTER_OFF = 0x06


_PAYLOAD_FORMATS = {
    CommandId.CONTROL_MOTOR: "<Bh",
    CommandId.COLLECT_SAMPLES: "<B",
}

_FLAG_COMMANDS = {
    LightsOn: CommandId.LIGHTS_ON,
    LightsOff: CommandId.LIGHTS_OFF,
    MasterOn: CommandId.MASTER_ON,
    MasterOff: CommandId.MASTER_OFF,
}
_FLAG_TYPES = {cmd_id: cls for cls, cmd_id in _FLAG_COMMANDS.items()}


def _checksum(size: int, cmd_id: int, payload: bytes) -> int:
    checksum = size ^ cmd_id
    for byte in payload:
        checksum ^= byte
    return checksum & 0xFF


def _frame(cmd_id: int, payload: bytes = b"") -> bytes:
    size = len(payload)
    return (
        FRAME_HEADER
        + bytes([PROTOCOL_VERSION, size, cmd_id])
        + payload
        + bytes([_checksum(size, cmd_id, payload)])
    )


def encode_command(command) -> bytes:
    """
    Serialize a command into one wire frame.

    Raises:
        EncodingError: If the command is of an unknown kind or its fields do
            not fit the wire format.
    """
    try:
        if isinstance(command, ControlMotor):
            payload = struct.pack(
                _PAYLOAD_FORMATS[CommandId.CONTROL_MOTOR], command.id, command.throttle
            )
            return _frame(CommandId.CONTROL_MOTOR, payload)
        if isinstance(command, CollectSamples):
            payload = struct.pack(
                _PAYLOAD_FORMATS[CommandId.COLLECT_SAMPLES], command.amount
            )
            return _frame(CommandId.COLLECT_SAMPLES, payload)
    except struct.error as e:
        raise EncodingError(f"Cannot encode {command!r}: {e}") from e

    cmd_id = _FLAG_COMMANDS.get(type(command))
    if cmd_id is None:
        raise EncodingError(f"Unknown command kind: {command!r}")
    return _frame(cmd_id)


def decode_command(frame: bytes):
    """
    Parse exactly one wire frame back into a command.

    Raises:
        DecodeError: On a bad header, version, size, checksum or command id.
    """
    if len(frame) < FRAME_OVERHEAD or not frame.startswith(FRAME_HEADER):
        raise DecodeError(f"Not a command frame: {frame!r}")

    offset = len(FRAME_HEADER)
    version, size, cmd_id = frame[offset], frame[offset + 1], frame[offset + 2]
    if version != PROTOCOL_VERSION:
        raise DecodeError(f"Unsupported protocol version {version}")
    if len(frame) != FRAME_OVERHEAD + size:
        raise DecodeError(f"Frame length {len(frame)} does not match payload size {size}")

    payload = frame[offset + 3 : offset + 3 + size]
    if frame[-1] != _checksum(size, cmd_id, payload):
        raise DecodeError("Checksum mismatch")

    try:
        cmd_id = CommandId(cmd_id)
    except ValueError as e:
        raise DecodeError(f"Unknown command id {cmd_id:#04x}") from e

    try:
        if cmd_id == CommandId.CONTROL_MOTOR:
            motor, throttle = struct.unpack(_PAYLOAD_FORMATS[cmd_id], payload)
            return ControlMotor(id=motor, throttle=throttle)
        if cmd_id == CommandId.COLLECT_SAMPLES:
            (amount,) = struct.unpack(_PAYLOAD_FORMATS[cmd_id], payload)
            return CollectSamples(amount=amount)
    except struct.error as e:
        raise DecodeError(f"Bad payload for {cmd_id.name}: {e}") from e

    if size:
        raise DecodeError(f"{cmd_id.name} takes no payload")
    return _FLAG_TYPES[cmd_id]()


def decode_response(line: bytes) -> RovResponse | None:
    """
    Decode one newline-stripped response line.

    Returns:
        RovResponse, or None for a blank line.
    Raises:
        DecodeError: If the line is not valid UTF-8.
    """
    try:
        text = line.decode("utf-8").strip()
    except UnicodeDecodeError as e:
        raise DecodeError(f"Undecodable response {line!r}") from e
    if not text:
        return None
    return RovResponse(text)
