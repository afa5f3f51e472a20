"""Tests for the serial command channel, using pyserial's loop:// transport."""

import pytest
import serial

from teleop.commands import ControlMotor, LightsOn, RovResponse, decode_command, encode_command
from teleop.communication import SerialCommandChannel
from teleop.errors import Disconnected, EncodingError, LinkTimeout


@pytest.fixture
def channel():
    with SerialCommandChannel("loop://", write_timeout=0.05) as channel:
        yield channel


def test_sent_command_arrives_encoded(channel) -> None:
    command = ControlMotor(id=3, throttle=-1234)
    channel.send_command(command)

    frame = channel.port.read(len(encode_command(command)))
    assert decode_command(frame) == command


def test_poll_responses_returns_complete_lines(channel) -> None:
    channel.port.write(b"ready\n\nmotor 1 ok\npart")

    assert channel.poll_responses() == [RovResponse("ready"), RovResponse("motor 1 ok")]
    assert channel.poll_responses() == []

    channel.port.write(b"ial\n")
    assert channel.poll_responses() == [RovResponse("partial")]


def test_undecodable_response_is_dropped(channel) -> None:
    channel.port.write(b"\xff\xfe\nstill here\n")
    assert channel.poll_responses() == [RovResponse("still here")]


def test_poll_with_nothing_buffered_is_empty(channel) -> None:
    assert channel.poll_responses() == []


def test_send_after_close_raises_disconnected() -> None:
    channel = SerialCommandChannel("loop://")
    channel.close()

    with pytest.raises(Disconnected):
        channel.send_command(LightsOn())
    assert channel.poll_responses() == []


def test_encoding_error_is_raised_before_writing(channel) -> None:
    with pytest.raises(EncodingError):
        channel.send_command(ControlMotor(id=0, throttle=99999))
    assert channel.port.in_waiting == 0


def test_write_timeout_maps_to_link_timeout(channel, monkeypatch) -> None:
    def timed_out(data):
        raise serial.SerialTimeoutException("Write timeout")

    monkeypatch.setattr(channel.port, "write", timed_out)
    with pytest.raises(LinkTimeout):
        channel.send_command(LightsOn())


def test_write_failure_maps_to_disconnected(channel, monkeypatch) -> None:
    def unplugged(data):
        raise serial.SerialException("device reports readiness to write but returned no data")

    monkeypatch.setattr(channel.port, "write", unplugged)
    with pytest.raises(Disconnected):
        channel.send_command(LightsOn())


def test_missing_device_raises_disconnected() -> None:
    with pytest.raises(Disconnected) as excinfo:
        SerialCommandChannel("/dev/rov-does-not-exist")
    assert excinfo.value.__cause__ is not None


def test_unterminated_input_is_capped(caplog) -> None:
    """A line that never ends is dropped once it outgrows the buffer."""
    with SerialCommandChannel("loop://", max_buffered=16) as channel:
        channel.port.write(b"x" * 32)

        assert channel.poll_responses() == []
        assert channel.recv_buffer == b""
        assert "unterminated input" in caplog.text

        channel.port.write(b"ok\n")
        assert channel.poll_responses() == [RovResponse("ok")]
