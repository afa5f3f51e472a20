"""
communication.py

Command channels between the topside and the ROV.
SerialCommandChannel writes encoded command frames to a serial device and reads
newline-delimited text responses back, without ever blocking the control loop
longer than the configured write timeout.
"""

import logging

import serial

from .commands import RovResponse, decode_response, encode_command
from .errors import DecodeError, Disconnected, LinkTimeout

log = logging.getLogger(__name__)


class VehicleCommandChannel:
    """
    Link to the vehicle.

    Not safe for concurrent use; the owning session sends and drains from a
    single thread.
    """

    def send_command(self, command) -> None:
        """
        Transmit one command.

        Raises:
            Disconnected: The transport is gone.
            LinkTimeout: The write did not complete in time.
            EncodingError: The command could not be serialized.
        """
        raise NotImplementedError

    def poll_responses(self) -> list[RovResponse]:
        """Drain whatever responses are buffered. Never blocks."""
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class SerialCommandChannel(VehicleCommandChannel):
    """
    Serial link to the ROV's motor/relay board.

    - Opens *path* through pyserial, so device paths and URLs such as
      "loop://" both work.
    - Reads are non-blocking; writes are bounded by *write_timeout*.
    - Partial response lines are kept until their newline arrives, up to
      *max_buffered* bytes.
    """

    def __init__(
        self,
        path: str,
        baudrate: int = 115200,
        write_timeout: float = 0.005,
        max_buffered: int = 4096,
    ):
        """
        Args:
            path (str): Serial device path or pyserial URL.
            baudrate (int): Line speed.
            write_timeout (float): Seconds a single command write may take.
            max_buffered (int): Bytes of unterminated input kept before it is dropped.
        Raises:
            Disconnected: If the port cannot be opened.
        """
        self.path = path
        self.recv_buffer = b""
        self.max_buffered = max_buffered
        try:
            self.port = serial.serial_for_url(
                path, baudrate=baudrate, timeout=0, write_timeout=write_timeout
            )
        except (serial.SerialException, ValueError) as e:
            raise Disconnected(f"Failed to open serial port {path}") from e
        log.info(f"Opened serial port {path} at {baudrate} baud")

    @property
    def is_open(self) -> bool:
        return self.port is not None and self.port.is_open

    def send_command(self, command) -> None:
        frame = encode_command(command)
        if not self.is_open:
            raise Disconnected(f"Serial port {self.path} is closed")
        try:
            self.port.write(frame)
        except serial.SerialTimeoutException as e:
            raise LinkTimeout(f"Write of {command!r} timed out") from e
        except (serial.SerialException, OSError) as e:
            raise Disconnected(f"Serial port {self.path} failed: {e}") from e

    def poll_responses(self) -> list[RovResponse]:
        if not self.is_open:
            return []
        try:
            waiting = self.port.in_waiting
            if waiting:
                self.recv_buffer += self.port.read(waiting)
        except (serial.SerialException, OSError) as e:
            log.error(f"Failed to read from {self.path}: {e}")
            return []

        lines = self.recv_buffer.split(b"\n")
        self.recv_buffer = lines[-1]  # Save any incomplete line
        if len(self.recv_buffer) > self.max_buffered:
            log.warning(
                f"Dropped {len(self.recv_buffer)} bytes of unterminated input from {self.path}"
            )
            self.recv_buffer = b""

        responses = []
        for line in lines[:-1]:
            try:
                response = decode_response(line)
            except DecodeError as e:
                log.warning(f"Dropped response: {e}")
                continue
            if response is not None:
                responses.append(response)
        return responses

    def close(self) -> None:
        if self.port is not None:
            self.port.close()
            self.port = None
            log.info(f"Closed serial port {self.path}")
