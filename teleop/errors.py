"""
errors.py

Exception types raised by the control core.
Link errors are recoverable per command; invariant errors flag commands the
mirror refuses to apply.
"""


class TeleopError(Exception):
    """Base class for all control core errors."""


class LinkError(TeleopError):
    """The command channel failed to deliver a command."""


class Disconnected(LinkError):
    """The transport is gone or was never opened."""


class LinkTimeout(LinkError):
    """A write did not complete within the configured timeout."""


class EncodingError(LinkError):
    """A command could not be serialized. Should not happen for well-formed commands."""


class DecodeError(TeleopError):
    """A frame or response received from the vehicle is malformed."""


class InvariantError(TeleopError):
    """A command that violates a vehicle invariant reached the mirror."""
