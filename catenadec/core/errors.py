"""Domain-specific errors for catenadec."""

from __future__ import annotations


class CatenadecError(Exception):
    """Base error for catenadec."""


class DecodeError(CatenadecError):
    """Base error for payloads that cannot be decoded."""


class InvalidPayload(DecodeError):
    """Raised when the payload is not a sequence of byte values."""


class UnsupportedFormat(DecodeError):
    """Raised when the uplink format tag byte is missing or not supported."""

    def __init__(self, format_tag: int | None, expected: int) -> None:
        self.format_tag = format_tag
        self.expected = expected
        if format_tag is None:
            detail = "<no fmt byte>"
        else:
            detail = f"fmt=0x{format_tag:02x}"
        super().__init__(f"Unsupported uplink format {detail} (expected 0x{expected:02x})")


class UnsupportedChannel(DecodeError):
    """Raised when the port number does not select any decode table."""

    def __init__(self, port: int) -> None:
        self.port = port
        super().__init__(f"Unsupported port {port}")


class UnrecognizedCommand(DecodeError):
    """Raised when a downlink response carries an unknown command byte."""

    def __init__(self, command: int) -> None:
        self.command = command
        super().__init__(f"Unrecognized downlink response command 0x{command:02x}")


class BufferUnderrun(DecodeError):
    """Raised when fewer bytes remain than a field requires."""

    def __init__(self, offset: int, needed: int, available: int) -> None:
        self.offset = offset
        self.needed = needed
        self.available = available
        super().__init__(
            f"Payload too short: need {needed} byte(s) at offset {offset}, {available} available"
        )


class ConfigLoadError(CatenadecError):
    """Raised when reading a configuration file fails."""


class ConfigValidationError(CatenadecError):
    """Raised when a configuration file does not conform to schema or semantics."""


class EnvelopeError(CatenadecError):
    """Raised when an inbound message envelope has no usable payload or port."""
