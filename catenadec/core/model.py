"""Core data models used across decoders, service, and CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import Any

from catenadec.core.errors import DecodeError

FORMAT_0X50 = 0x50


class UplinkField(IntFlag):
    """Bitmap bits of the format 0x50 uplink, in wire order."""

    VOLTAGES = 0x01
    VERSION = 0x02
    BOOT = 0x04
    ENVIRONMENT = 0x08
    LUX = 0x10
    TAP = 0x20


class Command(IntEnum):
    APPLICATION = 0x01
    RESET = 0x02
    DEVICE_VERSION = 0x03
    APPEUI_SET = 0x04
    APPKEY_SET = 0x05
    REJOIN = 0x06
    UPLINK_INTERVAL = 0x07

    @property
    def response_type(self) -> str | None:
        return _RESPONSE_TYPES.get(self)


_RESPONSE_TYPES = {
    Command.DEVICE_VERSION: "Device Version",
    Command.APPEUI_SET: "AppEUI Set",
    Command.APPKEY_SET: "AppKey set",
    Command.REJOIN: "Rejoin",
    Command.UPLINK_INTERVAL: "Uplink Interval",
}


class Status(IntEnum):
    SUCCESS = 0
    INVALID_LENGTH = 1
    FAILURE = 2

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    Status.SUCCESS: "Success",
    Status.INVALID_LENGTH: "Invalid Length",
    Status.FAILURE: "Failure",
}


@dataclass(frozen=True)
class UplinkRecord:
    """A decoded format 0x50 uplink. A field is None iff its bit was clear."""

    v_bat: float | None = None
    v_bus: float | None = None
    v_sys: float | None = None
    version: str | None = None
    boot: int | None = None
    t: int | None = None
    rh: float | None = None
    lux: float | None = None
    tap: int | None = None

    def to_dict(self) -> dict[str, Any]:
        names = (
            ("vBat", self.v_bat),
            ("vBus", self.v_bus),
            ("vSys", self.v_sys),
            ("version", self.version),
            ("boot", self.boot),
            ("t", self.t),
            ("rh", self.rh),
            ("lux", self.lux),
            ("tap", self.tap),
        )
        return {name: value for name, value in names if value is not None}


@dataclass(frozen=True)
class ResponseRecord:
    """A decoded port 3 downlink response."""

    command: Command
    status: Status | None = None
    app_version: str | None = None
    model: int | None = None
    rev: str | None = None
    uplink_interval: int | None = None

    def to_dict(self) -> dict[str, Any]:
        decoded: dict[str, Any] = {}
        if self.command.response_type is not None:
            decoded["ResponseType"] = self.command.response_type
        if self.status is not None:
            decoded["Response"] = self.status.label
        if self.app_version is not None:
            decoded["AppVersion"] = self.app_version
        if self.model is not None:
            decoded["Model"] = self.model
        if self.rev is not None:
            decoded["Rev"] = self.rev
        if self.uplink_interval is not None:
            decoded["UplinkInterval"] = self.uplink_interval
        return decoded


Record = UplinkRecord | ResponseRecord


@dataclass(frozen=True)
class HeatIndexLimits:
    """Validity range of the NWS heat index fit, in Fahrenheit."""

    min_temperature_f: float = 76.0
    max_temperature_f: float = 126.0
    ceiling_f: float = 183.5


@dataclass(frozen=True)
class DecoderSettings:
    format_tag: int = FORMAT_0X50
    uplink_ports: tuple[int, ...] = (1, 4)
    response_port: int = 3
    default_model: int = 5230
    heat_index: HeatIndexLimits = field(default_factory=HeatIndexLimits)
    derived_metrics: bool = False
    node: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of one decode: a complete record or the error that stopped it."""

    port: int
    record: Record | None = None
    error: DecodeError | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None

    def to_dict(self) -> dict[str, Any] | None:
        return self.record.to_dict() if self.record is not None else None


@dataclass(frozen=True)
class InboundPayload:
    payload: bytes
    port: int
