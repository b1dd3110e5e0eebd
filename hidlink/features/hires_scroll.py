"""The HID++ 2.0 high-resolution scroll wheel feature."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag

from hidlink.feature import Feature
from hidlink.feature_ids import FeatureID
from hidlink.report import Report


class _Function(IntEnum):
    GET_CAPABILITIES = 0
    GET_MODE = 1
    SET_MODE = 2
    GET_RATCHET_STATE = 3


class _Event(IntEnum):
    WHEEL_MOVEMENT = 0
    RATCHET_SWITCH = 1


class Capability(IntFlag):
    """Capability bits of a high-resolution wheel."""

    INVERTABLE = 1 << 3
    HAS_RATCHET = 1 << 2


class Mode(IntFlag):
    """Mode bits of a high-resolution wheel."""

    INVERTED = 1 << 2
    HI_RES = 1 << 1
    TARGET = 1


class RatchetState(IntEnum):
    """Whether the wheel spins freely or clicks."""

    FREE_WHEEL = 0
    RATCHET = 1


@dataclass(frozen=True)
class Capabilities:
    """Wheel resolution multiplier and capability flags."""

    multiplier: int
    flags: int


@dataclass(frozen=True)
class WheelStatus:
    """A decoded wheel movement event."""

    hi_res: bool
    periods: int
    delta_v: int


class HiresScroll(Feature):
    """Controls a high-resolution scroll wheel."""

    ID = FeatureID.HIRES_SCROLLING_V2

    def __init__(self, device) -> None:
        super().__init__(device, self.ID)

    def get_capabilities(self) -> Capabilities:
        response = self.call_function(_Function.GET_CAPABILITIES)
        return Capabilities(multiplier=response[0], flags=response[1])

    def get_mode(self) -> int:
        return self.call_function(_Function.GET_MODE)[0]

    def set_mode(self, mode: int) -> None:
        self.call_function(_Function.SET_MODE, bytes([int(mode) & 0xFF]))

    def get_ratchet_state(self) -> bool:
        """Return True when the wheel is in ratchet mode."""
        return bool(self.call_function(_Function.GET_RATCHET_STATE)[0])

    @staticmethod
    def wheel_movement_event(report: Report) -> WheelStatus:
        """Decode a wheel movement event report."""
        if report.function != _Event.WHEEL_MOVEMENT:
            raise ValueError("not a wheel movement event")
        params = report.params
        return WheelStatus(
            hi_res=bool(params[0] & (1 << 4)),
            periods=params[0] & 0x0F,
            delta_v=int.from_bytes(params[1:3], "big", signed=True),
        )

    @staticmethod
    def ratchet_switch_event(report: Report) -> RatchetState:
        """Decode a ratchet switch event report."""
        if report.function != _Event.RATCHET_SWITCH:
            raise ValueError("not a ratchet switch event")
        return RatchetState(report.params[0])