"""The HID++ 2.0 thumb wheel feature."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag

from hidlink.feature import Feature
from hidlink.feature_ids import FeatureID
from hidlink.report import Report


class _Function(IntEnum):
    GET_INFO = 0
    GET_STATUS = 1
    SET_REPORTING = 2


_EVENT = 0


class ThumbWheelCapability(IntFlag):
    """Capability bits of a thumb wheel."""

    TIMESTAMP = 1
    TOUCH = 1 << 1
    PROXY = 1 << 2
    SINGLE_TAP = 1 << 3


class RotationStatus(IntEnum):
    """Phase of a thumb wheel rotation."""

    INACTIVE = 0
    START = 1
    ACTIVE = 2
    STOP = 3


@dataclass(frozen=True)
class ThumbWheelInfo:
    """Static properties of a thumb wheel."""

    native_res: int
    diverted_res: int
    default_direction: int
    capabilities: int
    time_elapsed: int


@dataclass(frozen=True)
class ThumbWheelStatus:
    """Whether the wheel is diverted to software and inverted."""

    diverted: bool
    inverted: bool
    touch: bool = False
    proxy: bool = False


@dataclass(frozen=True)
class ThumbWheelEvent:
    """A decoded thumb wheel event."""

    rotation: int
    timestamp: int
    rotation_status: RotationStatus | int
    flags: int


class ThumbWheel(Feature):
    """Controls a thumb wheel."""

    ID = FeatureID.THUMB_WHEEL

    def __init__(self, device) -> None:
        super().__init__(device, self.ID)

    def get_info(self) -> ThumbWheelInfo:
        response = self.call_function(_Function.GET_INFO)
        return ThumbWheelInfo(
            native_res=(response[0] << 8) | response[1],
            diverted_res=(response[2] << 8) | response[3],
            # 1 means an increment to the right.
            default_direction=1 if response[4] else -1,
            capabilities=response[5],
            time_elapsed=(response[6] << 8) | response[7],
        )

    @staticmethod
    def _status(response: bytes) -> ThumbWheelStatus:
        return ThumbWheelStatus(diverted=bool(response[0]),
                                inverted=bool(response[1] & 1))

    def get_status(self) -> ThumbWheelStatus:
        return self._status(self.call_function(_Function.GET_STATUS))

    def set_status(self, divert: bool, invert: bool) -> ThumbWheelStatus:
        """Divert and/or invert the wheel; return the state the device reports."""
        response = self.call_function(
            _Function.SET_REPORTING, bytes([int(bool(divert)), int(bool(invert))])
        )
        return self._status(response)

    @staticmethod
    def thumbwheel_event(report: Report) -> ThumbWheelEvent:
        """Decode a thumb wheel event report."""
        if report.function != _EVENT:
            raise ValueError("not a thumb wheel event")
        params = report.params
        try:
            status: RotationStatus | int = RotationStatus(params[4])
        except ValueError:
            status = params[4]
        return ThumbWheelEvent(
            rotation=int.from_bytes(params[0:2], "big", signed=True),
            timestamp=(params[2] << 8) | params[3],
            rotation_status=status,
            flags=params[5],
        )