"""HID++ 2.0 error codes and exceptions."""

from __future__ import annotations

from enum import IntEnum

ERROR_ID = 0xFF


class ErrorCode(IntEnum):
    """HID++ 2.0 error codes."""

    NO_ERROR = 0
    UNKNOWN = 1
    INVALID_ARGUMENT = 2
    OUT_OF_RANGE = 3
    HARDWARE_ERROR = 4
    LOGITECH_INTERNAL = 5
    INVALID_FEATURE_INDEX = 6
    INVALID_FUNCTION_ID = 7
    BUSY = 8
    UNSUPPORTED = 9
    UNKNOWN_DEVICE = 10


_MESSAGES = {
    ErrorCode.NO_ERROR: "No error",
    ErrorCode.UNKNOWN: "Unknown",
    ErrorCode.INVALID_ARGUMENT: "Invalid argument",
    ErrorCode.OUT_OF_RANGE: "Out of range",
    ErrorCode.HARDWARE_ERROR: "Hardware error",
    ErrorCode.LOGITECH_INTERNAL: "Logitech internal feature",
    ErrorCode.INVALID_FEATURE_INDEX: "Invalid feature index",
    ErrorCode.INVALID_FUNCTION_ID: "Invalid function ID",
    ErrorCode.BUSY: "Busy",
    ErrorCode.UNSUPPORTED: "Unsupported",
    ErrorCode.UNKNOWN_DEVICE: "Unknown device",
}


class Hidpp20Error(Exception):
    """An error reported by a HID++ 2.0 device."""

    def __init__(self, code: int) -> None:
        if code == ErrorCode.NO_ERROR:
            raise ValueError("a no-error code is not an error")
        super().__init__(code)
        self.code = code

    def __str__(self) -> str:
        return _MESSAGES.get(self.code, "Unknown error code")


class UnsupportedFeature(Exception):
    """The device does not implement the requested HID++ 2.0 feature."""

    def __init__(self, feature_id: int) -> None:
        super().__init__(feature_id)
        self.feature_id = feature_id

    @property
    def code(self) -> int:
        return self.feature_id

    def __str__(self) -> str:
        return "Unsupported feature"