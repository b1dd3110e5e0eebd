"""HID++ 1.0 error codes, register sub IDs and the error exception."""

from __future__ import annotations

from enum import IntEnum

ERROR_ID = 0x8F


class ErrorCode(IntEnum):
    """HID++ 1.0 error codes."""

    SUCCESS = 0x00
    INVALID_SUB_ID = 0x01
    INVALID_ADDRESS = 0x02
    INVALID_VALUE = 0x03
    CONNECT_FAIL = 0x04
    TOO_MANY_DEVICES = 0x05
    ALREADY_EXISTS = 0x06
    BUSY = 0x07
    UNKNOWN_DEVICE = 0x08
    RESOURCE_ERROR = 0x09
    REQUEST_UNAVAILABLE = 0x0A
    INVALID_PARAMETER_VALUE = 0x0B
    WRONG_PIN_CODE = 0x0C


class SubID(IntEnum):
    """Register access sub IDs."""

    SET_REGISTER_SHORT = 0x80
    GET_REGISTER_SHORT = 0x81
    SET_REGISTER_LONG = 0x82
    GET_REGISTER_LONG = 0x83


_MESSAGES = {
    ErrorCode.SUCCESS: "Success",
    ErrorCode.INVALID_SUB_ID: "Invalid sub ID",
    ErrorCode.INVALID_ADDRESS: "Invalid address",
    ErrorCode.INVALID_VALUE: "Invalid value",
    ErrorCode.CONNECT_FAIL: "Connection failure",
    ErrorCode.TOO_MANY_DEVICES: "Too many devices",
    ErrorCode.ALREADY_EXISTS: "Already exists",
    ErrorCode.BUSY: "Busy",
    ErrorCode.UNKNOWN_DEVICE: "Unknown device",
    ErrorCode.RESOURCE_ERROR: "Resource error",
    ErrorCode.REQUEST_UNAVAILABLE: "Request unavailable",
    ErrorCode.INVALID_PARAMETER_VALUE: "Invalid parameter value",
    ErrorCode.WRONG_PIN_CODE: "Wrong PIN code",
}


class Hidpp10Error(Exception):
    """An error reported by a HID++ 1.0 device."""

    def __init__(self, code: int) -> None:
        if code == ErrorCode.SUCCESS:
            raise ValueError("a success code is not an error")
        super().__init__(code)
        self.code = code

    def __str__(self) -> str:
        return _MESSAGES.get(self.code, "Unknown error code")