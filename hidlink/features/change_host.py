"""The HID++ 2.0 change host feature for multi-host devices."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from hidlink.feature import Feature
from hidlink.feature_ids import FeatureID
from hidlink.hidpp20_errors import ErrorCode, Hidpp20Error


class _Function(IntEnum):
    GET_HOST_INFO = 0
    SET_CURRENT_HOST = 1
    GET_COOKIES = 2
    SET_COOKIE = 3


@dataclass(frozen=True)
class HostInfo:
    """How many hosts a device knows and which one is current."""

    host_count: int
    current_host: int
    enhanced_host_switch: bool


class ChangeHost(Feature):
    """Switches a device between its paired hosts."""

    ID = FeatureID.CHANGE_HOST

    def __init__(self, device) -> None:
        super().__init__(device, self.ID)
        self._host_count = 0

    def get_host_info(self) -> HostInfo:
        response = self.call_function(_Function.GET_HOST_INFO)
        info = HostInfo(
            host_count=response[0],
            current_host=response[1],
            enhanced_host_switch=bool(response[2] & 1),
        )
        if not self._host_count:
            self._host_count = info.host_count
        return info

    def set_host(self, host: int) -> None:
        """Switch to ``host``; the device answers nothing since it disconnects."""
        if not self._host_count:
            self.get_host_info()
        # No response arrives, so reproduce the error the device would report.
        if host >= self._host_count:
            raise Hidpp20Error(ErrorCode.INVALID_ARGUMENT)
        self.call_function_no_response(_Function.SET_CURRENT_HOST, bytes([host]))

    def get_cookies(self) -> bytes:
        """Return one cookie byte per host."""
        if not self._host_count:
            self.get_host_info()
        response = self.call_function(_Function.GET_COOKIES)
        return bytes(response[:self._host_count]).ljust(self._host_count, b"\0")

    def set_cookie(self, host: int, cookie: int) -> None:
        self.call_function(_Function.SET_COOKIE, bytes([host, cookie]))