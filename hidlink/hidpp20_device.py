"""HID++ 2.0 devices: feature function calls."""

from __future__ import annotations

from hidlink.device import Device
from hidlink.report import (
    LONG_PARAM_LENGTH,
    SHORT_PARAM_LENGTH,
    SOFTWARE_ID,
    InvalidReportID,
    Report,
    ReportType,
)


class Hidpp20Device(Device):
    """A device that speaks HID++ 2.0 or later."""

    def __init__(self, raw_device, index: int, *, receiver=None,
                 pid: int | None = None) -> None:
        super().__init__(raw_device, index, receiver=receiver, pid=pid)
        if self.version[0] < 2:
            raise ValueError(
                f"not a HID++ 2.0 device (version {self.version[0]}.{self.version[1]})"
            )

    def _build_request(self, feature_index: int, function: int, params) -> Report:
        values = bytes(params)
        if len(values) <= SHORT_PARAM_LENGTH:
            request_type = ReportType.SHORT
        elif len(values) <= LONG_PARAM_LENGTH:
            request_type = ReportType.LONG
        else:
            raise InvalidReportID()
        request = Report.function_call(
            request_type, self.index, feature_index, function, SOFTWARE_ID
        )
        request.set_params(values)
        return request

    def call_function(self, feature_index: int, function: int, params=b"") -> bytes:
        """Call a feature function and return the response parameters."""
        request = self._build_request(feature_index, function, params)
        return self.send_report(request).params

    def call_function_no_response(self, feature_index: int, function: int,
                                  params=b"") -> None:
        """Call a feature function without waiting for an answer."""
        request = self._build_request(feature_index, function, params)
        self.send_report_no_response(request)