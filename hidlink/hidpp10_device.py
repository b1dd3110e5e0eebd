"""HID++ 1.0 devices: register reads and writes."""

from __future__ import annotations

from hidlink.device import Device
from hidlink.hidpp10_errors import SubID
from hidlink.report import (
    LONG_PARAM_LENGTH,
    SHORT_PARAM_LENGTH,
    InvalidReportLength,
    Report,
    ReportType,
)


class Hidpp10Device(Device):
    """A device that speaks HID++ 1.0."""

    def __init__(self, raw_device, index: int, *, receiver=None,
                 pid: int | None = None) -> None:
        super().__init__(raw_device, index, receiver=receiver, pid=pid)
        if tuple(self.version) != (1, 0):
            raise ValueError(
                f"not a HID++ 1.0 device (version {self.version[0]}.{self.version[1]})"
            )

    def get_register(self, address: int, params, report_type) -> bytes:
        """Read a register; ``report_type`` selects the short or long register."""
        sub_id = (SubID.GET_REGISTER_SHORT if report_type == ReportType.SHORT
                  else SubID.GET_REGISTER_LONG)
        return self._access_register(sub_id, address, params)

    def set_register(self, address: int, params, report_type) -> bytes:
        """Write a register; ``report_type`` selects the short or long register."""
        sub_id = (SubID.SET_REGISTER_SHORT if report_type == ReportType.SHORT
                  else SubID.SET_REGISTER_LONG)
        return self._access_register(sub_id, address, params)

    def _access_register(self, sub_id: int, address: int, params) -> bytes:
        values = bytes(params)
        if len(values) > LONG_PARAM_LENGTH:
            raise InvalidReportLength()
        request_type = (ReportType.SHORT if len(values) <= SHORT_PARAM_LENGTH
                        else ReportType.LONG)
        request = Report.register_access(request_type, self.index, sub_id, address)
        request.set_params(values)
        return self.send_report(request).params