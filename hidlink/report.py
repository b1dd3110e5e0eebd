"""HID++ report framing: building, parsing and inspecting raw reports."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from hidlink.hidpp10_errors import ERROR_ID as HIDPP10_ERROR_ID
from hidlink.hidpp20_errors import ERROR_ID as HIDPP20_ERROR_ID

SOFTWARE_ID = 0

SHORT_PARAM_LENGTH = 3
LONG_PARAM_LENGTH = 16
HEADER_LENGTH = 4
MAX_DATA_LENGTH = 20

REPORT_SHORT_SUPPORTED = 1
REPORT_LONG_SUPPORTED = 1 << 1

_OFFSET_TYPE = 0
_OFFSET_DEVICE_INDEX = 1
_OFFSET_SUB_ID = 2
_OFFSET_FEATURE = 2
_OFFSET_ADDRESS = 3
_OFFSET_FUNCTION = 3
_OFFSET_PARAMETERS = 4


class ReportType(IntEnum):
    """HID++ report IDs."""

    SHORT = 0x10
    LONG = 0x11


class DeviceIndex(IntEnum):
    """Device slots addressed by a HID++ report."""

    DEFAULT = 0xFF
    CORDED = 0
    WIRELESS_1 = 1
    WIRELESS_2 = 2
    WIRELESS_3 = 3
    WIRELESS_4 = 4
    WIRELESS_5 = 5
    WIRELESS_6 = 6


class InvalidReportID(Exception):
    """The report type byte is not a known HID++ report ID."""

    def __str__(self) -> str:
        return "Invalid report ID"


class InvalidReportLength(Exception):
    """The data does not fit in the report."""

    def __str__(self) -> str:
        return "Invalid report length"


@dataclass(frozen=True)
class Hidpp10ErrorInfo:
    """Contents of a HID++ 1.0 error report."""

    sub_id: int
    address: int
    error_code: int


@dataclass(frozen=True)
class Hidpp20ErrorInfo:
    """Contents of a HID++ 2.0 error report."""

    feature_index: int
    function: int
    software_id: int
    error_code: int


# Report descriptor fragments announcing HID++ short and long reports.
_SHORT_REPORT_DESC = bytes([
    0xA1, 0x01, 0x85, 0x10, 0x75, 0x08, 0x95, 0x06, 0x15, 0x00, 0x26,
    0xFF, 0x00, 0x09, 0x01, 0x81, 0x00, 0x09, 0x01, 0x91, 0x00, 0xC0,
])
_LONG_REPORT_DESC = bytes([
    0xA1, 0x01, 0x85, 0x11, 0x75, 0x08, 0x95, 0x13, 0x15, 0x00, 0x26,
    0xFF, 0x00, 0x09, 0x02, 0x81, 0x00, 0x09, 0x02, 0x91, 0x00, 0xC0,
])
_SHORT_REPORT_DESC_ALT = bytes([
    0xA1, 0x01, 0x85, 0x10, 0x95, 0x06, 0x75, 0x08, 0x15, 0x00, 0x26,
    0xFF, 0x00, 0x09, 0x01, 0x81, 0x00, 0x09, 0x01, 0x91, 0x00, 0xC0,
])
_LONG_REPORT_DESC_ALT = bytes([
    0xA1, 0x01, 0x85, 0x11, 0x95, 0x13, 0x75, 0x08, 0x15, 0x00, 0x26,
    0xFF, 0x00, 0x09, 0x02, 0x81, 0x00, 0x09, 0x02, 0x91, 0x00, 0xC0,
])


def get_supported_reports(rdesc) -> int:
    """Return a bit set of the HID++ report kinds a report descriptor declares."""
    desc = bytes(rdesc)
    supported = 0
    if _SHORT_REPORT_DESC in desc or _SHORT_REPORT_DESC_ALT in desc:
        supported |= REPORT_SHORT_SUPPORTED
    if _LONG_REPORT_DESC in desc or _LONG_REPORT_DESC_ALT in desc:
        supported |= REPORT_LONG_SUPPORTED
    return supported


def _length_for(report_type: int) -> int:
    if report_type == ReportType.SHORT:
        return HEADER_LENGTH + SHORT_PARAM_LENGTH
    if report_type == ReportType.LONG:
        return HEADER_LENGTH + LONG_PARAM_LENGTH
    raise InvalidReportID()


class Report:
    """A single HID++ report, short or long."""

    def __init__(self, data) -> None:
        raw = bytearray(data)
        full = HEADER_LENGTH + LONG_PARAM_LENGTH
        if len(raw) < full:
            raw.extend(bytes(full - len(raw)))
        # Truncating surplus data is valid here.
        self._data = raw[:_length_for(raw[_OFFSET_TYPE])]

    @classmethod
    def _blank(cls, report_type: int) -> "Report":
        data = bytearray(_length_for(report_type))
        data[_OFFSET_TYPE] = report_type
        return cls(data)

    @classmethod
    def register_access(cls, report_type, device_index, sub_id, address) -> "Report":
        """Build a HID++ 1.0 style report addressing a register."""
        report = cls._blank(report_type)
        report._data[_OFFSET_DEVICE_INDEX] = device_index
        report._data[_OFFSET_SUB_ID] = sub_id
        report._data[_OFFSET_ADDRESS] = address
        return report

    @classmethod
    def function_call(cls, report_type, device_index, feature_index, function,
                      sw_id) -> "Report":
        """Build a HID++ 2.0 style report calling a feature function."""
        if not 0 <= function <= 0x0F:
            raise ValueError(f"function out of range: {function}")
        if not 0 <= sw_id <= 0x0F:
            raise ValueError(f"software id out of range: {sw_id}")
        report = cls._blank(report_type)
        report._data[_OFFSET_DEVICE_INDEX] = device_index
        report._data[_OFFSET_FEATURE] = feature_index
        report._data[_OFFSET_FUNCTION] = (function & 0x0F) << 4 | (sw_id & 0x0F)
        return report

    @property
    def type(self) -> ReportType:
        return ReportType(self._data[_OFFSET_TYPE])

    def set_type(self, report_type) -> None:
        """Change the report kind, padding or truncating the parameters."""
        length = _length_for(report_type)
        if len(self._data) < length:
            self._data.extend(bytes(length - len(self._data)))
        else:
            del self._data[length:]
        self._data[_OFFSET_TYPE] = report_type

    @property
    def device_index(self) -> int:
        return self._data[_OFFSET_DEVICE_INDEX]

    @property
    def feature(self) -> int:
        return self._data[_OFFSET_FEATURE]

    @property
    def sub_id(self) -> int:
        return self._data[_OFFSET_SUB_ID]

    @property
    def function(self) -> int:
        return (self._data[_OFFSET_FUNCTION] >> 4) & 0x0F

    @property
    def sw_id(self) -> int:
        return self._data[_OFFSET_FUNCTION] & 0x0F

    @property
    def address(self) -> int:
        return self._data[_OFFSET_ADDRESS]

    @property
    def params(self) -> bytes:
        return bytes(self._data[_OFFSET_PARAMETERS:])

    def set_params(self, params) -> None:
        """Overwrite the leading parameter bytes with ``params``."""
        values = bytes(params)
        if len(values) > len(self._data) - HEADER_LENGTH:
            raise InvalidReportLength()
        self._data[_OFFSET_PARAMETERS:_OFFSET_PARAMETERS + len(values)] = values

    def error10(self) -> Hidpp10ErrorInfo | None:
        """Return the HID++ 1.0 error carried by this report, if any."""
        if (self._data[_OFFSET_TYPE] != ReportType.SHORT
                or self._data[_OFFSET_SUB_ID] != HIDPP10_ERROR_ID):
            return None
        return Hidpp10ErrorInfo(
            sub_id=self._data[3],
            address=self._data[4],
            error_code=self._data[5],
        )

    def error20(self) -> Hidpp20ErrorInfo | None:
        """Return the HID++ 2.0 error carried by this report, if any."""
        if (self._data[_OFFSET_TYPE] != ReportType.LONG
                or self._data[_OFFSET_FEATURE] != HIDPP20_ERROR_ID):
            return None
        return Hidpp20ErrorInfo(
            feature_index=self._data[3],
            function=(self._data[4] >> 4) & 0x0F,
            software_id=self._data[4] & 0x0F,
            error_code=self._data[5],
        )

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Report):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(bytes(self._data))

    def __repr__(self) -> str:
        return f"Report({bytes(self._data).hex()})"