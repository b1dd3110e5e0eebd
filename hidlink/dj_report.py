"""DJ (receiver) report framing, device types and DJ errors."""

from __future__ import annotations

from enum import IntEnum

from hidlink.report import InvalidReportID, InvalidReportLength

ERROR_FEATURE = 0x7F

HEADER_LENGTH = 3
SHORT_PARAM_LENGTH = 12
LONG_PARAM_LENGTH = 29

_OFFSET_TYPE = 0
_OFFSET_DEVICE_INDEX = 1
_OFFSET_FEATURE = 2
_OFFSET_PARAMETERS = 3


class DjReportType(IntEnum):
    """DJ report IDs."""

    SHORT = 0x20
    LONG = 0x21


class DeviceType(IntEnum):
    """Kinds of device a receiver can pair with."""

    UNKNOWN = 0x00
    KEYBOARD = 0x01
    MOUSE = 0x02
    NUMPAD = 0x03
    PRESENTER = 0x04
    # 0x05-0x07 are reserved.
    TRACKBALL = 0x08
    TOUCHPAD = 0x09


class DjErrorCode(IntEnum):
    """DJ error codes."""

    UNKNOWN = 0x00
    KEEP_ALIVE_TIMEOUT = 0x01


_ERROR_MESSAGES = {
    DjErrorCode.UNKNOWN: "Unknown",
    DjErrorCode.KEEP_ALIVE_TIMEOUT: "Keep-alive timeout",
}


class DjError(Exception):
    """An error reported over the DJ protocol."""

    def __init__(self, code: int) -> None:
        super().__init__(code)
        self.code = code

    def __str__(self) -> str:
        return _ERROR_MESSAGES.get(self.code, "Reserved")


# Report descriptor fragments announcing DJ short and long reports.
_DJ_REPORT_DESC = bytes([
    0xA1, 0x01, 0x85, 0x20, 0x95, 0x0E, 0x75, 0x08, 0x15, 0x00, 0x26, 0xFF,
    0x00, 0x09, 0x41, 0x81, 0x00, 0x09, 0x41, 0x91, 0x00, 0x85, 0x21, 0x95,
    0x1F, 0x09, 0x42, 0x81, 0x00, 0x09, 0x42, 0x91, 0x00, 0xC0,
])
_DJ_REPORT_DESC_ALT = bytes([
    0xA1, 0x01, 0x85, 0x20, 0x75, 0x08, 0x95, 0x0E, 0x15, 0x00, 0x26, 0xFF,
    0x00, 0x09, 0x41, 0x81, 0x00, 0x09, 0x41, 0x91, 0x00, 0x85, 0x21, 0x95,
    0x1F, 0x15, 0x00, 0x26, 0xFF, 0x00, 0x09, 0x42, 0x81, 0x00, 0x09, 0x42,
    0x91, 0x00, 0xC0,
])


def supports_dj_reports(rdesc) -> bool:
    """Return whether a report descriptor declares DJ reports."""
    desc = bytes(rdesc)
    return _DJ_REPORT_DESC in desc or _DJ_REPORT_DESC_ALT in desc


def _length_for(report_type: int) -> int:
    if report_type == DjReportType.SHORT:
        return HEADER_LENGTH + SHORT_PARAM_LENGTH
    if report_type == DjReportType.LONG:
        return HEADER_LENGTH + LONG_PARAM_LENGTH
    raise InvalidReportID()


class DjReport:
    """A single DJ report, short or long."""

    def __init__(self, data) -> None:
        raw = bytearray(data)
        if not raw:
            raise InvalidReportID()
        length = _length_for(raw[_OFFSET_TYPE])
        if len(raw) < length:
            raw.extend(bytes(length - len(raw)))
        self._data = raw[:length]

    @classmethod
    def build(cls, report_type, index, feature) -> "DjReport":
        """Build an empty report of ``report_type`` for ``index`` and ``feature``."""
        data = bytearray(_length_for(report_type))
        data[_OFFSET_TYPE] = report_type
        data[_OFFSET_DEVICE_INDEX] = index
        data[_OFFSET_FEATURE] = feature
        return cls(data)

    @property
    def type(self) -> DjReportType:
        return DjReportType(self._data[_OFFSET_TYPE])

    @property
    def index(self) -> int:
        return self._data[_OFFSET_DEVICE_INDEX]

    @property
    def feature(self) -> int:
        return self._data[_OFFSET_FEATURE]

    @property
    def params(self) -> bytes:
        return bytes(self._data[_OFFSET_PARAMETERS:])

    def set_params(self, params) -> None:
        """Overwrite the leading parameter bytes with ``params``."""
        values = bytes(params)
        if len(values) > len(self._data) - HEADER_LENGTH:
            raise InvalidReportLength()
        self._data[_OFFSET_PARAMETERS:_OFFSET_PARAMETERS + len(values)] = values

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DjReport):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(bytes(self._data))

    def __repr__(self) -> str:
        return f"DjReport({bytes(self._data).hex()})"