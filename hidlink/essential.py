"""Minimal HID++ 2.0 feature access used while a device is being set up.

These helpers work on any object with an ``index`` and a ``send_report``
method and perform no protocol version checks.
"""

from __future__ import annotations

from typing import Callable

from hidlink.feature_ids import FeatureID, FeatureInfo
from hidlink.hidpp20_errors import ErrorCode, Hidpp20Error, UnsupportedFeature
from hidlink.report import (
    LONG_PARAM_LENGTH,
    SHORT_PARAM_LENGTH,
    SOFTWARE_ID,
    InvalidReportID,
    Report,
    ReportType,
)

# Root feature functions.
_ROOT_GET_FEATURE = 0
_ROOT_PING = 1

# Device name feature functions.
_NAME_GET_LENGTH = 0
_NAME_GET_DEVICE_NAME = 1

# Root feature flags.
_FLAG_OBSOLETE = 1 << 7
_FLAG_HIDDEN = 1 << 6
_FLAG_INTERNAL = 1 << 5


def feature_request_params(feature_id: int) -> bytes:
    """Build the parameters of a root GetFeature request (low byte first)."""
    return bytes([feature_id & 0xFF, (feature_id >> 8) & 0xFF])


def parse_feature_info(feature_id: int, response) -> FeatureInfo:
    """Interpret a root GetFeature response for ``feature_id``."""
    index = response[0]
    if not index:
        raise UnsupportedFeature(feature_id)
    flags = response[1]
    return FeatureInfo(
        feature_id=index,
        obsolete=bool(flags & _FLAG_OBSOLETE),
        internal=bool(flags & _FLAG_INTERNAL),
        hidden=bool(flags & _FLAG_HIDDEN),
    )


def read_name(length: int, fetch: Callable[[bytes], bytes]) -> str:
    """Assemble a name of ``length`` bytes fetched in long-report sized chunks.

    ``fetch`` receives the one-byte offset parameter and returns the chunk.
    """
    name = bytearray()
    calls = -(-length // LONG_PARAM_LENGTH)
    for call in range(calls):
        offset = call * LONG_PARAM_LENGTH
        section = fetch(bytes([offset & 0xFF]))
        take = min(LONG_PARAM_LENGTH, length - offset)
        name.extend(section[:take])
    return name.decode("latin-1")


def _report_type_for(params: bytes) -> ReportType:
    if len(params) <= SHORT_PARAM_LENGTH:
        return ReportType.SHORT
    if len(params) <= LONG_PARAM_LENGTH:
        return ReportType.LONG
    raise InvalidReportID()


class EssentialFeature:
    """A HID++ 2.0 feature reached through a bare HID++ device."""

    ID = FeatureID.ROOT

    def __init__(self, device, feature_id: int) -> None:
        self._device = device
        self._index = int(FeatureID.ROOT)
        if feature_id:
            try:
                response = self.call_function(
                    _ROOT_GET_FEATURE,
                    bytes([(feature_id >> 8) & 0xFF, feature_id & 0xFF]),
                )
            except Hidpp20Error as error:
                if error.code == ErrorCode.INVALID_FEATURE_INDEX:
                    raise UnsupportedFeature(feature_id) from error
                raise
            self._index = response[0]
            if not self._index:
                raise UnsupportedFeature(feature_id)

    @property
    def feature_index(self) -> int:
        return self._index

    def call_function(self, function_id: int, params=b"") -> bytes:
        """Call a function of this feature and return the response parameters."""
        values = bytes(params)
        request = Report.function_call(
            _report_type_for(values),
            self._device.index,
            self._index,
            function_id,
            SOFTWARE_ID,
        )
        request.set_params(values)
        response = self._device.send_report(request)
        return response.params


class EssentialRoot(EssentialFeature):
    """The root feature, used to probe the protocol version."""

    ID = FeatureID.ROOT

    def __init__(self, device) -> None:
        super().__init__(device, self.ID)

    def get_feature(self, feature_id: int) -> FeatureInfo:
        """Look up a feature by ID."""
        try:
            response = self.call_function(
                _ROOT_GET_FEATURE, feature_request_params(feature_id)
            )
        except Hidpp20Error as error:
            if error.code == ErrorCode.INVALID_FEATURE_INDEX:
                raise UnsupportedFeature(feature_id) from error
            raise
        return parse_feature_info(feature_id, response)

    def get_version(self) -> tuple[int, int]:
        """Return the HID++ protocol version as (major, minor)."""
        response = self.call_function(_ROOT_PING)
        return response[0], response[1]


class EssentialDeviceName(EssentialFeature):
    """The device name feature."""

    ID = FeatureID.DEVICE_NAME

    def __init__(self, device) -> None:
        super().__init__(device, self.ID)

    def get_name_length(self) -> int:
        return self.call_function(_NAME_GET_LENGTH)[0]

    def get_name(self) -> str:
        return read_name(
            self.get_name_length(),
            lambda params: self.call_function(_NAME_GET_DEVICE_NAME, params),
        )