"""Base class for HID++ 2.0 features reached through a HID++ 2.0 device."""

from __future__ import annotations

from hidlink.feature_ids import FeatureID
from hidlink.hidpp20_errors import ErrorCode, Hidpp20Error, UnsupportedFeature

_ROOT_GET_FEATURE = 0


class Feature:
    """A HID++ 2.0 feature, located by asking the root feature for its index."""

    ID = FeatureID.ROOT

    def __init__(self, device, feature_id: int) -> None:
        self._device = device
        self._index = int(FeatureID.ROOT)
        if feature_id:
            request = bytes([(feature_id >> 8) & 0xFF, feature_id & 0xFF])
            try:
                response = self.call_function(_ROOT_GET_FEATURE, request)
            except Hidpp20Error as error:
                if error.code == ErrorCode.INVALID_FEATURE_INDEX:
                    raise UnsupportedFeature(feature_id) from error
                raise
            self._index = response[0]
            # An index of 0 means the feature was not found.
            if not self._index:
                raise UnsupportedFeature(feature_id)

    @property
    def feature_index(self) -> int:
        return self._index

    def call_function(self, function_id: int, params=b"") -> bytes:
        """Call a function of this feature and return the response parameters."""
        return self._device.call_function(self._index, function_id, bytes(params))

    def call_function_no_response(self, function_id: int, params=b"") -> None:
        """Call a function of this feature without waiting for an answer."""
        self._device.call_function_no_response(self._index, function_id, bytes(params))