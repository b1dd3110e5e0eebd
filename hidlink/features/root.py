"""The HID++ 2.0 root feature: feature lookup and protocol version."""

from __future__ import annotations

from enum import IntEnum, IntFlag

from hidlink.essential import feature_request_params, parse_feature_info
from hidlink.feature import Feature
from hidlink.feature_ids import FeatureID, FeatureInfo
from hidlink.hidpp20_errors import ErrorCode, Hidpp20Error, UnsupportedFeature


class _Function(IntEnum):
    GET_FEATURE = 0
    PING = 1


class FeatureFlag(IntFlag):
    """Flags the root feature reports for a feature."""

    OBSOLETE = 1 << 7
    HIDDEN = 1 << 6
    INTERNAL = 1 << 5


class Root(Feature):
    """The root feature, always at feature index 0."""

    ID = FeatureID.ROOT

    def __init__(self, device) -> None:
        super().__init__(device, self.ID)

    def get_feature(self, feature_id: int) -> FeatureInfo:
        """Look up a feature by ID, raising UnsupportedFeature if it is absent."""
        try:
            response = self.call_function(
                _Function.GET_FEATURE, feature_request_params(feature_id)
            )
        except Hidpp20Error as error:
            if error.code == ErrorCode.INVALID_FEATURE_INDEX:
                raise UnsupportedFeature(feature_id) from error
            raise
        return parse_feature_info(feature_id, response)

    def get_version(self) -> tuple[int, int]:
        """Return the HID++ protocol version as (major, minor)."""
        response = self.call_function(_Function.PING)
        return response[0], response[1]