"""The HID++ 2.0 feature set feature: enumerating a device's features."""

from __future__ import annotations

from enum import IntEnum

from hidlink.feature import Feature
from hidlink.feature_ids import FeatureID


class _Function(IntEnum):
    GET_FEATURE_COUNT = 0
    GET_FEATURE = 1


class FeatureSet(Feature):
    """Lists the features a device implements."""

    ID = FeatureID.FEATURE_SET

    def __init__(self, device) -> None:
        super().__init__(device, self.ID)

    def get_feature_count(self) -> int:
        return self.call_function(_Function.GET_FEATURE_COUNT)[0]

    def get_feature(self, feature_index: int) -> int:
        """Return the feature ID at ``feature_index``."""
        response = self.call_function(_Function.GET_FEATURE, bytes([feature_index]))
        return (response[0] << 8) | response[1]

    def get_features(self) -> dict[int, int]:
        """Map each feature index to its feature ID."""
        return {index: self.get_feature(index)
                for index in range(self.get_feature_count())}