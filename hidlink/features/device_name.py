"""The HID++ 2.0 device name feature."""

from __future__ import annotations

from enum import IntEnum

from hidlink.essential import read_name
from hidlink.feature import Feature
from hidlink.feature_ids import FeatureID


class _Function(IntEnum):
    GET_LENGTH = 0
    GET_DEVICE_NAME = 1


class DeviceName(Feature):
    """Reads the marketing name of a device."""

    ID = FeatureID.DEVICE_NAME

    def __init__(self, device) -> None:
        super().__init__(device, self.ID)

    def get_name_length(self) -> int:
        return self.call_function(_Function.GET_LENGTH)[0]

    def get_name(self) -> str:
        """Fetch the whole name, chunk by chunk."""
        return read_name(
            self.get_name_length(),
            lambda params: self.call_function(_Function.GET_DEVICE_NAME, params),
        )