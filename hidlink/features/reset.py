"""The HID++ 2.0 reset feature."""

from __future__ import annotations

from enum import IntEnum

from hidlink.feature import Feature
from hidlink.feature_ids import FeatureID


class _Function(IntEnum):
    GET_PROFILE = 0
    RESET_TO_PROFILE = 1


class Reset(Feature):
    """Resets a device to a settings profile."""

    ID = FeatureID.RESET

    def __init__(self, device) -> None:
        super().__init__(device, self.ID)

    def get_profile(self) -> int:
        response = self.call_function(_Function.GET_PROFILE)
        return (response[0] << 8) | response[1]

    def reset(self, profile: int = 0) -> None:
        self.call_function(
            _Function.RESET_TO_PROFILE,
            bytes([(profile >> 8) & 0xFF, profile & 0xFF]),
        )