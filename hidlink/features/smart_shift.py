"""The HID++ 2.0 SmartShift feature (automatic ratchet disengagement)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from hidlink.feature import Feature
from hidlink.feature_ids import FeatureID


class _Function(IntEnum):
    GET_STATUS = 0
    SET_STATUS = 1


@dataclass
class SmartShiftStatus:
    """SmartShift state; the ``set_*`` flags select which fields are written."""

    active: bool = False
    auto_disengage: int = 0
    default_auto_disengage: int = 0
    set_active: bool = False
    set_auto_disengage: bool = False
    set_default_auto_disengage: bool = False


class SmartShift(Feature):
    """Reads and configures SmartShift."""

    ID = FeatureID.SMART_SHIFT

    def __init__(self, device) -> None:
        super().__init__(device, self.ID)

    def get_status(self) -> SmartShiftStatus:
        response = self.call_function(_Function.GET_STATUS)
        return SmartShiftStatus(
            active=response[0] != 1,
            auto_disengage=response[1],
            default_auto_disengage=response[2],
        )

    def set_status(self, status: SmartShiftStatus) -> None:
        """Write the fields of ``status`` whose ``set_*`` flag is true."""
        params = bytearray(3)
        if status.set_active:
            params[0] = (int(status.active) + 1) & 0xFF
        if status.set_auto_disengage:
            params[1] = status.auto_disengage
        if status.set_default_auto_disengage:
            params[2] = status.default_auto_disengage
        self.call_function(_Function.SET_STATUS, params)