"""The HID++ 2.0 wireless device status feature."""

from __future__ import annotations

from dataclasses import dataclass

from hidlink.feature import Feature
from hidlink.feature_ids import FeatureID
from hidlink.report import Report

_STATUS_BROADCAST = 0


@dataclass(frozen=True)
class WirelessStatus:
    """A status broadcast sent by a wireless device."""

    reconnection: bool
    reconf_needed: bool
    power_switch: bool


class WirelessDeviceStatus(Feature):
    """Announces when a wireless device (re)connects."""

    ID = FeatureID.WIRELESS_DEVICE_STATUS

    def __init__(self, device) -> None:
        super().__init__(device, self.ID)

    @staticmethod
    def status_broadcast_event(report: Report) -> WirelessStatus:
        """Decode a status broadcast event report."""
        if report.function != _STATUS_BROADCAST:
            raise ValueError("not a status broadcast event")
        params = report.params
        return WirelessStatus(
            reconnection=bool(params[0]),
            reconf_needed=bool(params[1]),
            power_switch=bool(params[2]),
        )