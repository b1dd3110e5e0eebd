"""The HID++ 2.0 adjustable DPI feature."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from hidlink.feature import Feature
from hidlink.feature_ids import FeatureID

_RANGE_MARKER = 0xE000


class _Function(IntEnum):
    GET_SENSOR_COUNT = 0
    GET_SENSOR_DPI_LIST = 1
    GET_SENSOR_DPI = 2
    SET_SENSOR_DPI = 3


@dataclass
class SensorDPIList:
    """The DPI values a sensor supports, either as a list or as a stepped range."""

    dpis: list[int] = field(default_factory=list)
    is_range: bool = False
    dpi_step: int = 0


class AdjustableDPI(Feature):
    """Reads and sets the resolution of a device's sensors."""

    ID = FeatureID.ADJUSTABLE_DPI

    def __init__(self, device) -> None:
        super().__init__(device, self.ID)

    def get_sensor_count(self) -> int:
        return self.call_function(_Function.GET_SENSOR_COUNT)[0]

    def get_sensor_dpi_list(self, sensor: int) -> SensorDPIList:
        """Return the supported DPIs of ``sensor``."""
        response = self.call_function(_Function.GET_SENSOR_DPI_LIST, bytes([sensor]))
        dpi_list = SensorDPIList()
        for offset in range(1, len(response) - 1, 2):
            dpi = (response[offset] << 8) | response[offset + 1]
            if not dpi:
                break
            if dpi >= _RANGE_MARKER:
                dpi_list.is_range = True
                dpi_list.dpi_step = dpi - _RANGE_MARKER
            else:
                dpi_list.dpis.append(dpi)
        return dpi_list

    def get_default_sensor_dpi(self, sensor: int) -> int:
        response = self.call_function(_Function.GET_SENSOR_DPI, bytes([sensor]))
        return (response[3] << 8) | response[4]

    def get_sensor_dpi(self, sensor: int) -> int:
        response = self.call_function(_Function.GET_SENSOR_DPI, bytes([sensor]))
        return (response[1] << 8) | response[2]

    def set_sensor_dpi(self, sensor: int, dpi: int) -> None:
        self.call_function(
            _Function.SET_SENSOR_DPI,
            bytes([sensor, (dpi >> 8) & 0xFF, dpi & 0xFF]),
        )