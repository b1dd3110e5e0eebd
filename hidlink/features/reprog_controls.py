"""The HID++ 2.0 reprogrammable controls feature, in all its versions."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from types import MappingProxyType
from typing import Mapping

from hidlink.feature import Feature
from hidlink.feature_ids import FeatureID
from hidlink.hidpp20_errors import ErrorCode, Hidpp20Error, UnsupportedFeature
from hidlink.report import Report


class _Function(IntEnum):
    GET_CONTROL_COUNT = 0
    GET_CONTROL_INFO = 1
    GET_CONTROL_REPORTING = 2
    SET_CONTROL_REPORTING = 3


class _Event(IntEnum):
    DIVERTED_BUTTON_EVENT = 0
    DIVERTED_RAW_XY_EVENT = 1


class ControlInfoFlags(IntFlag):
    """Capability flags of a control."""

    MOUSE_BUTTON = 1
    F_KEY = 1 << 1
    HOTKEY = 1 << 2
    FN_TOGGLE = 1 << 3
    REPROG_HINT = 1 << 4
    TEMPORARY_DIVERTABLE = 1 << 5
    PERSISTENTLY_DIVERTABLE = 1 << 6
    VIRTUAL = 1 << 7


class ControlInfoAdditionalFlags(IntFlag):
    """Additional capability flags of a control."""

    RAW_XY = 1


class ControlReportingFlags(IntFlag):
    """How a control currently reports."""

    TEMPORARY_DIVERTED = 1
    CHANGE_TEMPORARY_DIVERT = 1 << 1
    PERSISTENTLY_DIVERTED = 1 << 2
    CHANGE_PERSISTENT_DIVERT = 1 << 3
    RAW_XY_DIVERTED = 1 << 4
    CHANGE_RAW_XY_DIVERT = 1 << 5


@dataclass(frozen=True)
class ControlInfo:
    """Description of a control, or its reporting state."""

    control_id: int
    task_id: int = 0
    flags: int = 0
    position: int = 0
    group: int = 0
    group_mask: int = 0
    additional_flags: int = 0


@dataclass(frozen=True)
class Move:
    """A diverted raw pointer movement."""

    x: int
    y: int


class ReprogControls(Feature):
    """Lists a device's controls and diverts them to software."""

    ID = FeatureID.REPROG_CONTROLS

    def __init__(self, device, feature_id: int | None = None) -> None:
        super().__init__(device, self.ID if feature_id is None else feature_id)
        self._cids: dict[int, ControlInfo] = {}
        self._cids_initialized = False
        self._cids_lock = threading.Lock()

    @staticmethod
    def auto_version(device) -> "ReprogControls":
        """Return the newest version of this feature that the device supports."""
        for cls in (ReprogControlsV4, ReprogControlsV3,
                    ReprogControlsV2_2, ReprogControlsV2):
            try:
                return cls(device)
            except UnsupportedFeature:
                continue
        return ReprogControls(device)

    def supports_raw_xy(self) -> bool:
        return False

    def get_control_count(self) -> int:
        return self.call_function(_Function.GET_CONTROL_COUNT)[0]

    def get_control_info(self, index: int) -> ControlInfo:
        """Describe the control at position ``index``."""
        response = self.call_function(_Function.GET_CONTROL_INFO, bytes([index]))
        return ControlInfo(
            control_id=(response[0] << 8) | response[1],
            task_id=(response[2] << 8) | response[3],
            flags=response[4],
            position=response[5],
            group=response[6],
            group_mask=response[7],
            additional_flags=response[8],
        )

    def init_cid_map(self) -> None:
        """Read every control once and index them by control ID."""
        with self._cids_lock:
            if self._cids_initialized:
                return
            for index in range(self.get_control_count()):
                info = self.get_control_info(index)
                self._cids.setdefault(info.control_id, info)
            self._cids_initialized = True

    @property
    def controls(self) -> Mapping[int, ControlInfo]:
        return MappingProxyType(self._cids)

    def get_control_id_info(self, cid: int) -> ControlInfo:
        """Describe the control with ID ``cid``."""
        if not self._cids_initialized:
            self.init_cid_map()
        try:
            return self._cids[cid]
        except KeyError:
            raise Hidpp20Error(ErrorCode.INVALID_ARGUMENT) from None

    def get_control_reporting(self, cid: int) -> ControlInfo:
        """Return how ``cid`` reports; only the ID and flags are meaningful."""
        # Only version 4 can be asked; earlier versions are emulated.
        info = self.get_control_id_info(cid)
        flags = 0
        if info.flags & ControlInfoFlags.TEMPORARY_DIVERTABLE:
            flags |= ControlReportingFlags.TEMPORARY_DIVERTED
        if info.flags & ControlInfoFlags.PERSISTENTLY_DIVERTABLE:
            flags |= ControlReportingFlags.PERSISTENTLY_DIVERTED
        if info.additional_flags & ControlInfoAdditionalFlags.RAW_XY:
            flags |= ControlReportingFlags.RAW_XY_DIVERTED
        return ControlInfo(control_id=cid, flags=int(flags))

    def set_control_reporting(self, cid: int, info: ControlInfo) -> None:
        """Change how ``cid`` reports; earlier versions cannot, so this does nothing."""

    @staticmethod
    def diverted_button_event(report: Report) -> set[int]:
        """Return the control IDs held down in a diverted button event."""
        if report.function != _Event.DIVERTED_BUTTON_EVENT:
            raise ValueError("not a diverted button event")
        params = report.params
        buttons: set[int] = set()
        for offset in range(0, len(params) - 1, 2):
            cid = (params[offset] << 8) | params[offset + 1]
            if not cid:
                break
            buttons.add(cid)
        return buttons

    @staticmethod
    def diverted_raw_xy_event(report: Report) -> Move:
        """Decode a diverted raw XY event."""
        if report.function != _Event.DIVERTED_RAW_XY_EVENT:
            raise ValueError("not a diverted raw XY event")
        params = report.params
        return Move(
            x=int.from_bytes(params[0:2], "big", signed=True),
            y=int.from_bytes(params[2:4], "big", signed=True),
        )


class ReprogControlsV2(ReprogControls):
    ID = FeatureID.REPROG_CONTROLS_V2


class ReprogControlsV2_2(ReprogControlsV2):
    ID = FeatureID.REPROG_CONTROLS_V2_2


class ReprogControlsV3(ReprogControlsV2_2):
    ID = FeatureID.REPROG_CONTROLS_V3


class ReprogControlsV4(ReprogControlsV3):
    """Version 4, which can read and change control reporting."""

    ID = FeatureID.REPROG_CONTROLS_V4

    def supports_raw_xy(self) -> bool:
        return True

    def get_control_reporting(self, cid: int) -> ControlInfo:
        response = self.call_function(
            _Function.GET_CONTROL_REPORTING,
            bytes([(cid >> 8) & 0xFF, cid & 0xFF]),
        )
        return ControlInfo(
            control_id=(response[0] << 8) | response[1],
            flags=response[2],
        )

    def set_control_reporting(self, cid: int, info: ControlInfo) -> None:
        """Write the reporting flags of ``cid``, remapping it to ``info.control_id``."""
        self.call_function(
            _Function.SET_CONTROL_REPORTING,
            bytes([
                (cid >> 8) & 0xFF,
                cid & 0xFF,
                info.flags & 0xFF,
                (info.control_id >> 8) & 0xFF,
                info.control_id & 0xFF,
            ]),
        )