"""Unifying-style receivers: DJ reports plus the HID++ 1.0 receiver registers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Mapping

from hidlink.device import EventHandler
from hidlink.dj_report import (
    LONG_PARAM_LENGTH as DJ_LONG_PARAM_LENGTH,
    SHORT_PARAM_LENGTH as DJ_SHORT_PARAM_LENGTH,
    DeviceType,
    DjReport,
    DjReportType,
    supports_dj_reports,
)
from hidlink.hidpp10_device import Hidpp10Device
from hidlink.report import (
    DeviceIndex,
    InvalidReportLength,
    Report,
    ReportType,
)

_MAX_NAME_LENGTH = 14


class InvalidReason(Enum):
    """Why a raw device cannot be used as a receiver."""

    NO_DJ_REPORTS = "no_dj_reports"


class InvalidReceiver(Exception):
    """The raw device is not a DJ receiver."""

    def __init__(self, reason: InvalidReason) -> None:
        super().__init__(reason)
        self.reason = reason

    @property
    def code(self) -> InvalidReason:
        return self.reason

    def __str__(self) -> str:
        if self.reason == InvalidReason.NO_DJ_REPORTS:
            return "No DJ reports"
        return "Invalid receiver"


class DjEvent(IntEnum):
    """Events a receiver announces over DJ (and HID++) reports."""

    DEVICE_DISCONNECTION = 0x40
    DEVICE_CONNECTION = 0x41
    CONNECTION_STATUS = 0x42


class DjCommand(IntEnum):
    """Commands sent to a receiver as DJ reports."""

    SWITCH_AND_KEEP_ALIVE = 0x80
    GET_PAIRED_DEVICES = 0x81


class HidppEvent(IntEnum):
    """HID++ receiver events with no DJ counterpart."""

    LOCKING_CHANGE = 0x4A


class HidppRegister(IntEnum):
    """HID++ 1.0 receiver registers."""

    ENABLE_HIDPP_NOTIFICATIONS = 0x00
    CONNECTION_STATE = 0x02
    DEVICE_PAIRING = 0xB2
    DEVICE_ACTIVITY = 0xB3
    PAIRING_INFO = 0xB5


class PowerSwitchLocation(IntEnum):
    """Where the power switch sits on a paired device."""

    RESERVED = 0x0
    BASE = 0x1
    TOP_CASE = 0x2
    TOP_RIGHT_EDGE = 0x3
    OTHER = 0x4
    TOP_LEFT = 0x5
    BOTTOM_LEFT = 0x6
    TOP_RIGHT = 0x7
    BOTTOM_RIGHT = 0x8
    TOP_EDGE = 0x9
    RIGHT_EDGE = 0xA
    LEFT_EDGE = 0xB
    BOTTOM_EDGE = 0xC


@dataclass(frozen=True)
class NotificationFlags:
    """Which HID++ notifications the receiver sends."""

    device_battery_status: bool = False
    receiver_wireless_notifications: bool = False
    receiver_software_present: bool = False


@dataclass(frozen=True)
class PairingInfo:
    """Basic pairing information for a paired device."""

    destination_id: int
    report_interval: int
    pid: int
    device_type: DeviceType | int


@dataclass(frozen=True)
class ExtendedPairingInfo:
    """Extended pairing information for a paired device."""

    serial_number: int
    report_types: tuple[int, int, int, int]
    power_switch_location: PowerSwitchLocation


@dataclass(frozen=True)
class ConnectionStatusEvent:
    """A DJ connection status notification."""

    index: int
    link_lost: bool


@dataclass(frozen=True)
class DeviceConnectionEvent:
    """A device connecting to, or being found on, a receiver."""

    index: int
    pid: int = 0
    device_type: DeviceType | int = DeviceType.UNKNOWN
    unifying: bool = False
    software_present: bool = False
    encrypted: bool = False
    link_established: bool = False
    with_payload: bool = False
    from_timeout_check: bool = False


def _device_type(value: int) -> DeviceType | int:
    try:
        return DeviceType(value)
    except ValueError:
        return value


def _is_hidpp(data) -> bool:
    return len(data) > 0 and data[0] in (ReportType.SHORT, ReportType.LONG)


def _is_dj(data) -> bool:
    return len(data) > 0 and data[0] in (DjReportType.SHORT, DjReportType.LONG)


class Receiver:
    """A DJ receiver reached through a raw HID device."""

    def __init__(self, raw_device) -> None:
        self._raw_device = raw_device
        self._hidpp10_device = Hidpp10Device(raw_device, DeviceIndex.DEFAULT)
        if not supports_dj_reports(raw_device.report_descriptor):
            raise InvalidReceiver(InvalidReason.NO_DJ_REPORTS)
        self._dj_event_handlers: dict[str, EventHandler[DjReport]] = {}
        self._hidpp_event_handlers: dict[str, EventHandler[Report]] = {}

    @property
    def raw_device(self):
        return self._raw_device

    # DJ commands and events

    def enumerate_dj(self) -> None:
        """Ask the receiver to announce its paired devices over DJ reports."""
        self._send_dj_request(DeviceIndex.DEFAULT, DjCommand.GET_PAIRED_DEVICES, b"")

    def connection_status_event(self, report: DjReport) -> ConnectionStatusEvent:
        """Decode a DJ connection status report."""
        if report.feature != DjEvent.CONNECTION_STATUS:
            raise ValueError("not a connection status report")
        return ConnectionStatusEvent(index=report.index,
                                     link_lost=bool(report.params[0]))

    def _send_dj_request(self, index: int, function: int, params) -> None:
        values = bytes(params)
        if len(values) > DJ_LONG_PARAM_LENGTH:
            raise InvalidReportLength()
        report_type = (DjReportType.SHORT if len(values) <= DJ_SHORT_PARAM_LENGTH
                       else DjReportType.LONG)
        request = DjReport.build(report_type, index, function)
        request.set_params(values)
        self._raw_device.send_report_no_response(bytes(request))

    # HID++ 1.0 receiver registers

    def get_hidpp_notifications(self) -> NotificationFlags:
        response = self._hidpp10_device.get_register(
            HidppRegister.ENABLE_HIDPP_NOTIFICATIONS, b"", ReportType.SHORT)
        return NotificationFlags(
            device_battery_status=bool(response[0] & (1 << 4)),
            receiver_wireless_notifications=bool(response[1] & 1),
            receiver_software_present=bool(response[1] & (1 << 3)),
        )

    def enable_hidpp_notifications(self, flags: NotificationFlags) -> None:
        request = bytearray(3)
        if flags.device_battery_status:
            request[0] |= 1 << 4
        if flags.receiver_wireless_notifications:
            request[1] |= 1
        if flags.receiver_software_present:
            request[1] |= 1 << 3
        self._hidpp10_device.set_register(
            HidppRegister.ENABLE_HIDPP_NOTIFICATIONS, request, ReportType.SHORT)

    def enumerate_hidpp(self) -> None:
        """Ask the receiver to announce its connected devices."""
        # Setting bit 1 of the connection state register triggers enumeration.
        self._hidpp10_device.set_register(
            HidppRegister.CONNECTION_STATE, b"\x02", ReportType.SHORT)

    def get_connection_state(self, index: int) -> int:
        response = self._hidpp10_device.get_register(
            HidppRegister.CONNECTION_STATE, bytes([index]), ReportType.SHORT)
        return response[0]

    def start_pairing(self, timeout: int = 0) -> None:
        self._hidpp10_device.set_register(
            HidppRegister.DEVICE_PAIRING,
            bytes([1, DeviceIndex.DEFAULT, timeout]),
            ReportType.SHORT)

    def stop_pairing(self) -> None:
        self._hidpp10_device.set_register(
            HidppRegister.DEVICE_PAIRING,
            bytes([2, DeviceIndex.DEFAULT, 0]),
            ReportType.SHORT)

    def disconnect(self, index: int) -> None:
        self._hidpp10_device.set_register(
            HidppRegister.DEVICE_PAIRING, bytes([3, index, 0]), ReportType.SHORT)

    def get_device_activity(self) -> dict[DeviceIndex, int]:
        """Return the activity counter of each wireless slot."""
        response = self._hidpp10_device.get_register(
            HidppRegister.DEVICE_ACTIVITY, b"", ReportType.LONG)
        slots = range(DeviceIndex.WIRELESS_1, DeviceIndex.WIRELESS_6 + 1)
        return {DeviceIndex(slot): response[slot] for slot in slots}

    def _pairing_register(self, index: int, base: int) -> bytes:
        return self._hidpp10_device.get_register(
            HidppRegister.PAIRING_INFO, bytes([(index + base) & 0xFF]),
            ReportType.LONG)

    def get_pairing_info(self, index: int) -> PairingInfo:
        response = self._pairing_register(index, 0x1F)
        return PairingInfo(
            destination_id=response[1],
            report_interval=response[2],
            pid=(response[3] << 8) | response[4],
            device_type=_device_type(response[7]),
        )

    def get_extended_pairing_info(self, index: int) -> ExtendedPairingInfo:
        response = self._pairing_register(index, 0x2F)
        serial = int.from_bytes(response[1:5], "little")
        location = response[8] & 0x0F
        if location > PowerSwitchLocation.BOTTOM_EDGE:
            power_switch = PowerSwitchLocation.RESERVED
        else:
            power_switch = PowerSwitchLocation(location)
        return ExtendedPairingInfo(
            serial_number=serial,
            report_types=tuple(response[5:9]),
            power_switch_location=power_switch,
        )

    def get_device_name(self, index: int) -> str:
        response = self._pairing_register(index, 0x3F)
        size = response[1]
        if size > _MAX_NAME_LENGTH:
            raise ValueError(f"device name length out of range: {size}")
        return bytes(response[2:2 + size]).decode("latin-1")

    @staticmethod
    def device_disconnection_event(report: Report) -> int:
        """Return the index of the device a disconnection report names."""
        if report.sub_id != DjEvent.DEVICE_DISCONNECTION:
            raise ValueError("not a device disconnection report")
        return report.device_index

    @staticmethod
    def device_connection_event(report: Report) -> DeviceConnectionEvent:
        """Decode a HID++ device connection report."""
        if report.sub_id != DjEvent.DEVICE_CONNECTION:
            raise ValueError("not a device connection report")
        params = report.params
        status = params[0]
        return DeviceConnectionEvent(
            index=report.device_index,
            pid=(params[2] << 8) | params[1],
            device_type=_device_type(status & 0x0F),
            unifying=(report.address & 0b111) == 0x04,
            software_present=bool(status & (1 << 4)),
            encrypted=bool(status & (1 << 5)),
            link_established=not status & (1 << 6),
            with_payload=bool(status & (1 << 7)),
            from_timeout_check=False,
        )

    # Event routing

    def listen(self) -> None:
        """Route HID++ and DJ reports from the raw device to this receiver."""
        if not self._raw_device.is_listening:
            self._raw_device.listen_async()

        if "RECV_HIDPP" not in self._raw_device.event_handlers:
            self._raw_device.add_event_handler("RECV_HIDPP", EventHandler(
                _is_hidpp, lambda data: self._handle_hidpp_event(Report(data))))

        if "RECV_DJ" not in self._raw_device.event_handlers:
            self._raw_device.add_event_handler("RECV_DJ", EventHandler(
                _is_dj, lambda data: self._handle_dj_event(DjReport(data))))

    def stop_listening(self) -> None:
        self._raw_device.remove_event_handler("RECV_HIDPP")
        self._raw_device.remove_event_handler("RECV_DJ")
        if not self._raw_device.event_handlers:
            self._raw_device.stop_listener()

    @staticmethod
    def _dispatch(handlers: dict, report) -> None:
        for nickname in sorted(handlers):
            handler = handlers.get(nickname)
            if handler is not None and handler.condition(report):
                handler.callback(report)

    def _handle_dj_event(self, report: DjReport) -> None:
        self._dispatch(self._dj_event_handlers, report)

    def _handle_hidpp_event(self, report: Report) -> None:
        self._dispatch(self._hidpp_event_handlers, report)

    def add_dj_event_handler(self, nickname: str, handler: EventHandler) -> None:
        if nickname in self._dj_event_handlers:
            raise ValueError(f"DJ event handler already registered: {nickname}")
        self._dj_event_handlers[nickname] = handler

    def remove_dj_event_handler(self, nickname: str) -> None:
        self._dj_event_handlers.pop(nickname, None)

    @property
    def dj_event_handlers(self) -> Mapping[str, EventHandler]:
        return MappingProxyType(self._dj_event_handlers)

    def add_hidpp_event_handler(self, nickname: str, handler: EventHandler) -> None:
        if nickname in self._hidpp_event_handlers:
            raise ValueError(f"HID++ event handler already registered: {nickname}")
        self._hidpp_event_handlers[nickname] = handler

    def remove_hidpp_event_handler(self, nickname: str) -> None:
        self._hidpp_event_handlers.pop(nickname, None)

    @property
    def hidpp_event_handlers(self) -> Mapping[str, EventHandler]:
        return MappingProxyType(self._hidpp_event_handlers)