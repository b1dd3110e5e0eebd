"""A HID++ device reached through a raw HID device.

The raw device is any object providing ``report_descriptor``, ``hidraw_path``,
``product_id``, ``name``, ``is_listening``, ``event_handlers``,
``send_report(data)``, ``send_report_no_response(data)``, ``listen_async()``,
``stop_listener()``, ``add_event_handler(nickname, handler)`` and
``remove_event_handler(nickname)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Generic, Mapping, TypeVar

from hidlink.essential import EssentialDeviceName, EssentialRoot
from hidlink.hidpp10_errors import ErrorCode as Hidpp10ErrorCode
from hidlink.hidpp10_errors import Hidpp10Error
from hidlink.hidpp20_errors import Hidpp20Error, UnsupportedFeature
from hidlink.report import (
    REPORT_LONG_SUPPORTED,
    REPORT_SHORT_SUPPORTED,
    Report,
    ReportType,
    get_supported_reports,
)

T = TypeVar("T")


class InvalidReason(Enum):
    """Why a device cannot be used as a HID++ device."""

    NO_HIDPP_REPORT = "no_hidpp_report"
    INVALID_RAW_DEVICE = "invalid_raw_device"
    ASLEEP = "asleep"


_INVALID_MESSAGES = {
    InvalidReason.NO_HIDPP_REPORT: "Invalid HID++ device",
    InvalidReason.INVALID_RAW_DEVICE: "Invalid raw device",
    InvalidReason.ASLEEP: "Device asleep",
}


class InvalidDevice(Exception):
    """The device is not a usable HID++ device."""

    def __init__(self, reason: InvalidReason) -> None:
        super().__init__(reason)
        self.reason = reason

    @property
    def code(self) -> InvalidReason:
        return self.reason

    def __str__(self) -> str:
        return _INVALID_MESSAGES.get(self.reason, "Invalid device")


@dataclass
class EventHandler(Generic[T]):
    """A callback run for every event that satisfies its condition."""

    condition: Callable[[T], bool]
    callback: Callable[[T], None]


class Device:
    """A HID++ device, either corded or paired to a receiver."""

    def __init__(self, raw_device, index: int, *, receiver=None,
                 pid: int | None = None) -> None:
        self._raw_device = raw_device
        self._receiver = receiver
        self._path = raw_device.hidraw_path
        self._index = int(index)
        self._listening = False
        self._event_handlers: dict[str, EventHandler[Report]] = {}
        if receiver is not None and pid is None:
            pid = receiver.get_pairing_info(self._index).pid
        self._pid = pid
        self._init()

    @classmethod
    def from_receiver(cls, receiver, index: int) -> "Device":
        """Open the device paired to ``receiver`` at ``index``."""
        return cls(receiver.raw_device, index, receiver=receiver)

    @classmethod
    def from_connection_event(cls, receiver, event) -> "Device":
        """Open the device announced by a receiver connection event."""
        if not event.link_established:
            raise InvalidDevice(InvalidReason.ASLEEP)
        if event.from_timeout_check:
            pid = receiver.get_pairing_info(event.index).pid
        else:
            pid = event.pid
        return cls(receiver.raw_device, event.index, receiver=receiver, pid=pid)

    def _init(self) -> None:
        self._supported_reports = get_supported_reports(
            self._raw_device.report_descriptor
        )
        if not self._supported_reports:
            raise InvalidDevice(InvalidReason.NO_HIDPP_REPORT)

        try:
            self._version = tuple(EssentialRoot(self).get_version())
        except Hidpp10Error as error:
            # HID++ 1.0 devices answer the 2.0 ping with an invalid sub ID.
            if error.code != Hidpp10ErrorCode.INVALID_SUB_ID:
                raise
            self._version = (1, 0)

        if self._receiver is None:
            self._pid = self._raw_device.product_id
            fallback = lambda: self._raw_device.name  # noqa: E731
        else:
            fallback = lambda: self._receiver.get_device_name(self._index)  # noqa: E731

        if self._version[0] >= 2:
            try:
                self._name = EssentialDeviceName(self).get_name()
            except UnsupportedFeature:
                self._name = fallback()
        else:
            self._name = fallback()

    @property
    def path(self) -> str:
        return self._path

    @property
    def index(self) -> int:
        return self._index

    @property
    def version(self) -> tuple[int, int]:
        return self._version

    @property
    def name(self) -> str:
        return self._name

    @property
    def pid(self) -> int:
        return self._pid

    def _handler_nickname(self) -> str:
        return f"DEV_{self._index}"

    def listen(self) -> None:
        """Route HID++ events for this device index to its event handlers."""
        if not self._raw_device.is_listening:
            self._raw_device.listen_async()

        index = self._index

        def condition(data: Any) -> bool:
            return (len(data) > 1
                    and data[0] in (ReportType.SHORT, ReportType.LONG)
                    and data[1] == index)

        def callback(data: Any) -> None:
            self.handle_event(Report(data))

        self._raw_device.add_event_handler(
            self._handler_nickname(), EventHandler(condition, callback)
        )
        self._listening = True

    def stop_listening(self) -> None:
        if self._listening:
            self._raw_device.remove_event_handler(self._handler_nickname())
        self._listening = False
        if self._raw_device.event_handlers:
            self._raw_device.stop_listener()

    def close(self) -> None:
        """Detach this device's event routing from the raw device."""
        if self._listening:
            self._raw_device.remove_event_handler(self._handler_nickname())
            self._listening = False

    def __enter__(self) -> "Device":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def add_event_handler(self, nickname: str, handler: EventHandler) -> None:
        if nickname in self._event_handlers:
            raise ValueError(f"event handler already registered: {nickname}")
        self._event_handlers[nickname] = handler

    def remove_event_handler(self, nickname: str) -> None:
        self._event_handlers.pop(nickname, None)

    @property
    def event_handlers(self) -> Mapping[str, EventHandler]:
        return MappingProxyType(self._event_handlers)

    def handle_event(self, report: Report) -> None:
        """Run every handler whose condition accepts ``report``, by nickname order."""
        for nickname in sorted(self._event_handlers):
            handler = self._event_handlers.get(nickname)
            if handler is not None and handler.condition(report):
                handler.callback(report)

    def _fit_report(self, report: Report) -> None:
        if report.type == ReportType.SHORT:
            if not self._supported_reports & REPORT_SHORT_SUPPORTED:
                report.set_type(ReportType.LONG)
        elif not self._supported_reports & REPORT_LONG_SUPPORTED:
            raise ValueError("device does not support long reports")

    def send_report(self, report: Report) -> Report:
        """Send ``report`` and return the device's response, raising on errors."""
        self._fit_report(report)
        response = Report(self._raw_device.send_report(bytes(report)))
        error10 = response.error10()
        if error10 is not None:
            raise Hidpp10Error(error10.error_code)
        error20 = response.error20()
        if error20 is not None:
            raise Hidpp20Error(error20.error_code)
        return response

    def send_report_no_response(self, report: Report) -> None:
        self._fit_report(report)
        self._raw_device.send_report_no_response(bytes(report))