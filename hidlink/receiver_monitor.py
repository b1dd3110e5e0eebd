"""Watching a receiver for devices connecting and disconnecting."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable

from hidlink.device import EventHandler
from hidlink.receiver import (
    DeviceConnectionEvent,
    DjEvent,
    NotificationFlags,
    Receiver,
)
from hidlink.report import Report

logger = logging.getLogger(__name__)

_HANDLER_NICKNAME = "RECVMON"


def _spawn(work: Callable[[], None], on_error: Callable[[Exception], None]) -> None:
    """Run ``work`` on its own thread, passing any exception to ``on_error``."""

    def run() -> None:
        try:
            work()
        except Exception as error:  # noqa: BLE001 - reported through on_error
            on_error(error)

    threading.Thread(target=run, daemon=True).start()


class ReceiverMonitor(ABC):
    """Tracks devices on a receiver; subclasses decide what to do with them."""

    def __init__(self, raw_device) -> None:
        self._receiver = Receiver(raw_device)
        if _HANDLER_NICKNAME in self._receiver.hidpp_event_handlers:
            raise ValueError("receiver is already monitored")
        self._receiver.enable_hidpp_notifications(NotificationFlags(True, True, True))

    @property
    def receiver(self) -> Receiver:
        return self._receiver

    def __enter__(self) -> "ReceiverMonitor":
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    def run(self) -> None:
        """Start listening for connection events and enumerate present devices."""
        self._receiver.listen()

        if _HANDLER_NICKNAME not in self._receiver.hidpp_event_handlers:
            def condition(report: Report) -> bool:
                return report.sub_id in (DjEvent.DEVICE_CONNECTION,
                                         DjEvent.DEVICE_DISCONNECTION)

            self._receiver.add_hidpp_event_handler(
                _HANDLER_NICKNAME, EventHandler(condition, self._on_hidpp_event))

        self.enumerate()

    def _on_hidpp_event(self, report: Report) -> None:
        # Work on a new thread: the receiver may still be enumerating.
        path = self._receiver.raw_device.hidraw_path
        connecting = report.sub_id == DjEvent.DEVICE_CONNECTION

        def work() -> None:
            if connecting:
                self.add_device(Receiver.device_connection_event(report))
            else:
                self.remove_device(Receiver.device_disconnection_event(report))

        def on_error(error: Exception) -> None:
            if connecting:
                logger.error("Failed to add device %d to receiver on %s: %s",
                             report.device_index, path, error)
            else:
                logger.error("Failed to remove device %d from receiver on %s: %s",
                             report.device_index, path, error)

        _spawn(work, on_error)

    def stop(self) -> None:
        self._receiver.remove_hidpp_event_handler(_HANDLER_NICKNAME)
        self._receiver.stop_listening()

    def enumerate(self) -> None:
        self._receiver.enumerate_hidpp()

    def wait_for_device(self, index: int) -> None:
        """Add the device at ``index`` as soon as it sends any report."""
        nickname = f"WAIT_DEV_{index}"
        raw_device = self._receiver.raw_device

        def condition(data) -> bool:
            return len(data) > 1 and data[1] == index

        def callback(data) -> None:
            event = DeviceConnectionEvent(
                index=index,
                with_payload=False,
                link_established=True,
                from_timeout_check=True,
            )
            path = raw_device.hidraw_path

            def work() -> None:
                raw_device.remove_event_handler(nickname)
                self.add_device(event)

            def on_error(error: Exception) -> None:
                logger.error("Failed to add device %d to receiver on %s: %s",
                             event.index, path, error)

            _spawn(work, on_error)

        raw_device.add_event_handler(nickname, EventHandler(condition, callback))

    @abstractmethod
    def add_device(self, event: DeviceConnectionEvent) -> None:
        """Handle a device that connected to the receiver."""

    @abstractmethod
    def remove_device(self, index: int) -> None:
        """Handle a device that disconnected from the receiver."""