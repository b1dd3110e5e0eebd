from dataclasses import dataclass

import pytest

from hidlink.device import Device, EventHandler, InvalidDevice, InvalidReason
from hidlink.hidpp10_errors import ErrorCode as E10
from hidlink.hidpp10_errors import Hidpp10Error
from hidlink.hidpp20_errors import ErrorCode as E20
from hidlink.hidpp20_errors import Hidpp20Error
from hidlink.report import Report, ReportType

SHORT_DESC = bytes([
    0xA1, 0x01, 0x85, 0x10, 0x75, 0x08, 0x95, 0x06, 0x15, 0x00, 0x26,
    0xFF, 0x00, 0x09, 0x01, 0x81, 0x00, 0x09, 0x01, 0x91, 0x00, 0xC0,
])
LONG_DESC = bytes([
    0xA1, 0x01, 0x85, 0x11, 0x75, 0x08, 0x95, 0x13, 0x15, 0x00, 0x26,
    0xFF, 0x00, 0x09, 0x02, 0x81, 0x00, 0x09, 0x02, 0x91, 0x00, 0xC0,
])


class FakeRawDevice:
    def __init__(self, responder, descriptor=SHORT_DESC + LONG_DESC,
                 name="Raw Name", product_id=0x4082, path="/dev/hidraw7"):
        self.report_descriptor = descriptor
        self.hidraw_path = path
        self.name = name
        self.product_id = product_id
        self.responder = responder
        self.sent = []
        self.event_handlers = {}
        self.is_listening = False

    def send_report(self, data):
        self.sent.append(bytes(data))
        return self.responder(bytes(data))

    def send_report_no_response(self, data):
        self.sent.append(bytes(data))

    def listen_async(self):
        self.is_listening = True

    def stop_listener(self):
        self.is_listening = False

    def add_event_handler(self, nickname, handler):
        self.event_handlers[nickname] = handler

    def remove_event_handler(self, nickname):
        self.event_handlers.pop(nickname, None)


def hidpp10_responder(error_code=E10.INVALID_SUB_ID):
    def respond(request):
        return bytes([0x10, request[1], 0x8F, request[2], request[3], error_code, 0])
    return respond


def hidpp20_responder(name=b"MX Test", name_index=3):
    def respond(request):
        feature, function = request[2], request[3] >> 4
        params = bytearray(16)
        if feature == 0 and function == 1:
            params[0:2] = bytes([4, 2])
        elif feature == 0 and function == 0:
            params[0] = name_index if request[4:6] == bytes([0x00, 0x05]) else 0
        elif feature == name_index and function == 0:
            params[0] = len(name)
        elif feature == name_index and function == 1:
            offset = request[4]
            chunk = name[offset:offset + 16]
            params[:len(chunk)] = chunk
        return bytes([0x11, request[1], feature, request[3]]) + bytes(params)
    return respond


@dataclass
class PairingInfo:
    pid: int


class FakeReceiver:
    def __init__(self, raw):
        self.raw_device = raw
        self.pairing_queries = []

    def get_pairing_info(self, index):
        self.pairing_queries.append(index)
        return PairingInfo(pid=0x1234)

    def get_device_name(self, index):
        return f"Paired {index}"


@dataclass
class ConnectionEvent:
    index: int
    pid: int
    link_established: bool = True
    from_timeout_check: bool = False


def test_no_hidpp_descriptor():
    raw = FakeRawDevice(hidpp10_responder(), descriptor=b"\x00\x01")
    with pytest.raises(InvalidDevice) as caught:
        Device(raw, 0xFF)
    assert caught.value.reason is InvalidReason.NO_HIDPP_REPORT
    assert str(caught.value) == "Invalid HID++ device"


def test_invalid_device_messages():
    assert str(InvalidDevice(InvalidReason.ASLEEP)) == "Device asleep"
    assert str(InvalidDevice(InvalidReason.INVALID_RAW_DEVICE)) == "Invalid raw device"


def test_hidpp10_device():
    raw = FakeRawDevice(hidpp10_responder())
    device = Device(raw, 0xFF)
    assert device.version == (1, 0)
    assert device.name == "Raw Name"
    assert device.pid == 0x4082
    assert device.path == "/dev/hidraw7"
    assert device.index == 0xFF


def test_hidpp10_other_error_propagates():
    raw = FakeRawDevice(hidpp10_responder(E10.BUSY))
    with pytest.raises(Hidpp10Error) as caught:
        Device(raw, 0xFF)
    assert caught.value.code == E10.BUSY


def test_hidpp20_device_reads_name():
    raw = FakeRawDevice(hidpp20_responder())
    device = Device(raw, 1)
    assert device.version == (4, 2)
    assert device.name == "MX Test"
    assert device.pid == 0x4082


def test_hidpp20_without_name_feature_uses_raw_name():
    raw = FakeRawDevice(hidpp20_responder(name_index=0))
    device = Device(raw, 1)
    assert device.name == "Raw Name"


def test_hidpp20_error_raised():
    def respond(request):
        data = bytearray(20)
        data[0:6] = bytes([0x11, request[1], 0xFF, request[2], request[3], E20.BUSY])
        return bytes(data)

    raw = FakeRawDevice(respond)
    with pytest.raises(Hidpp20Error) as caught:
        Device(raw, 1)
    assert caught.value.code == E20.BUSY


def test_short_report_upgraded_when_only_long_supported():
    raw = FakeRawDevice(hidpp20_responder(), descriptor=LONG_DESC)
    Device(raw, 1)
    assert raw.sent[0][0] == ReportType.LONG
    assert len(raw.sent[0]) == 20


def test_send_report_no_response():
    raw = FakeRawDevice(hidpp20_responder())
    device = Device(raw, 1)
    report = Report.function_call(ReportType.SHORT, 1, 5, 2, 0)
    device.send_report_no_response(report)
    assert raw.sent[-1] == bytes(report)


def test_from_receiver_hidpp10():
    raw = FakeRawDevice(hidpp10_responder())
    receiver = FakeReceiver(raw)
    device = Device.from_receiver(receiver, 2)
    assert device.pid == 0x1234
    assert device.name == "Paired 2"
    assert receiver.pairing_queries == [2]


def test_from_connection_event_uses_event_pid():
    raw = FakeRawDevice(hidpp10_responder())
    receiver = FakeReceiver(raw)
    device = Device.from_connection_event(receiver, ConnectionEvent(index=3, pid=0x4321))
    assert device.pid == 0x4321
    assert receiver.pairing_queries == []


def test_from_connection_event_timeout_check_queries_pairing():
    raw = FakeRawDevice(hidpp10_responder())
    receiver = FakeReceiver(raw)
    event = ConnectionEvent(index=3, pid=0, from_timeout_check=True)
    device = Device.from_connection_event(receiver, event)
    assert device.pid == 0x1234
    assert receiver.pairing_queries == [3]


def test_from_connection_event_asleep():
    raw = FakeRawDevice(hidpp10_responder())
    event = ConnectionEvent(index=3, pid=0, link_established=False)
    with pytest.raises(InvalidDevice) as caught:
        Device.from_connection_event(FakeReceiver(raw), event)
    assert caught.value.reason is InvalidReason.ASLEEP
    assert raw.sent == []


def test_event_handlers_run_in_nickname_order():
    device = Device(FakeRawDevice(hidpp10_responder()), 1)
    seen = []
    device.add_event_handler("b", EventHandler(lambda r: True, lambda r: seen.append("b")))
    device.add_event_handler("a", EventHandler(lambda r: True, lambda r: seen.append("a")))
    device.add_event_handler("c", EventHandler(lambda r: False, lambda r: seen.append("c")))
    device.handle_event(Report(bytes([0x10, 1, 0, 0, 0, 0, 0])))
    assert seen == ["a", "b"]


def test_duplicate_handler_rejected_and_removal():
    device = Device(FakeRawDevice(hidpp10_responder()), 1)
    handler = EventHandler(lambda r: True, lambda r: None)
    device.add_event_handler("x", handler)
    with pytest.raises(ValueError):
        device.add_event_handler("x", handler)
    device.remove_event_handler("x")
    assert dict(device.event_handlers) == {}


def test_listen_routes_matching_raw_events():
    raw = FakeRawDevice(hidpp10_responder())
    device = Device(raw, 1)
    received = []
    device.add_event_handler("rec", EventHandler(lambda r: True, received.append))
    device.listen()
    assert raw.is_listening
    raw_handler = raw.event_handlers["DEV_1"]
    event = bytes([0x11, 1, 4, 0x10]) + bytes(16)
    assert raw_handler.condition(event)
    assert not raw_handler.condition(bytes([0x11, 2]) + bytes(18))
    assert not raw_handler.condition(bytes([0x20, 1]) + bytes(13))
    raw_handler.callback(event)
    assert received == [Report(event)]


def test_close_removes_raw_handler():
    raw = FakeRawDevice(hidpp10_responder())
    with Device(raw, 1) as device:
        device.listen()
        assert "DEV_1" in raw.event_handlers
    assert "DEV_1" not in raw.event_handlers


def test_stop_listening_removes_raw_handler():
    raw = FakeRawDevice(hidpp10_responder())
    device = Device(raw, 1)
    device.listen()
    device.stop_listening()
    assert "DEV_1" not in raw.event_handlers