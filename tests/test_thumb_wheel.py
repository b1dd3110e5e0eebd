import pytest

from hidlink.feature_ids import FeatureID
from hidlink.features.thumb_wheel import (
    RotationStatus,
    ThumbWheel,
    ThumbWheelCapability,
    ThumbWheelStatus,
)
from hidlink.hidpp20_errors import UnsupportedFeature
from hidlink.report import Report, ReportType

INDEX = 11


class FakeDevice:
    def __init__(self, features, responses=None):
        self.features = features
        self.responses = responses or {}
        self.calls = []

    def call_function(self, feature_index, function, params=b""):
        params = bytes(params)
        self.calls.append((feature_index, function, params))
        if feature_index == 0 and function == 0:
            fid = (params[0] << 8) | params[1]
            return bytes([self.features.get(fid, 0)]).ljust(16, b"\0")
        return bytes(self.responses.get((feature_index, function), b"")).ljust(16, b"\0")


def make(responses=None):
    device = FakeDevice({FeatureID.THUMB_WHEEL: INDEX}, responses)
    return ThumbWheel(device), device


def event(function, params):
    report = Report.function_call(ReportType.LONG, 1, INDEX, function, 0)
    report.set_params(params)
    return report


def test_lookup_request():
    feature, device = make()
    assert feature.feature_index == INDEX
    assert device.calls[0] == (0, 0, bytes([0x21, 0x50]))


def test_unsupported():
    with pytest.raises(UnsupportedFeature):
        ThumbWheel(FakeDevice({}))


def test_get_info():
    caps = ThumbWheelCapability.TIMESTAMP | ThumbWheelCapability.TOUCH
    feature, _ = make({(INDEX, 0): bytes([0x00, 0x12, 0x01, 0x2C, 0x01, caps,
                                          0x00, 0x0A])})
    info = feature.get_info()
    assert info.native_res == 0x0012
    assert info.diverted_res == 0x012C
    assert info.default_direction == 1
    assert info.capabilities == caps
    assert info.time_elapsed == 0x000A


def test_get_info_left_direction():
    feature, _ = make({(INDEX, 0): bytes(8)})
    assert feature.get_info().default_direction == -1


def test_get_status():
    feature, _ = make({(INDEX, 1): bytes([1, 3])})
    assert feature.get_status() == ThumbWheelStatus(diverted=True, inverted=True)


def test_set_status_sends_flags_and_returns_state():
    feature, device = make({(INDEX, 2): bytes([1, 0])})
    status = feature.set_status(True, False)
    assert device.calls[-1] == (INDEX, 2, bytes([1, 0]))
    assert status == ThumbWheelStatus(diverted=True, inverted=False)


def test_thumbwheel_event():
    decoded = ThumbWheel.thumbwheel_event(
        event(0, bytes([0xFF, 0xFD, 0x01, 0x02, RotationStatus.ACTIVE, 0x04])))
    assert decoded.rotation == -3
    assert decoded.timestamp == 0x0102
    assert decoded.rotation_status is RotationStatus.ACTIVE
    assert decoded.flags == 0x04


def test_thumbwheel_event_wrong_function():
    with pytest.raises(ValueError):
        ThumbWheel.thumbwheel_event(event(1, b""))