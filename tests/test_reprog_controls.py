import pytest

from hidlink.feature_ids import FeatureID
from hidlink.features.reprog_controls import (
    ControlInfo,
    ControlInfoAdditionalFlags,
    ControlInfoFlags,
    ControlReportingFlags,
    Move,
    ReprogControls,
    ReprogControlsV2,
    ReprogControlsV3,
    ReprogControlsV4,
)
from hidlink.hidpp20_errors import ErrorCode, Hidpp20Error, UnsupportedFeature
from hidlink.report import Report, ReportType

INDEX = 9

CONTROL_ROWS = [
    bytes([0x00, 0x50, 0x00, 0x38, ControlInfoFlags.MOUSE_BUTTON, 0, 1, 0, 0]),
    bytes([0x00, 0xC3, 0x00, 0x9C,
           ControlInfoFlags.TEMPORARY_DIVERTABLE
           | ControlInfoFlags.PERSISTENTLY_DIVERTABLE,
           0, 2, 3, ControlInfoAdditionalFlags.RAW_XY]),
]


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
        value = self.responses.get((feature_index, function), b"")
        if callable(value):
            value = value(params)
        return bytes(value).ljust(16, b"\0")


def control_device(feature_id=FeatureID.REPROG_CONTROLS):
    return FakeDevice(
        {feature_id: INDEX},
        {
            (INDEX, 0): bytes([len(CONTROL_ROWS)]),
            (INDEX, 1): lambda params: CONTROL_ROWS[params[0]],
        },
    )


def event(function, params):
    report = Report.function_call(ReportType.LONG, 1, INDEX, function, 0)
    report.set_params(params)
    return report


def test_control_count_and_info():
    feature = ReprogControls(control_device())
    assert feature.get_control_count() == 2
    info = feature.get_control_info(1)
    assert info.control_id == 0x00C3
    assert info.task_id == 0x009C
    assert info.group == 2
    assert info.group_mask == 3
    assert info.additional_flags == ControlInfoAdditionalFlags.RAW_XY


def test_init_cid_map_reads_each_control_once():
    device = control_device()
    feature = ReprogControls(device)
    feature.init_cid_map()
    feature.init_cid_map()
    assert set(feature.controls) == {0x50, 0xC3}
    info_calls = [call for call in device.calls if call[:2] == (INDEX, 1)]
    assert len(info_calls) == len(CONTROL_ROWS)


def test_get_control_id_info_unknown():
    feature = ReprogControls(control_device())
    with pytest.raises(Hidpp20Error) as caught:
        feature.get_control_id_info(0x1234)
    assert caught.value.code == ErrorCode.INVALID_ARGUMENT


def test_emulated_control_reporting():
    feature = ReprogControls(control_device())
    report = feature.get_control_reporting(0xC3)
    expected = (ControlReportingFlags.TEMPORARY_DIVERTED
                | ControlReportingFlags.PERSISTENTLY_DIVERTED
                | ControlReportingFlags.RAW_XY_DIVERTED)
    assert report == ControlInfo(control_id=0xC3, flags=int(expected))
    assert feature.get_control_reporting(0x50).flags == 0


def test_base_set_control_reporting_sends_nothing():
    device = control_device()
    feature = ReprogControls(device)
    before = len(device.calls)
    feature.set_control_reporting(0x50, ControlInfo(control_id=0x50, flags=1))
    assert len(device.calls) == before
    assert feature.supports_raw_xy() is False


def test_auto_version_picks_newest():
    feature = ReprogControls.auto_version(control_device(FeatureID.REPROG_CONTROLS_V3))
    assert type(feature) is ReprogControlsV3
    assert feature.feature_index == INDEX
    assert feature.get_control_count() == 2
    feature = ReprogControls.auto_version(control_device(FeatureID.REPROG_CONTROLS_V2))
    assert type(feature) is ReprogControlsV2
    assert feature.feature_index == INDEX
    assert feature.supports_raw_xy() is False


def test_auto_version_falls_back_to_base():
    feature = ReprogControls.auto_version(control_device())
    assert type(feature) is ReprogControls
    assert feature.feature_index == INDEX


def test_auto_version_unsupported():
    with pytest.raises(UnsupportedFeature):
        ReprogControls.auto_version(FakeDevice({}))


def test_v4_reporting_round_trip():
    device = FakeDevice(
        {FeatureID.REPROG_CONTROLS_V4: INDEX},
        {(INDEX, 2): bytes([0x00, 0xC3, ControlReportingFlags.TEMPORARY_DIVERTED])},
    )
    feature = ReprogControls.auto_version(device)
    assert isinstance(feature, ReprogControlsV4)
    assert feature.supports_raw_xy() is True
    info = feature.get_control_reporting(0xC3)
    assert info == ControlInfo(control_id=0xC3,
                               flags=int(ControlReportingFlags.TEMPORARY_DIVERTED))
    assert device.calls[-1] == (INDEX, 2, bytes([0x00, 0xC3]))
    feature.set_control_reporting(0xC3, ControlInfo(control_id=0x50, flags=0x03))
    assert device.calls[-1] == (INDEX, 3, bytes([0x00, 0xC3, 0x03, 0x00, 0x50]))


def test_diverted_button_event_stops_at_zero():
    buttons = ReprogControls.diverted_button_event(
        event(0, bytes([0x00, 0x50, 0x00, 0xC3, 0x00, 0x00, 0x00, 0x52])))
    assert buttons == {0x50, 0xC3}


def test_diverted_button_event_wrong_function():
    with pytest.raises(ValueError):
        ReprogControls.diverted_button_event(event(1, b""))


def test_diverted_raw_xy_event():
    move = ReprogControls.diverted_raw_xy_event(
        event(1, bytes([0xFF, 0xFF, 0x00, 0x05])))
    assert move == Move(x=-1, y=5)