import pytest

from hidlink.features.change_host import ChangeHost, HostInfo
from hidlink.hidpp20_errors import ErrorCode, Hidpp20Error


class FakeDevice:
    def __init__(self, responses, feature_index=8):
        self.responses = responses
        self.feature_index = feature_index
        self.calls = []
        self.sent = []

    def call_function(self, feature_index, function, params):
        params = bytes(params)
        self.calls.append((feature_index, function, params))
        if feature_index == 0 and function == 0:
            return bytes([self.feature_index]).ljust(16, b"\0")
        return bytes(self.responses[function]).ljust(16, b"\0")

    def call_function_no_response(self, feature_index, function, params):
        self.sent.append((feature_index, function, bytes(params)))


def test_lookup_uses_change_host_id():
    device = FakeDevice({})
    ChangeHost(device)
    assert device.calls[0] == (0, 0, bytes([0x18, 0x14]))


def test_host_info():
    device = FakeDevice({0: [3, 1, 1]})
    assert ChangeHost(device).get_host_info() == HostInfo(3, 1, True)


def test_set_host_sends_without_response():
    device = FakeDevice({0: [3, 0, 0]})
    ChangeHost(device).set_host(2)
    assert device.sent == [(8, 1, bytes([2]))]


def test_set_host_out_of_range():
    device = FakeDevice({0: [3, 0, 0]})
    with pytest.raises(Hidpp20Error) as excinfo:
        ChangeHost(device).set_host(3)
    assert excinfo.value.code == ErrorCode.INVALID_ARGUMENT
    assert device.sent == []


def test_host_count_is_cached():
    device = FakeDevice({0: [3, 0, 0]})
    feature = ChangeHost(device)
    feature.set_host(0)
    feature.set_host(1)
    info_calls = [c for c in device.calls if c[0] == 8 and c[1] == 0]
    assert len(info_calls) == 1


def test_cookies_are_cut_to_host_count():
    device = FakeDevice({0: [3, 0, 0], 2: [7, 8, 9, 10, 11]})
    assert ChangeHost(device).get_cookies() == bytes([7, 8, 9])


def test_set_cookie():
    device = FakeDevice({3: []})
    ChangeHost(device).set_cookie(1, 9)
    assert device.calls[-1] == (8, 3, bytes([1, 9]))