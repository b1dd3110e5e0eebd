import pytest

from hidlink.hidpp20_errors import ErrorCode, Hidpp20Error, UnsupportedFeature


@pytest.mark.parametrize(
    "code, message",
    [
        (ErrorCode.UNKNOWN, "Unknown"),
        (ErrorCode.INVALID_ARGUMENT, "Invalid argument"),
        (ErrorCode.LOGITECH_INTERNAL, "Logitech internal feature"),
        (ErrorCode.INVALID_FEATURE_INDEX, "Invalid feature index"),
        (ErrorCode.UNKNOWN_DEVICE, "Unknown device"),
    ],
)
def test_messages(code, message):
    assert str(Hidpp20Error(code)) == message


def test_unknown_code_message():
    error = Hidpp20Error(0x7E)
    assert str(error) == "Unknown error code"
    assert error.code == 0x7E


def test_no_error_is_rejected():
    with pytest.raises(ValueError):
        Hidpp20Error(ErrorCode.NO_ERROR)


def test_unsupported_feature_carries_id():
    error = UnsupportedFeature(0x2201)
    assert error.feature_id == 0x2201
    assert error.code == 0x2201
    assert str(error) == "Unsupported feature"


def test_error_code_kept():
    error = Hidpp20Error(ErrorCode.BUSY)
    assert error.code is ErrorCode.BUSY
    assert str(error) == "Busy"