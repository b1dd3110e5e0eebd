# hidlink

`hidlink` is a pure-Python protocol layer for the HID++ 1.0 / 2.0 family and
for DJ wireless receivers, as used by many mice, keyboards and their USB
receivers. It has no runtime dependencies.

## What it contains

- `hidlink.report` — `Report`, a short (`0x10`) or long (`0x11`) HID++
  report. `Report.register_access` builds HID++ 1.0 register requests,
  `Report.function_call` builds HID++ 2.0 feature calls, and `error10()` /
  `error20()` return a `Hidpp10ErrorInfo` / `Hidpp20ErrorInfo` when a reply
  is an error. `get_supported_reports(rdesc)` tells which report kinds a HID
  report descriptor declares. `ReportType` and `DeviceIndex` are the report
  IDs and device slots.
- `hidlink.hidpp10_errors` and `hidlink.hidpp20_errors` — the error codes as
  `ErrorCode` enums and the exceptions `Hidpp10Error`, `Hidpp20Error` and
  `UnsupportedFeature`.
- `hidlink.feature_ids` — `FeatureID`, the known HID++ 2.0 feature IDs, and
  `FeatureInfo`.
- `hidlink.device` — `Device`, which checks the report descriptor, probes the
  protocol version and reads the device name, then sends reports
  (`send_report`, `send_report_no_response`) and dispatches incoming events to
  named `EventHandler`s. `InvalidDevice` is raised for devices without HID++
  reports or that are asleep. `Device.from_receiver` and
  `Device.from_connection_event` open devices paired to a receiver.
- `hidlink.essential` — the minimal root and device-name access
  (`EssentialRoot`, `EssentialDeviceName`) that `Device` uses while setting up.
- `hidlink.hidpp10_device` — `Hidpp10Device` with `get_register` and
  `set_register`; it raises `ValueError` unless the device is HID++ 1.0.
- `hidlink.hidpp20_device` — `Hidpp20Device` with `call_function` and
  `call_function_no_response`; it raises `ValueError` for versions below 2.
- `hidlink.feature` — `Feature`, the base of all HID++ 2.0 features. It finds
  its feature index through the root feature and raises `UnsupportedFeature`
  if the device lacks it.
- `hidlink.dj_report` — `DjReport`, `supports_dj_reports`, `DeviceType`,
  `DjError` and `DjErrorCode`.
- `hidlink.receiver` — `Receiver`: pairing (`start_pairing`, `stop_pairing`,
  `disconnect`), enumeration (`enumerate_hidpp`, `enumerate_dj`),
  notification flags, device activity, `get_pairing_info`,
  `get_extended_pairing_info`, `get_device_name`, and decoders for connection
  and disconnection reports (`DeviceConnectionEvent`). It raises
  `InvalidReceiver` when the descriptor declares no DJ reports.
- `hidlink.receiver_monitor` — `ReceiverMonitor`, an abstract base class.
  Subclasses implement `add_device(event)` and `remove_device(index)`; after
  `run()` these are called on a new thread for each connection and
  disconnection report. Failures inside them are logged through the
  `hidlink.receiver_monitor` logger. `wait_for_device(index)` adds a device as
  soon as it sends any report.
- `hidlink.features` — `root.Root`, `device_name.DeviceName`,
  `feature_set.FeatureSet`, `adjustable_dpi.AdjustableDPI`,
  `change_host.ChangeHost`, `reset.Reset`, `smart_shift.SmartShift`,
  `hires_scroll.HiresScroll`, `reprog_controls.ReprogControls` (with
  `ReprogControls.auto_version` picking the newest of V4, V3, V2_2, V2 or the
  base version the device supports), `thumb_wheel.ThumbWheel` and
  `wireless_device_status.WirelessDeviceStatus`.

## The raw device

`hidlink` does not open hidraw nodes or talk to the operating system. Devices
and receivers are built on a raw device object that you supply, providing:

- attributes `report_descriptor`, `hidraw_path`, `product_id`, `name`,
  `is_listening` and `event_handlers` (a mapping of nickname to handler);
- methods `send_report(data)` (returns the reply bytes),
  `send_report_no_response(data)`, `listen_async()`, `stop_listener()`,
  `add_event_handler(nickname, handler)` and `remove_event_handler(nickname)`.

Handlers registered on it are `EventHandler` objects whose `condition` and
`callback` receive the raw report bytes. Because of this design the protocol
logic can be exercised entirely with fake devices.

## Examples

Recognising an error reply:

```python
from hidlink.report import Report

reply = Report(bytes([0x10, 0xFF, 0x8F, 0x81, 0x00, 0x01, 0x00]))
info = reply.error10()
# Hidpp10ErrorInfo(sub_id=0x81, address=0x00, error_code=0x01)
```

Building a register read:

```python
from hidlink.hidpp10_errors import SubID
from hidlink.report import DeviceIndex, Report, ReportType

request = Report.register_access(
    ReportType.SHORT, DeviceIndex.DEFAULT, SubID.GET_REGISTER_SHORT, 0x02
)
data = bytes(request)
```

Decoding a wheel event:

```python
from hidlink.features.hires_scroll import HiresScroll
from hidlink.report import Report

event = Report(bytes([0x11, 0x01, 0x05, 0x00, 0x12, 0xFF, 0xFE]))
status = HiresScroll.wheel_movement_event(event)
# WheelStatus(hi_res=True, periods=2, delta_v=-2)
```

## What it does not do

There is no command-line tool, no daemon and no configuration file handling:
`hidlink` only encodes, decodes and routes protocol messages. Finding and
opening devices, and reading from them, is left to the raw device object you
provide.

## Running the tests

```
pip install -e ".[test]"
pytest
```