"""HID++ 2.0 features: root, device name, feature set, DPI, hosts, reset, scrolling, controls and status."""