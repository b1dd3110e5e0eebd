"""HID++ 1.0/2.0 and DJ receiver protocol layer for HID input devices."""

__version__ = "0.1.0"