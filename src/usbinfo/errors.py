"""
Error types for usbinfo.

Path parsing errors are plain value errors; tree errors cover lookups and
the device enumeration boundary.
"""

from __future__ import annotations


class DevicePathError(ValueError):
    """Base class for errors raised while parsing a device path."""


class MissingBus(DevicePathError):
    """The text before the colon is empty."""

    def __init__(self):
        super().__init__("missing bus number")


class InvalidBus(DevicePathError):
    """The bus number is not an unsigned 8-bit integer."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"invalid bus number: '{text}'")


class InvalidPort(DevicePathError):
    """A port number in the chain is not an unsigned 8-bit integer."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"invalid port number: '{text}'")


class InvalidFormat(DevicePathError):
    """No colon separator in the path text."""

    def __init__(self):
        super().__init__("invalid format, expected 'bus:port.path'")


class UsbTreeError(Exception):
    """Base class for USB tree errors."""


class ListDevices(UsbTreeError):
    """The device enumeration backend failed."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"failed to list USB devices: {detail}")


class DeviceNotFound(UsbTreeError, KeyError):
    """No device stored at the requested path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"device not found at path: '{path}'")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return f"device not found at path: '{self.path}'"


class InvalidPath(UsbTreeError):
    """Wraps a DevicePathError raised while resolving a path."""

    def __init__(self, error: DevicePathError):
        self.error = error
        super().__init__(f"invalid device path: {error}")
