"""
usbinfo - USB device tree explorer.

Builds an index of the USB devices attached to the system, addressable by
"bus:port.port" path, and renders it as a tree.

    >>> tree = build_usb_tree()
    >>> print(TreeFormatter(tree))
    >>> tree.get("1:2.3")
    >>> tree.get_subtree("1:2")
"""

__version__ = "0.1.0"
__all__ = [
    "DevicePath",
    "DevicePathError",
    "DeviceNotFound",
    "InvalidBus",
    "InvalidFormat",
    "InvalidPath",
    "InvalidPort",
    "ListDevices",
    "MissingBus",
    "PortTree",
    "TreeFormatter",
    "TreeStyle",
    "UsbDevice",
    "UsbTree",
    "UsbTreeError",
    "build_usb_tree",
    "matches_vid_pid",
]

from .device import UsbDevice, matches_vid_pid
from .discovery import build_usb_tree
from .errors import (
    DeviceNotFound,
    DevicePathError,
    InvalidBus,
    InvalidFormat,
    InvalidPath,
    InvalidPort,
    ListDevices,
    MissingBus,
    UsbTreeError,
)
from .formatter import TreeFormatter, TreeStyle
from .path import DevicePath
from .port_tree import PortTree
from .usb_tree import UsbTree
