"""
Pydantic model for a USB device.

UsbDevice is the payload stored in a UsbTree; its bus and port chain give
the DevicePath it is indexed under.
"""

from __future__ import annotations
from typing import Optional, Sequence
from pydantic import BaseModel, Field

from .path import DevicePath

HUB_CLASS = 9


class UsbDevice(BaseModel):
    """Represents a USB device."""

    # USB IDs
    vid: int = Field(description="Vendor ID")
    pid: int = Field(description="Product ID")

    # Location
    bus: int = Field(description="USB bus number")
    address: int = Field(description="Device address on the bus")
    port_path: list[int] = Field(default_factory=list, description="Port chain from the root hub")

    # Descriptors
    name: str = Field(default="", description="Device name/description")
    manufacturer: Optional[str] = Field(default=None, description="Manufacturer string")
    product: Optional[str] = Field(default=None, description="Product string")
    serial: Optional[str] = Field(default=None, description="Serial number")

    # Technical details
    device_class: int = Field(default=0, description="bDeviceClass")
    subclass: int = Field(default=0, description="bDeviceSubClass")
    protocol: int = Field(default=0, description="bDeviceProtocol")
    speed: Optional[str] = Field(default=None, description="Connection speed e.g. '480M', '5G'")

    # User customisation
    custom_name: Optional[str] = Field(default=None, description="User-defined name")

    def vid_pid(self) -> str:
        """The VID:PID string, e.g. "05e3:0610"."""
        return f"{self.vid:04x}:{self.pid:04x}"

    def is_hub(self) -> bool:
        return self.device_class == HUB_CLASS

    def path(self) -> DevicePath:
        return DevicePath(self.bus, self.port_path)

    def path_key(self) -> str:
        return self.path().to_key()

    @property
    def display_name(self) -> str:
        """Get the best available name for display."""
        return self.custom_name or self.name or "Unknown Device"

    def __str__(self) -> str:
        return f"Device {self.address:03d}: ID {self.vid_pid()} {self.display_name}"


def parse_vid_pid(text: str) -> tuple[int, int]:
    """Parse a "vvvv:pppp" hex filter.

    Raises:
        ValueError: text is not two hex IDs separated by a colon
    """
    vid_text, sep, pid_text = text.partition(":")
    if not sep or not vid_text or not pid_text:
        raise ValueError(f"expected VID:PID, got '{text}'")
    vid = int(vid_text, 16)
    pid = int(pid_text, 16)
    if not (0 <= vid <= 0xFFFF and 0 <= pid <= 0xFFFF):
        raise ValueError(f"VID:PID out of range: '{text}'")
    return vid, pid


def matches_vid_pid(device: UsbDevice, filters: Sequence[tuple[int, int]]) -> bool:
    """Filter predicate for VID:PID pairs. No filters matches every device."""
    if not filters:
        return True
    return any(device.vid == vid and device.pid == pid for vid, pid in filters)
