"""
USB device enumeration using pyudev.

Lists the usb_device nodes known to udev, converts each to a UsbDevice and
builds the UsbTree index from them.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Optional
import pyudev

from .device import UsbDevice
from .errors import DevicePathError, InvalidFormat, InvalidPath, ListDevices
from .path import DevicePath
from .usb_tree import UsbTree

logger = logging.getLogger(__name__)


def parse_speed(speed_str: Optional[str]) -> Optional[str]:
    """Convert a sysfs speed value (Mbit/s) to human-readable format."""
    if not speed_str:
        return None
    try:
        speed = int(float(speed_str))
    except ValueError:
        return speed_str
    if speed >= 5000:
        return f"{speed // 1000}G"
    return f"{speed}M"


def read_sysfs_attribute(device: Any, name: str) -> Optional[str]:
    """Read a sysfs attribute file of a device, stripped, or None."""
    attr_path = Path(device.sys_path) / name
    try:
        value = attr_path.read_text(errors="replace").strip()
    except OSError:
        return None
    return value or None


def _hex_attribute(device: Any, name: str, default: int = 0) -> int:
    value = read_sysfs_attribute(device, name)
    if value is None:
        return default
    try:
        return int(value, 16)
    except ValueError:
        logger.debug(f"Ignoring non-hex {name}={value!r} on {device.sys_name}")
        return default


def _int_field(device: Any, name: str, value: str, base: int = 10) -> int:
    try:
        return int(value, base)
    except ValueError as e:
        raise ListDevices(f"malformed {name}={value!r} on {device.sys_name}") from e


def device_path_from_sys_name(sys_name: str, bus: int) -> DevicePath:
    """Derive the device path from a kernel name like "1-2.3" or "usb1".

    Raises:
        InvalidPath: the name does not encode a valid bus and port chain
    """
    if sys_name == f"usb{bus}":
        text = f"{bus}:"
    else:
        bus_text, sep, chain = sys_name.partition("-")
        if not sep:
            error = InvalidFormat()
            raise InvalidPath(error) from error
        text = f"{bus_text}:{chain}"
    try:
        return DevicePath.parse(text)
    except DevicePathError as e:
        raise InvalidPath(e) from e


def build_usb_device(device: Any, name_lookup: Optional[dict[str, str]] = None) -> Optional[UsbDevice]:
    """Build a UsbDevice from a pyudev Device.

    Returns None for nodes without a bus/device number.

    Raises:
        ListDevices: a numeric field of the record is malformed
        InvalidPath: the kernel name does not encode a valid path
    """
    busnum = device.get("BUSNUM")
    devnum = device.get("DEVNUM")
    if not busnum or not devnum:
        logger.debug(f"Skipping {device.sys_name}: no BUSNUM/DEVNUM")
        return None

    bus = _int_field(device, "BUSNUM", busnum)
    path = device_path_from_sys_name(device.sys_name, bus)

    vendor_id = device.get("ID_VENDOR_ID") or read_sysfs_attribute(device, "idVendor") or "0000"
    product_id = device.get("ID_MODEL_ID") or read_sysfs_attribute(device, "idProduct") or "0000"

    custom_name = None
    if name_lookup:
        custom_name = name_lookup.get(f"{vendor_id.lower()}:{product_id.lower()}")

    product = read_sysfs_attribute(device, "product") or device.get("ID_MODEL")

    return UsbDevice(
        vid=_int_field(device, "idVendor", vendor_id, 16),
        pid=_int_field(device, "idProduct", product_id, 16),
        bus=path.bus,
        address=_int_field(device, "DEVNUM", devnum),
        port_path=list(path.ports),
        name=product or "",
        manufacturer=read_sysfs_attribute(device, "manufacturer") or device.get("ID_VENDOR"),
        product=product,
        serial=read_sysfs_attribute(device, "serial") or device.get("ID_SERIAL_SHORT"),
        device_class=_hex_attribute(device, "bDeviceClass"),
        subclass=_hex_attribute(device, "bDeviceSubClass"),
        protocol=_hex_attribute(device, "bDeviceProtocol"),
        speed=parse_speed(read_sysfs_attribute(device, "speed")),
        custom_name=custom_name,
    )


def list_usb_devices(
    context: Optional[pyudev.Context] = None,
    name_lookup: Optional[dict[str, str]] = None,
) -> list[UsbDevice]:
    """Enumerate all USB devices known to udev.

    Raises:
        ListDevices: udev could not be queried, or a record is malformed
        InvalidPath: a device name does not encode a valid path
    """
    try:
        if context is None:
            context = pyudev.Context()
        udev_devices = list(context.list_devices(subsystem="usb", DEVTYPE="usb_device"))
    except (OSError, ImportError) as e:
        raise ListDevices(str(e)) from e

    devices = []
    for udev_device in udev_devices:
        usb_device = build_usb_device(udev_device, name_lookup)
        if usb_device is not None:
            devices.append(usb_device)

    logger.debug(f"Enumerated {len(devices)} USB devices")
    return devices


def build_usb_tree(
    context: Optional[pyudev.Context] = None,
    name_lookup: Optional[dict[str, str]] = None,
) -> UsbTree[UsbDevice]:
    """Build a UsbTree from the devices currently attached to the system."""
    tree: UsbTree[UsbDevice] = UsbTree()
    for device in list_usb_devices(context, name_lookup):
        tree.insert_path(device.path(), device)
    return tree
