"""Shared fixtures for the usbinfo test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pytest

from usbinfo.device import UsbDevice
from usbinfo.usb_tree import UsbTree


# ── device fixtures ───────────────────────────────────────────────────


@pytest.fixture()
def make_device():
    """Factory fixture returning a UsbDevice with customizable fields."""

    def _make(**kwargs):
        defaults = {
            "vid": 0x05E3,
            "pid": 0x0610,
            "bus": 1,
            "address": 2,
            "port_path": [],
            "name": "",
        }
        defaults.update(kwargs)
        return UsbDevice(**defaults)

    return _make


@pytest.fixture()
def sample_tree(make_device):
    """Two buses; bus 1 has a hub on port 2 with two children."""
    tree: UsbTree[UsbDevice] = UsbTree()
    devices = [
        make_device(bus=1, address=1, port_path=[], name="Root Hub", device_class=9),
        make_device(bus=1, address=2, port_path=[2], name="USB2.0 Hub", device_class=9),
        make_device(bus=1, address=5, port_path=[2, 3], vid=0x046D, pid=0xC52B, name="Receiver"),
        make_device(bus=1, address=6, port_path=[2, 4], vid=0x0BDA, pid=0x8153, name="LAN"),
        make_device(bus=1, address=3, port_path=[7], vid=0x8087, pid=0x0033, name="Bluetooth"),
        make_device(bus=2, address=4, port_path=[1], vid=0x0781, pid=0x5581, name="Flash Drive"),
    ]
    for device in devices:
        tree.insert_path(device.path(), device)
    return tree


# ── pyudev doubles ────────────────────────────────────────────────────


class FakeUdevDevice:
    """Stand-in for pyudev.Device: udev properties plus a sysfs directory."""

    def __init__(self, sys_name: str, sys_path: Path, properties: Optional[dict] = None):
        self.sys_name = sys_name
        self.sys_path = str(sys_path)
        self._properties = properties or {}

    def get(self, key, default=None):
        return self._properties.get(key, default)


@pytest.fixture()
def make_udev_device(tmp_path):
    """Factory fixture creating a FakeUdevDevice with sysfs attribute files."""

    def _make(sys_name: str, properties: Optional[dict] = None, attributes: Optional[dict] = None):
        sys_path = tmp_path / sys_name
        sys_path.mkdir()
        for name, value in (attributes or {}).items():
            (sys_path / name).write_text(f"{value}\n")
        return FakeUdevDevice(sys_name, sys_path, properties)

    return _make
