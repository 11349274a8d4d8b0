"""
USB device tree with flat lookup and hierarchical structure.

Devices live in one flat map keyed by canonical path string. Each bus has a
PortTree whose values are keys into that map, so hierarchy queries go
through the tree and payloads are only ever owned by the flat map.
"""

from __future__ import annotations
import logging
from types import MappingProxyType
from typing import Generic, Iterator, Mapping, Optional, Sequence, TypeVar, Union

from .errors import DeviceNotFound, DevicePathError, InvalidBus, InvalidPath, InvalidPort, MissingBus
from .path import DevicePath, parse_u8
from .port_tree import PortTree

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_port_path(text: str) -> list[int]:
    """Leniently parse "1.2.3" into ports, ignoring invalid tokens."""
    if not text:
        return []
    ports = []
    for token in text.split("."):
        port = parse_u8(token)
        if port is not None:
            ports.append(port)
    return ports


class UsbTree(Generic[T]):
    """Index of devices by path, with per-bus port hierarchy.

    insert_path() is the only way to add entries; it writes the flat map and
    the bus tree together so every key in a bus tree resolves to a device.
    """

    def __init__(self):
        self._devices: dict[str, T] = {}
        self._tree: dict[str, PortTree[str]] = {}

    @property
    def devices(self) -> Mapping[str, T]:
        """Read-only view of the path key -> device map."""
        return MappingProxyType(self._devices)

    def insert_path(self, path: DevicePath, value: T) -> None:
        """Insert a device at the given path, replacing any previous one."""
        key = path.to_key()
        self._devices[key] = value
        bus_tree = self._tree.get(path.bus_str())
        if bus_tree is None:
            bus_tree = PortTree()
            self._tree[path.bus_str()] = bus_tree
        bus_tree.insert(path.ports, key)
        logger.debug(f"Inserted device at {key}")

    def insert(self, bus: str, ports: Sequence[int], value: T) -> None:
        """Insert with a bus string and port chain.

        Raises:
            InvalidPath: bus or a port is not a number in 0-255
        """
        bus_num = parse_u8(bus)
        if bus_num is None:
            error = InvalidBus(bus) if bus else MissingBus()
            raise InvalidPath(error) from error
        for port in ports:
            if isinstance(port, bool) or not isinstance(port, int) or not 0 <= port <= 255:
                error = InvalidPort(str(port))
                raise InvalidPath(error) from error
        self.insert_path(DevicePath(bus_num, ports), value)

    def get_by_path(self, path: DevicePath) -> Optional[T]:
        return self._devices.get(path.to_key())

    def get(self, path: str) -> Optional[T]:
        """Get device by path string "bus:port.path", e.g. "1:1.2.3"."""
        device = self._devices.get(path)
        if device is not None:
            return device
        try:
            parsed = DevicePath.parse(path)
        except DevicePathError:
            return None
        return self._devices.get(parsed.to_key())

    def try_get(self, path: str) -> T:
        """Get device by path string, raising DeviceNotFound if absent."""
        device = self.get(path)
        if device is None:
            raise DeviceNotFound(path)
        return device

    def try_get_by_path(self, path: DevicePath) -> T:
        device = self.get_by_path(path)
        if device is None:
            raise DeviceNotFound(str(path))
        return device

    def _resolve(self, node: Optional[PortTree[str]]) -> list[T]:
        if node is None:
            return []
        return [self._devices[key] for key in node.descendants() if key in self._devices]

    def get_subtree_by_path(self, path: DevicePath) -> list[T]:
        """All devices at and below path. Empty if the path is unknown."""
        bus_tree = self._tree.get(path.bus_str())
        if bus_tree is None:
            return []
        return self._resolve(bus_tree.get(path.ports))

    def get_subtree(self, path: str) -> list[T]:
        """All devices at and below a path string, e.g. "1:1.2".

        Text that is not a valid path is split leniently, so "1" addresses
        the whole of bus 1.
        """
        try:
            parsed = DevicePath.parse(path)
        except DevicePathError:
            bus, _, port_text = path.partition(":")
            bus_tree = self._tree.get(bus)
            if bus_tree is None:
                return []
            return self._resolve(bus_tree.get(parse_port_path(port_text)))
        return self.get_subtree_by_path(parsed)

    def buses(self) -> list[str]:
        """Bus IDs, sorted as strings ("10" before "2")."""
        return sorted(self._tree)

    def bus_tree(self, bus: str) -> Optional[PortTree[str]]:
        return self._tree.get(bus)

    def all_devices(self) -> Iterator[tuple[str, T]]:
        return iter(self._devices.items())

    def __len__(self) -> int:
        return len(self._devices)

    def __contains__(self, path: object) -> bool:
        if isinstance(path, DevicePath):
            return self.get_by_path(path) is not None
        if isinstance(path, str):
            return self.get(path) is not None
        return False

    def __getitem__(self, path: Union[str, DevicePath]) -> T:
        if isinstance(path, DevicePath):
            return self.try_get_by_path(path)
        return self.try_get(path)

    def __repr__(self) -> str:
        return f"UsbTree(devices={len(self._devices)}, buses={self.buses()})"
