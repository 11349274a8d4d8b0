"""
Device path parsing and manipulation.

A device path addresses a location in the USB topology as a bus number
plus the chain of hub ports leading to the device, written "bus:port.port".
The canonical string form doubles as the key of the flat device map.
"""

from __future__ import annotations
import re
from typing import Annotated, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from .errors import InvalidBus, InvalidFormat, InvalidPort, MissingBus

Byte = Annotated[StrictInt, Field(ge=0, le=255)]

_U8_PATTERN = re.compile(r"\+?[0-9]+")


def parse_u8(text: str) -> Optional[int]:
    """Parse an unsigned 8-bit decimal, or return None."""
    if not _U8_PATTERN.fullmatch(text):
        return None
    value = int(text)
    if value > 255:
        return None
    return value


class DevicePath(BaseModel):
    """A parsed USB device path in "bus:port.port.port" format.

    Examples:
        >>> path = DevicePath.parse("1:2.3.4")
        >>> path.bus, path.ports
        (1, (2, 3, 4))
        >>> str(DevicePath(1, [2, 3]))
        '1:2.3'
        >>> DevicePath.parse("2:").is_bus_only()
        True
    """

    model_config = ConfigDict(frozen=True)

    bus: Byte = Field(description="USB bus number")
    ports: tuple[Byte, ...] = Field(default=(), description="Port chain, empty for the bus root")

    def __init__(self, bus: int, ports: Iterable[int] = ()):
        super().__init__(bus=bus, ports=tuple(ports))

    @classmethod
    def bus_only(cls, bus: int) -> DevicePath:
        """Create a bus root path (no ports)."""
        return cls(bus)

    @classmethod
    def parse(cls, text: str) -> DevicePath:
        """Parse "bus:port.port" text.

        Raises:
            InvalidFormat: no colon separator
            MissingBus: empty bus before the colon
            InvalidBus: bus is not 0-255
            InvalidPort: a port token is not 0-255
        """
        bus_text, sep, port_text = text.partition(":")
        if not sep:
            raise InvalidFormat()
        if not bus_text:
            raise MissingBus()

        bus = parse_u8(bus_text)
        if bus is None:
            raise InvalidBus(bus_text)

        ports: list[int] = []
        if port_text:
            for token in port_text.split("."):
                port = parse_u8(token)
                if port is None:
                    raise InvalidPort(token)
                ports.append(port)

        return cls(bus, ports)

    def is_bus_only(self) -> bool:
        return not self.ports

    def depth(self) -> int:
        """Number of ports in the chain."""
        return len(self.ports)

    def parent(self) -> Optional[DevicePath]:
        """Path one level up, or None for a bus root."""
        if not self.ports:
            return None
        return DevicePath(self.bus, self.ports[:-1])

    def child(self, port: int) -> DevicePath:
        return DevicePath(self.bus, self.ports + (port,))

    def is_ancestor_of(self, other: DevicePath) -> bool:
        """True if other lies strictly below this path on the same bus."""
        return (
            self.bus == other.bus
            and len(self.ports) < len(other.ports)
            and other.ports[: len(self.ports)] == self.ports
        )

    def is_descendant_of(self, other: DevicePath) -> bool:
        return other.is_ancestor_of(self)

    def bus_str(self) -> str:
        """Bus number as a string, used as the per-bus map key."""
        return str(self.bus)

    def to_key(self) -> str:
        """Canonical string key for the flat device map."""
        return str(self)

    def __str__(self) -> str:
        if not self.ports:
            return f"{self.bus}:"
        return f"{self.bus}:" + ".".join(str(p) for p in self.ports)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DevicePath):
            return NotImplemented
        return (self.bus, self.ports) < (other.bus, other.ports)
