"""
Prefix tree keyed by USB port numbers.

Each node optionally holds a value and owns its children, indexed by the
port number they hang off. Child order is not stored; callers that need a
stable order use child_ports().
"""

from __future__ import annotations
from typing import Generic, Optional, Sequence, TypeVar

T = TypeVar("T")


class PortTree(Generic[T]):
    """A tree node for organising a port hierarchy."""

    def __init__(self):
        self.value: Optional[T] = None
        self.children: dict[int, PortTree[T]] = {}

    def insert(self, ports: Sequence[int], value: T) -> None:
        """Set value at the given port chain, creating intermediate nodes."""
        node = self
        for port in ports:
            child = node.children.get(port)
            if child is None:
                child = PortTree()
                node.children[port] = child
            node = child
        node.value = value

    def get(self, ports: Sequence[int]) -> Optional[PortTree[T]]:
        """Get the subtree at the given port chain, or None if absent."""
        node = self
        for port in ports:
            node = node.children.get(port)
            if node is None:
                return None
        return node

    lookup = get

    def descendants(self) -> list[T]:
        """All values in this subtree, own value first (pre-order)."""
        result: list[T] = []
        stack: list[PortTree[T]] = [self]
        while stack:
            node = stack.pop()
            if node.value is not None:
                result.append(node.value)
            # Reversed so children pop in the order they are iterated
            stack.extend(reversed(list(node.children.values())))
        return result

    def direct_children(self) -> list[tuple[int, T]]:
        """Immediate children that carry a value, as (port, value)."""
        return [
            (port, child.value)
            for port, child in self.children.items()
            if child.value is not None
        ]

    def child_ports(self) -> list[int]:
        """Immediate child port numbers in ascending order."""
        return sorted(self.children)

    def __repr__(self) -> str:
        return f"PortTree(value={self.value!r}, children={self.child_ports()})"
