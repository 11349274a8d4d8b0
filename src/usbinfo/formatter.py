"""
Formatting and display for USB device trees.

Renders a UsbTree as an indented tree, one section per bus, with box
drawing (or ASCII) connectors and optional per-depth colouring.
"""

from __future__ import annotations
import logging
from typing import Any, Optional

from pydantic import BaseModel, Field
from rich.color import ColorSystem
from rich.style import Style

from .port_tree import PortTree
from .usb_tree import UsbTree

logger = logging.getLogger(__name__)

# Indexed by depth % 10
DEPTH_COLORS = [
    "red",
    "yellow",
    "green",
    "cyan",
    "blue",
    "magenta",
    "bright_red",
    "bright_yellow",
    "bright_green",
    "bright_cyan",
]

_DEPTH_STYLES = [Style(color=name) for name in DEPTH_COLORS]


def depth_color(depth: int) -> str:
    """Colour name used for a tree depth."""
    return DEPTH_COLORS[depth % len(DEPTH_COLORS)]


class TreeStyle(BaseModel):
    """Configuration for tree output formatting."""

    colored: bool = Field(default=True, description="Use ANSI colours")
    show_header: bool = Field(default=True, description="Print a 'Bus NNN' line per bus")
    indent: str = Field(default="    ", description="Continuation under a last child")
    branch: str = Field(default="├── ", description="Connector for non-last items")
    corner: str = Field(default="└── ", description="Connector for last items")
    vertical: str = Field(default="│   ", description="Continuation under a non-last child")

    @classmethod
    def default(cls) -> TreeStyle:
        return cls()

    @classmethod
    def plain(cls) -> TreeStyle:
        """Non-coloured style with box drawing connectors."""
        return cls(colored=False)

    @classmethod
    def ascii(cls) -> TreeStyle:
        """ASCII-only connectors (no Unicode box drawing)."""
        return cls(branch="|-- ", corner="`-- ", vertical="|   ")

    def with_color(self, colored: bool) -> TreeStyle:
        return self.model_copy(update={"colored": colored})

    def with_header(self, show_header: bool) -> TreeStyle:
        return self.model_copy(update={"show_header": show_header})


class TreeFormatter:
    """Formatter for rendering USB device trees.

    Examples:
        >>> tree = build_usb_tree()
        >>> print(TreeFormatter(tree))
        >>> print(TreeFormatter.plain(tree))
        >>> print(TreeFormatter(tree, TreeStyle.ascii()))
    """

    def __init__(self, tree: UsbTree[Any], style: Optional[TreeStyle] = None):
        self.tree = tree
        self.style = style or TreeStyle.default()

    @classmethod
    def plain(cls, tree: UsbTree[Any]) -> TreeFormatter:
        return cls(tree, TreeStyle.plain())

    def colorize(self, text: str, depth: int) -> str:
        """Wrap text in the colour for this depth, if colours are enabled."""
        if not self.style.colored:
            return text
        style = _DEPTH_STYLES[depth % len(_DEPTH_STYLES)]
        return style.render(text, color_system=ColorSystem.STANDARD)

    def _format_port_tree(
        self,
        port_tree: PortTree[str],
        prefix: str,
        is_last: bool,
        depth: int,
        lines: list[str],
    ) -> None:
        if port_tree.value is not None:
            device = self.tree.devices.get(port_tree.value)
            if device is not None:
                if depth == 0:
                    connector = ""
                elif is_last:
                    connector = self.style.corner
                else:
                    connector = self.style.branch
                lines.append(f"{prefix}{connector}{self.colorize(str(device), depth)}")
            else:
                logger.debug(f"Skipping unresolved key {port_tree.value!r}")

        if depth == 0:
            child_prefix = ""
        elif is_last:
            child_prefix = prefix + self.style.indent
        else:
            child_prefix = prefix + self.style.vertical

        child_ports = port_tree.child_ports()
        for i, port in enumerate(child_ports):
            self._format_port_tree(
                port_tree.children[port],
                child_prefix,
                i == len(child_ports) - 1,
                depth + 1,
                lines,
            )

    def render_lines(self) -> list[str]:
        lines: list[str] = []
        for bus_str in self.tree.buses():
            if self.style.show_header:
                lines.append(self.colorize(f"Bus {int(bus_str):03d}", 0))

            port_tree = self.tree.bus_tree(bus_str)
            if port_tree is not None:
                child_ports = port_tree.child_ports()
                for i, port in enumerate(child_ports):
                    self._format_port_tree(
                        port_tree.children[port], "", i == len(child_ports) - 1, 1, lines
                    )

            lines.append("")
        return lines

    def render(self) -> str:
        """Render the whole tree, each line newline-terminated."""
        return "".join(f"{line}\n" for line in self.render_lines())

    def __str__(self) -> str:
        return self.render()
