"""
CLI entry point for usbinfo.

Allows running with: python -m usbinfo
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, Sequence

from .config_manager import ConfigManager
from .device import UsbDevice, matches_vid_pid, parse_vid_pid
from .discovery import build_usb_tree
from .errors import DeviceNotFound, DevicePathError, UsbTreeError
from .formatter import TreeFormatter, TreeStyle
from .path import DevicePath

logger = logging.getLogger(__name__)


def _vid_pid_arg(text: str) -> tuple[int, int]:
    try:
        return parse_vid_pid(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="usbinfo",
        description="Show the USB device tree.",
    )
    parser.add_argument("--plain", action="store_true", help="disable colours")
    parser.add_argument("--ascii", action="store_true", help="use ASCII connectors")
    parser.add_argument("--no-header", action="store_true", help="omit the 'Bus NNN' lines")
    parser.add_argument("--config", type=Path, default=None, help="configuration file (YAML)")
    action = parser.add_mutually_exclusive_group()
    action.add_argument("--path", default=None, help="list the devices at and below PATH, e.g. 1:2")
    action.add_argument(
        "--filter",
        dest="filters",
        type=_vid_pid_arg,
        action="append",
        default=[],
        metavar="VID:PID",
        help="list devices matching VID:PID (repeatable)",
    )
    action.add_argument(
        "--set-name",
        nargs=2,
        default=None,
        metavar=("VID:PID", "NAME"),
        help="save a custom display name for a device",
    )
    action.add_argument(
        "--remove-name",
        type=_vid_pid_arg,
        default=None,
        metavar="VID:PID",
        help="forget the custom name of a device",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def resolve_style(args: argparse.Namespace, config_manager: ConfigManager) -> TreeStyle:
    """Config file style, overridden by command-line flags."""
    style = config_manager.tree_style()
    if args.ascii:
        ascii_style = TreeStyle.ascii()
        style = style.model_copy(
            update={
                "branch": ascii_style.branch,
                "corner": ascii_style.corner,
                "vertical": ascii_style.vertical,
            }
        )
    if args.plain:
        style = style.with_color(False)
    if args.no_header:
        style = style.with_header(False)
    return style


def edit_device_name(config_manager: ConfigManager, vid: int, pid: int, name: Optional[str]) -> str:
    """Save NAME for VID:PID, or forget its name when NAME is None."""
    vendor_id, product_id = f"{vid:04x}", f"{pid:04x}"
    if name is not None:
        config_manager.set_device_name(vendor_id, product_id, name)
        return f"{vendor_id}:{product_id} is now named {name!r}"

    previous = config_manager.get_device_name(vendor_id, product_id)
    config_manager.remove_device_name(vendor_id, product_id)
    if previous is None:
        return f"{vendor_id}:{product_id} had no custom name"
    return f"{vendor_id}:{product_id} is no longer named {previous!r}"


def _format_listing(devices: Iterable[UsbDevice]) -> str:
    return "".join(
        f"{device.path_key():<12} {device}\n"
        for device in sorted(devices, key=lambda d: d.path())
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the usbinfo CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    rename = None
    if args.set_name is not None:
        id_text, name = args.set_name
        try:
            rename = (*parse_vid_pid(id_text), name)
        except ValueError as e:
            parser.error(f"argument --set-name: {e}")
    elif args.remove_name is not None:
        rename = (*args.remove_name, None)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config_manager = ConfigManager(args.config)

    if rename is not None:
        try:
            print(edit_device_name(config_manager, *rename))
        except OSError as e:
            logger.debug("saving configuration failed", exc_info=True)
            print(f"usbinfo: cannot save {config_manager.config_path}: {e}", file=sys.stderr)
            return 1
        return 0

    style = resolve_style(args, config_manager)

    try:
        tree = build_usb_tree(name_lookup=config_manager.get_device_lookup())

        if args.path is not None:
            path = DevicePath.parse(args.path)
            devices = tree.get_subtree_by_path(path)
            if not devices:
                raise DeviceNotFound(args.path)
            sys.stdout.write(_format_listing(devices))
        elif args.filters:
            devices = [d for _, d in tree.all_devices() if matches_vid_pid(d, args.filters)]
            sys.stdout.write(_format_listing(devices))
        else:
            sys.stdout.write(TreeFormatter(tree, style).render())
    except (UsbTreeError, DevicePathError) as e:
        logger.debug("usbinfo failed", exc_info=True)
        print(f"usbinfo: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
