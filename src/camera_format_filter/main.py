"""
Camera Format Filter
Pick the best camera device and capture format for a portrait viewport
"""

import argparse
import math
import logging
from typing import List, Optional

from .catalog import load_devices
from .config import SelectionConfig, ViewportConfig, get_config_manager
from .errors import FormatSelectionError
from .selection import FormatTrace, select_device, select_format

logger = logging.getLogger(__name__)


def parse_viewport(value: str) -> ViewportConfig:
    """Parse a WIDTHxHEIGHT string."""
    try:
        width, height = (float(part) for part in value.lower().split("x"))
        return ViewportConfig(width=width, height=height)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid viewport '{value}', expected WIDTHxHEIGHT") from e


def parse_fps(value: str) -> float:
    """Parse a positive, finite frame rate."""
    try:
        fps = float(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid frame rate '{value}'") from e
    if not (math.isfinite(fps) and fps > 0):
        raise argparse.ArgumentTypeError(f"frame rate must be positive, got '{value}'")
    return fps


def _print_trace(record: FormatTrace) -> None:
    print(f"  {record}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Camera Format Filter - pick the best device and format")
    parser.add_argument("catalog", help="JSON file with the enumerated camera devices")
    parser.add_argument("--viewport", type=parse_viewport, help="Viewport size as WIDTHxHEIGHT (portrait)")
    parser.add_argument("--prefer-ultrawide", action="store_true", help="Do not penalize ultra-wide-angle devices")
    parser.add_argument("--fps", type=parse_fps, help="Only consider formats supporting this frame rate")
    parser.add_argument("--save", action="store_true", help="Store the viewport, ultra-wide and fps options as defaults")
    parser.add_argument("--trace", action="store_true", help="Print every format comparison")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def build_selection_config(args: argparse.Namespace, base: SelectionConfig) -> SelectionConfig:
    """Overlay command line options on the stored selection config."""
    updates = {}
    if args.viewport is not None:
        updates["viewport"] = args.viewport
    if args.prefer_ultrawide:
        updates["use_ultrawide_if_available"] = True
    if args.fps is not None:
        updates["target_fps"] = args.fps
    return base.model_copy(update=updates)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    manager = get_config_manager()
    config = build_selection_config(args, manager.load_config().selection)
    logger.debug(f"Selection config: {config.model_dump()}")

    if args.save:
        manager.update_config(selection=config.model_dump())
        print(f"Saved settings to {manager.config_file}")

    try:
        devices = load_devices(args.catalog)
    except FormatSelectionError as e:
        print(f"Error: {e}")
        return 1

    device = select_device(devices, config)
    if device is None:
        print("Error: catalog contains no devices")
        return 1

    trace = _print_trace if args.trace else None
    print(f"Viewport: {config.viewport.size}")
    print(f"Selected device: {device}")

    try:
        chosen = select_format(device.formats, config, trace=trace)
    except FormatSelectionError as e:
        print(f"Error: {e}")
        return 1

    if chosen is None:
        print("Error: no format of the selected device matches")
        return 1

    print(f"Selected format: {chosen}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
