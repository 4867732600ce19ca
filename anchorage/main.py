"""Application entry point."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from anchorage.infra.config import load_api_settings, load_cell_size, load_default_env_files
from anchorage.infra.logging import setup_logging, shutdown_logging
from anchorage.puzzle.app.drop_layout import DropLayout
from anchorage.puzzle.app.services import FleetSource, PlacementFlowService, SessionFlowService
from anchorage.puzzle.core.grid import occupancy_grid, render_occupancy
from anchorage.puzzle.core.state import AnchorageState
from anchorage.puzzle.fleet.client import FleetClient
from anchorage.puzzle.fleet.repository import FleetFileSource

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LOAD_FAILED = 2

_ROTATE_SUFFIXES = frozenset({"r", "rot", "rotated"})


@dataclass(frozen=True, slots=True)
class DropCommand:
    """One ``DESIGNATION:X,Y[:r]`` drop requested on the command line."""

    designation: str
    x: int
    y: int
    is_rotated: bool = False


@dataclass(frozen=True, slots=True)
class PixelDropCommand:
    """A drop given as a pixel offset from the grid origin."""

    designation: str
    px: float
    py: float
    is_rotated: bool = False


def _split_drop(raw: str) -> tuple[str, str, str, bool]:
    body, _, suffix = raw.rpartition(":")
    is_rotated = suffix.strip().lower() in _ROTATE_SUFFIXES
    if not is_rotated:
        body = raw
    designation, separator, coords = body.rpartition(":")
    if not separator:
        raise argparse.ArgumentTypeError(f"Drop must look like DESIGNATION:X,Y, got {raw!r}.")
    designation = designation.strip()
    if not designation:
        raise argparse.ArgumentTypeError(f"Drop {raw!r} has no designation.")
    first, comma, second = coords.partition(",")
    if not comma:
        raise argparse.ArgumentTypeError(f"Drop {raw!r} needs X,Y.")
    return designation, first.strip(), second.strip(), is_rotated


def parse_drop(raw: str) -> DropCommand:
    """Parse ``DESIGNATION:X,Y`` with an optional ``:r`` rotation suffix."""
    designation, x_raw, y_raw, is_rotated = _split_drop(raw)
    try:
        x, y = int(x_raw), int(y_raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Drop {raw!r} needs integer X,Y.") from exc
    return DropCommand(designation=designation, x=x, y=y, is_rotated=is_rotated)


def parse_pixel_drop(raw: str) -> PixelDropCommand:
    """Parse ``DESIGNATION:PX,PY[:r]`` pixel offsets."""
    designation, px_raw, py_raw, is_rotated = _split_drop(raw)
    try:
        px, py = float(px_raw), float(py_raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Drop {raw!r} needs numeric PX,PY.") from exc
    return PixelDropCommand(designation=designation, px=px, py=py, is_rotated=is_rotated)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="anchorage-puzzle",
        description="Load an anchorage puzzle, apply vessel drops and report progress.",
    )
    parser.add_argument(
        "--fleet-file",
        type=Path,
        default=None,
        help="Read the fleet definition from a JSON file instead of the fleet API.",
    )
    parser.add_argument(
        "--place",
        dest="drops",
        action="append",
        type=parse_drop,
        default=[],
        metavar="DESIGNATION:X,Y[:r]",
        help="Drop a vessel at grid cell X,Y; append ':r' to rotate it. Repeatable.",
    )
    parser.add_argument(
        "--pixel",
        dest="drops",
        action="append",
        type=parse_pixel_drop,
        default=[],
        metavar="DESIGNATION:PX,PY[:r]",
        help="Drop a vessel at a pixel offset from the grid origin, using ANCHORAGE_CELL_SIZE. Repeatable.",
    )
    parser.add_argument("--no-map", action="store_true", help="Do not print the occupancy map.")
    return parser


def run(argv: Sequence[str] | None = None, *, source: FleetSource | None = None) -> int:
    """Run one puzzle session and return the process exit code."""
    args = build_parser().parse_args(argv)
    if source is None:
        source = FleetFileSource(args.fleet_file) if args.fleet_file else FleetClient(load_api_settings())

    state = AnchorageState()
    loaded = SessionFlowService.load_puzzle(state, source)
    size = state.anchorage_size
    if not loaded or size is None:
        print("Could not load puzzle.")
        return EXIT_LOAD_FAILED

    print(f"Anchorage {size.width}x{size.height}")
    for vessel_type in state.vessel_types:
        print(
            f"  {vessel_type.designation}: {vessel_type.dimensions.width}x{vessel_type.dimensions.height}"
            f" x{vessel_type.required_count}"
        )

    layout = DropLayout(cell_size=load_cell_size())
    logger.info(
        "cli_session_loaded",
        extra={"fleet_source": type(source).__name__, "drops": len(args.drops), "cell_size": layout.cell_size},
    )
    for drop in args.drops:
        if isinstance(drop, PixelDropCommand):
            result = PlacementFlowService.on_pixel_drop(
                state=state,
                layout=layout,
                designation=drop.designation,
                px=drop.px,
                py=drop.py,
                is_rotated=drop.is_rotated,
            )
            print(f"{drop.designation} -> {drop.px:g},{drop.py:g}px: {result.status}")
            continue
        result = PlacementFlowService.on_drop(
            state=state,
            designation=drop.designation,
            x=drop.x,
            y=drop.y,
            is_rotated=drop.is_rotated,
        )
        print(f"{drop.designation} -> ({drop.x}, {drop.y}): {result.status}")

    progress = SessionFlowService.progress(state)
    print(
        f"Placed {progress.placed}/{progress.total}, remaining {progress.remaining}, "
        f"coverage {progress.coverage:.0%}"
    )
    if progress.complete:
        print("Puzzle complete.")
    if not args.no_map:
        print(render_occupancy(occupancy_grid(size, state.placed_vessels)))
    return EXIT_OK


def main() -> None:
    """Run the anchorage puzzle command line."""
    load_default_env_files(override_existing=False)
    setup_logging()
    try:
        code = run()
    finally:
        shutdown_logging()
    raise SystemExit(code)


if __name__ == "__main__":
    main()
