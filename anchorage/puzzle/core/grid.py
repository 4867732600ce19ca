"""Numpy-backed cell view of an anchorage."""

from __future__ import annotations

import string
from collections.abc import Sequence

import numpy as np

from anchorage.puzzle.core.models import AnchorageSize, PlacedVessel

_LABELS = string.ascii_uppercase + string.ascii_lowercase + string.digits


def occupancy_grid(anchorage_size: AnchorageSize, placed_vessels: Sequence[PlacedVessel]) -> np.ndarray:
    """Return a ``(height, width)`` grid holding the 1-based index of the vessel covering each cell."""
    grid = np.zeros((anchorage_size.height, anchorage_size.width), dtype=np.int32)
    for idx, vessel in enumerate(placed_vessels, start=1):
        grid[vessel.y : vessel.bottom, vessel.x : vessel.right] = idx
    return grid


def filled_cell_count(grid: np.ndarray) -> int:
    """Return the number of covered cells."""
    return int(np.count_nonzero(grid))


def coverage_ratio(grid: np.ndarray) -> float:
    """Return the covered share of the anchorage in ``[0, 1]``."""
    if grid.size == 0:
        return 0.0
    return filled_cell_count(grid) / float(grid.size)


def render_occupancy(grid: np.ndarray) -> str:
    """Render the grid as text, one row per line."""
    rows: list[str] = []
    for row in grid:
        chars: list[str] = []
        for value in row:
            index = int(value)
            if index == 0:
                chars.append(".")
            else:
                chars.append(_LABELS[(index - 1) % len(_LABELS)])
        rows.append("".join(chars))
    return "\n".join(rows)
