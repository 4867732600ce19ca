"""Pixel to grid-cell translation for drop points."""

from __future__ import annotations

import math
from dataclasses import dataclass

from anchorage.infra.config import DEFAULT_CELL_SIZE


@dataclass(frozen=True, slots=True)
class GridCell:
    """Grid coordinate, ``x`` is the column and ``y`` the row."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class DropLayout:
    """Anchorage grid geometry on screen."""

    cell_size: float = DEFAULT_CELL_SIZE

    def __post_init__(self) -> None:
        if self.cell_size <= 0:
            raise ValueError("Cell size must be positive.")

    def to_grid_cell(self, px: float, py: float) -> GridCell:
        """Convert a point relative to the grid origin into a cell.

        Points left of or above the grid map to negative cells; bounds are
        left to the placement validator.
        """
        return GridCell(x=math.floor(px / self.cell_size), y=math.floor(py / self.cell_size))
