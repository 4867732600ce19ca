"""Puzzle loading and progress reporting."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from anchorage.puzzle.core.grid import coverage_ratio, filled_cell_count, occupancy_grid
from anchorage.puzzle.core.models import FleetDefinition
from anchorage.puzzle.core.planner import (
    all_vessels_placed,
    get_remaining_vessel_count,
    get_total_vessel_count,
)
from anchorage.puzzle.core.state import AnchorageState
from anchorage.puzzle.fleet.client import FleetFetchError

logger = logging.getLogger(__name__)


class FleetSource(Protocol):
    """Anything that can hand out a fleet definition."""

    def fetch_random_fleet(self) -> FleetDefinition: ...


@dataclass(frozen=True, slots=True)
class PuzzleProgress:
    """Snapshot of how far the current puzzle has come."""

    total: int
    remaining: int
    placed: int
    complete: bool
    filled_cells: int
    coverage: float


class SessionFlowService:
    """Session lifecycle helpers around the state tracker."""

    @staticmethod
    def load_puzzle(state: AnchorageState, source: FleetSource) -> bool:
        """Fetch a fleet and start a session from it.

        A failed fetch leaves the current session untouched.
        """
        try:
            fleet = source.fetch_random_fleet()
        except FleetFetchError as exc:
            logger.warning("could_not_load_puzzle", extra={"reason": str(exc)})
            return False
        state.initialize(fleet)
        return True

    @staticmethod
    def new_puzzle(state: AnchorageState, source: FleetSource) -> bool:
        """Discard the current session and load a fresh one."""
        state.reset()
        return SessionFlowService.load_puzzle(state, source)

    @staticmethod
    def progress(state: AnchorageState) -> PuzzleProgress:
        vessel_types = state.vessel_types
        total = get_total_vessel_count(vessel_types)
        remaining = get_remaining_vessel_count(vessel_types)
        if state.anchorage_size is None:
            filled, coverage = 0, 0.0
        else:
            grid = occupancy_grid(state.anchorage_size, state.placed_vessels)
            filled, coverage = filled_cell_count(grid), coverage_ratio(grid)
        return PuzzleProgress(
            total=total,
            remaining=remaining,
            placed=len(state.placed_vessels),
            complete=state.is_initialized and all_vessels_placed(vessel_types),
            filled_cells=filled,
            coverage=coverage,
        )
