"""Drop and removal handling for the anchorage editor."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from anchorage.puzzle.app.drop_layout import DropLayout
from anchorage.puzzle.core.models import PlacedVessel
from anchorage.puzzle.core.planner import AnchoragePlanner
from anchorage.puzzle.core.state import AnchorageState

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PlacementActionResult:
    """Outcome of a placement interaction."""

    handled: bool
    status: str | None = None
    placed: PlacedVessel | None = None
    removed: PlacedVessel | None = None
    complete: bool = False


class PlacementFlowService:
    """Drop/remove interactions as orchestration over state and planner."""

    @staticmethod
    def on_drop(
        *,
        state: AnchorageState,
        designation: str,
        x: int,
        y: int,
        is_rotated: bool = False,
        planner: AnchoragePlanner | None = None,
    ) -> PlacementActionResult:
        planner = planner or AnchoragePlanner()
        anchorage_size = state.anchorage_size
        if anchorage_size is None:
            return PlacementActionResult(handled=False, status="No puzzle loaded.")

        vessel_type = state.find_vessel_type(designation)
        if vessel_type is None:
            return PlacementActionResult(handled=False, status=f"Unknown vessel {designation}.")
        if vessel_type.remaining_count == 0:
            return PlacementActionResult(handled=True, status=f"No {designation} left to place.")

        dimensions = vessel_type.dimensions.rotate() if is_rotated else vessel_type.dimensions
        if not planner.can_place_vessel(x, y, dimensions, anchorage_size, state.placed_vessels):
            logger.debug(
                "drop_rejected",
                extra={"designation": designation, "x": x, "y": y, "rotated": is_rotated},
            )
            return PlacementActionResult(handled=True, status="Invalid drop position.")

        vessel = PlacedVessel(
            id=uuid.uuid4().hex,
            designation=designation,
            x=x,
            y=y,
            dimensions=dimensions,
            is_rotated=is_rotated,
        )
        state.place_vessel(vessel, vessel_type)
        if planner.all_vessels_placed(state.vessel_types):
            logger.info("puzzle_complete", extra={"placed": len(state.placed_vessels)})
            return PlacementActionResult(handled=True, status="All vessels placed.", placed=vessel, complete=True)
        return PlacementActionResult(handled=True, status=f"Placed {designation}.", placed=vessel)

    @staticmethod
    def on_pixel_drop(
        *,
        state: AnchorageState,
        layout: DropLayout,
        designation: str,
        px: float,
        py: float,
        is_rotated: bool = False,
        planner: AnchoragePlanner | None = None,
    ) -> PlacementActionResult:
        cell = layout.to_grid_cell(px, py)
        return PlacementFlowService.on_drop(
            state=state,
            designation=designation,
            x=cell.x,
            y=cell.y,
            is_rotated=is_rotated,
            planner=planner,
        )

    @staticmethod
    def on_remove(*, state: AnchorageState, vessel_id: str) -> PlacementActionResult:
        vessel = state.find_placed_vessel(vessel_id)
        if vessel is None:
            return PlacementActionResult(handled=False)
        footprint = vessel.dimensions.rotate() if vessel.is_rotated else vessel.dimensions
        vessel_type = next(
            (
                entry
                for entry in state.vessel_types
                if entry.designation == vessel.designation
                and entry.dimensions == footprint
                and entry.remaining_count < entry.required_count
            ),
            None,
        )
        if vessel_type is None:
            return PlacementActionResult(handled=False)
        state.remove_vessel(vessel, vessel_type)
        return PlacementActionResult(handled=True, status=f"Removed {vessel.designation}.", removed=vessel)
