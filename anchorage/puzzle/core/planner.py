"""Placement validation and progress counting over anchorage geometry."""

from __future__ import annotations

from collections.abc import Iterable

from anchorage.puzzle.core.models import AnchorageSize, PlacedVessel, VesselDimensions, VesselType


def in_bounds(x: int, y: int, dimensions: VesselDimensions, anchorage_size: AnchorageSize) -> bool:
    """Return whether the rectangle lies inside the anchorage, edges included."""
    if x < 0 or y < 0:
        return False
    return x + dimensions.width <= anchorage_size.width and y + dimensions.height <= anchorage_size.height


def does_collide(x: int, y: int, dimensions: VesselDimensions, vessel: PlacedVessel) -> bool:
    """Return whether the rectangle overlaps a placed vessel with non-zero area."""
    # Touching edges or corners is not a collision.
    return not (
        x + dimensions.width <= vessel.x
        or vessel.right <= x
        or y + dimensions.height <= vessel.y
        or vessel.bottom <= y
    )


def can_place_vessel(
    x: int,
    y: int,
    dimensions: VesselDimensions,
    anchorage_size: AnchorageSize,
    placed_vessels: Iterable[PlacedVessel],
) -> bool:
    """Return whether a vessel may be dropped at ``(x, y)``."""
    if not in_bounds(x, y, dimensions, anchorage_size):
        return False
    return not any(does_collide(x, y, dimensions, vessel) for vessel in placed_vessels)


def all_vessels_placed(vessel_types: Iterable[VesselType]) -> bool:
    """Return whether no vessel of any type is left to place."""
    return all(vessel_type.remaining_count == 0 for vessel_type in vessel_types)


def get_total_vessel_count(vessel_types: Iterable[VesselType]) -> int:
    """Return how many vessels the catalog asks for in total."""
    return sum(vessel_type.required_count for vessel_type in vessel_types)


def get_remaining_vessel_count(vessel_types: Iterable[VesselType]) -> int:
    """Return how many vessels are still waiting to be placed."""
    return sum(vessel_type.remaining_count for vessel_type in vessel_types)


class AnchoragePlanner:
    """Stateless validator handed to app-layer flows."""

    @staticmethod
    def can_place_vessel(
        x: int,
        y: int,
        dimensions: VesselDimensions,
        anchorage_size: AnchorageSize,
        placed_vessels: Iterable[PlacedVessel],
    ) -> bool:
        return can_place_vessel(x, y, dimensions, anchorage_size, placed_vessels)

    @staticmethod
    def all_vessels_placed(vessel_types: Iterable[VesselType]) -> bool:
        return all_vessels_placed(vessel_types)

    @staticmethod
    def get_total_vessel_count(vessel_types: Iterable[VesselType]) -> int:
        return get_total_vessel_count(vessel_types)

    @staticmethod
    def get_remaining_vessel_count(vessel_types: Iterable[VesselType]) -> int:
        return get_remaining_vessel_count(vessel_types)
