"""Puzzle session state and its mutation operations."""

from __future__ import annotations

import logging
from collections.abc import Callable

from anchorage.puzzle.core.errors import (
    DuplicateVesselId,
    ExhaustedVesselType,
    PreconditionViolation,
    SessionNotInitialized,
    UnknownVesselType,
    VesselNotPlaced,
)
from anchorage.puzzle.core.models import AnchorageSize, FleetDefinition, PlacedVessel, VesselType

logger = logging.getLogger(__name__)


class AnchorageState:
    """Owns the active puzzle session.

    The catalog and the placed-vessel list are only mutated through
    ``initialize``, ``place_vessel``, ``remove_vessel`` and ``reset``;
    readers get tuples.
    """

    def __init__(self) -> None:
        self._anchorage_size: AnchorageSize | None = None
        self._vessel_types: list[VesselType] = []
        self._placed_vessels: list[PlacedVessel] = []

    @property
    def anchorage_size(self) -> AnchorageSize | None:
        return self._anchorage_size

    @property
    def vessel_types(self) -> tuple[VesselType, ...]:
        return tuple(self._vessel_types)

    @property
    def placed_vessels(self) -> tuple[PlacedVessel, ...]:
        return tuple(self._placed_vessels)

    @property
    def is_initialized(self) -> bool:
        return self._anchorage_size is not None

    def initialize(self, fleet: FleetDefinition) -> None:
        """Start a new session from a fleet definition, discarding any previous one."""
        self._anchorage_size = fleet.anchorage_size
        self._vessel_types = [vessel_type.with_remaining(vessel_type.required_count) for vessel_type in fleet.fleets]
        self._placed_vessels = []
        logger.info(
            "session_initialized",
            extra={
                "anchorage": f"{fleet.anchorage_size.width}x{fleet.anchorage_size.height}",
                "vessel_types": len(self._vessel_types),
            },
        )

    def place_vessel(self, vessel: PlacedVessel, vessel_type: VesselType) -> VesselType:
        """Record a validated placement and return the updated type snapshot."""
        self._require_initialized()
        index = self._locate(vessel_type, lambda entry: entry.remaining_count > 0)
        if index is None:
            if self._locate(vessel_type) is None:
                raise UnknownVesselType(f"Vessel type {vessel_type.designation!r} is not in this session.")
            raise ExhaustedVesselType(f"No {vessel_type.designation} left to place.")
        if self.find_placed_vessel(vessel.id) is not None:
            raise DuplicateVesselId(f"Vessel id {vessel.id!r} is already placed.")

        current = self._vessel_types[index]
        updated = current.with_remaining(current.remaining_count - 1)
        self._vessel_types[index] = updated
        self._placed_vessels.append(vessel)
        logger.debug("vessel_placed", extra=_vessel_fields(vessel, updated))
        return updated

    def remove_vessel(self, vessel: PlacedVessel, vessel_type: VesselType) -> VesselType:
        """Take a placed vessel off the anchorage and return the updated type snapshot."""
        self._require_initialized()
        position = next(
            (idx for idx, placed in enumerate(self._placed_vessels) if placed.id == vessel.id),
            None,
        )
        if position is None:
            raise VesselNotPlaced(f"Vessel id {vessel.id!r} is not placed.")
        index = self._locate(vessel_type, lambda entry: entry.remaining_count < entry.required_count)
        if index is None:
            if self._locate(vessel_type) is None:
                raise UnknownVesselType(f"Vessel type {vessel_type.designation!r} is not in this session.")
            raise PreconditionViolation(f"No {vessel_type.designation} has been placed.")

        current = self._vessel_types[index]
        updated = current.with_remaining(current.remaining_count + 1)
        self._vessel_types[index] = updated
        del self._placed_vessels[position]
        logger.debug("vessel_removed", extra=_vessel_fields(vessel, updated))
        return updated

    def reset(self) -> None:
        """Return to the uninitialized state."""
        self._placed_vessels.clear()
        self._vessel_types.clear()
        self._anchorage_size = None
        logger.info("session_reset")

    def find_vessel_type(self, designation: str) -> VesselType | None:
        """Return the catalog entry for a designation, preferring one with vessels left."""
        matches = [entry for entry in self._vessel_types if entry.designation == designation]
        for entry in matches:
            if entry.remaining_count > 0:
                return entry
        return matches[0] if matches else None

    def find_placed_vessel(self, vessel_id: str) -> PlacedVessel | None:
        for placed in self._placed_vessels:
            if placed.id == vessel_id:
                return placed
        return None

    def _require_initialized(self) -> None:
        if not self.is_initialized:
            raise SessionNotInitialized("Load a fleet before placing vessels.")

    def _locate(
        self,
        vessel_type: VesselType,
        accept: Callable[[VesselType], bool] | None = None,
    ) -> int | None:
        for idx, entry in enumerate(self._vessel_types):
            if not entry.is_same_type(vessel_type):
                continue
            if accept is None or accept(entry):
                return idx
        return None


def _vessel_fields(vessel: PlacedVessel, vessel_type: VesselType) -> dict[str, object]:
    return {
        "vessel_id": vessel.id,
        "designation": vessel.designation,
        "x": vessel.x,
        "y": vessel.y,
        "rotated": vessel.is_rotated,
        "remaining": vessel_type.remaining_count,
    }
