"""Core domain models used by puzzle logic."""

from __future__ import annotations

from dataclasses import InitVar, dataclass, field, replace


@dataclass(frozen=True, slots=True)
class VesselDimensions:
    """Footprint of a vessel in grid cells."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Vessel dimensions must be positive, got {self.width}x{self.height}.")

    def rotate(self) -> VesselDimensions:
        """Return the footprint turned by a quarter."""
        return VesselDimensions(width=self.height, height=self.width)


@dataclass(frozen=True, slots=True)
class AnchorageSize:
    """Bounds of the placement grid."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Anchorage size must be positive, got {self.width}x{self.height}.")


@dataclass(frozen=True, slots=True)
class VesselType:
    """Catalog entry: a vessel footprint with the number of copies to place.

    Snapshots are immutable. The state tracker hands out a new snapshot
    whenever the remaining count changes.
    """

    dimensions: VesselDimensions
    designation: str
    required_count: int
    remaining_count: int = field(init=False)
    initial_remaining: InitVar[int | None] = None

    def __post_init__(self, initial_remaining: int | None) -> None:
        if self.required_count < 0:
            raise ValueError(f"Required count for {self.designation!r} cannot be negative.")
        remaining = self.required_count if initial_remaining is None else initial_remaining
        if not 0 <= remaining <= self.required_count:
            raise ValueError(
                f"Remaining count for {self.designation!r} must be within 0..{self.required_count}, "
                f"got {remaining}."
            )
        object.__setattr__(self, "remaining_count", remaining)

    def with_remaining(self, remaining_count: int) -> VesselType:
        """Return a snapshot of this type with a different remaining count."""
        return replace(self, initial_remaining=remaining_count)

    def is_same_type(self, other: VesselType) -> bool:
        """Return whether both snapshots describe the same catalog entry."""
        return (
            self.designation == other.designation
            and self.dimensions == other.dimensions
            and self.required_count == other.required_count
        )


@dataclass(frozen=True, slots=True)
class PlacedVessel:
    """One vessel committed to a grid position."""

    id: str
    designation: str
    x: int
    y: int
    dimensions: VesselDimensions
    is_rotated: bool = False

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Vessel {self.id!r} cannot sit at negative cell ({self.x}, {self.y}).")

    @property
    def right(self) -> int:
        """Exclusive right edge."""
        return self.x + self.dimensions.width

    @property
    def bottom(self) -> int:
        """Exclusive bottom edge."""
        return self.y + self.dimensions.height

    def __str__(self) -> str:
        return f"{self.designation} at ({self.x}, {self.y}) {self.dimensions.width}x{self.dimensions.height}"


@dataclass(frozen=True, slots=True)
class FleetDefinition:
    """Grid size and vessel catalog supplied by the fleet source."""

    anchorage_size: AnchorageSize
    fleets: tuple[VesselType, ...]
