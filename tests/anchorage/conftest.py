from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from anchorage.puzzle.core.models import AnchorageSize, FleetDefinition, VesselDimensions, VesselType
from anchorage.puzzle.fleet.client import FleetFetchError


@dataclass(slots=True)
class FakeFleetSource:
    fleet: FleetDefinition | None = None
    error: str | None = None
    calls: list[int] = field(default_factory=list)

    def fetch_random_fleet(self) -> FleetDefinition:
        self.calls.append(len(self.calls) + 1)
        if self.error is not None or self.fleet is None:
            raise FleetFetchError(self.error or "no fleet")
        return self.fleet


@pytest.fixture
def make_fleet() -> Callable[..., FleetDefinition]:
    def _make(
        width: int = 10,
        height: int = 10,
        vessels: tuple[tuple[str, int, int, int], ...] = (("A", 3, 4, 1),),
    ) -> FleetDefinition:
        return FleetDefinition(
            anchorage_size=AnchorageSize(width, height),
            fleets=tuple(
                VesselType(VesselDimensions(w, h), designation, count) for designation, w, h, count in vessels
            ),
        )

    return _make


@pytest.fixture
def fake_source() -> type[FakeFleetSource]:
    return FakeFleetSource
