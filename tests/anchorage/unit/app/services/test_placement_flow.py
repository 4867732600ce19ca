from anchorage.puzzle.app.drop_layout import DropLayout
from anchorage.puzzle.app.services.placement_flow import PlacementFlowService
from anchorage.puzzle.core.models import VesselDimensions
from anchorage.puzzle.core.planner import AnchoragePlanner
from anchorage.puzzle.core.state import AnchorageState


def _state(make_fleet, vessels=(("A", 3, 4, 1),)) -> AnchorageState:
    state = AnchorageState()
    state.initialize(make_fleet(10, 10, vessels))
    return state


def test_on_drop_places_vessel_and_reports_completion(make_fleet) -> None:
    state = _state(make_fleet)
    result = PlacementFlowService.on_drop(state=state, designation="A", x=0, y=0)
    assert result.handled
    assert result.complete
    assert result.status == "All vessels placed."
    assert result.placed is not None
    assert state.placed_vessels == (result.placed,)
    assert state.vessel_types[0].remaining_count == 0


def test_second_drop_of_exhausted_type_is_rejected(make_fleet) -> None:
    state = _state(make_fleet)
    PlacementFlowService.on_drop(state=state, designation="A", x=0, y=0)
    again = PlacementFlowService.on_drop(state=state, designation="A", x=5, y=5)
    assert again.handled
    assert again.placed is None
    assert again.status == "No A left to place."
    assert len(state.placed_vessels) == 1


def test_invalid_drop_leaves_state_unchanged(make_fleet) -> None:
    state = _state(make_fleet, (("A", 3, 4, 2),))
    PlacementFlowService.on_drop(state=state, designation="A", x=0, y=0)
    before = (state.placed_vessels, state.vessel_types)

    overlap = PlacementFlowService.on_drop(state=state, designation="A", x=2, y=2)
    outside = PlacementFlowService.on_drop(state=state, designation="A", x=8, y=0)

    assert overlap.status == "Invalid drop position."
    assert outside.status == "Invalid drop position."
    assert (state.placed_vessels, state.vessel_types) == before


def test_rotated_drop_uses_swapped_dimensions(make_fleet) -> None:
    state = _state(make_fleet, (("A", 3, 4, 2),))
    upright = PlacementFlowService.on_drop(state=state, designation="A", x=7, y=0)
    assert upright.placed is not None
    rotated = PlacementFlowService.on_drop(state=state, designation="A", x=0, y=0, is_rotated=True)
    assert rotated.placed is not None
    assert rotated.placed.is_rotated
    assert rotated.placed.dimensions == VesselDimensions(4, 3)
    assert rotated.status == "All vessels placed."


def test_placed_vessels_get_unique_ids(make_fleet) -> None:
    state = _state(make_fleet, (("A", 1, 1, 5),))
    for x in range(5):
        PlacementFlowService.on_drop(state=state, designation="A", x=x, y=0)
    ids = {vessel.id for vessel in state.placed_vessels}
    assert len(ids) == 5


def test_drop_without_loaded_puzzle_is_not_handled() -> None:
    empty = AnchorageState()
    assert not PlacementFlowService.on_drop(state=empty, designation="A", x=0, y=0).handled


def test_unknown_designation_is_not_handled(make_fleet) -> None:
    state = _state(make_fleet)
    result = PlacementFlowService.on_drop(state=state, designation="Nope", x=0, y=0)
    assert not result.handled
    assert result.status == "Unknown vessel Nope."


def test_pixel_drop_quantizes_to_cells(make_fleet) -> None:
    state = _state(make_fleet)
    result = PlacementFlowService.on_pixel_drop(
        state=state,
        layout=DropLayout(cell_size=40),
        designation="A",
        px=85.0,
        py=130.0,
    )
    assert result.placed is not None
    assert (result.placed.x, result.placed.y) == (2, 3)


def test_pixel_drop_left_of_grid_is_invalid(make_fleet) -> None:
    state = _state(make_fleet)
    result = PlacementFlowService.on_pixel_drop(
        state=state, layout=DropLayout(cell_size=40), designation="A", px=-3.0, py=10.0
    )
    assert result.status == "Invalid drop position."
    assert state.placed_vessels == ()


class _ClosedAnchoragePlanner(AnchoragePlanner):
    def __init__(self) -> None:
        self.checked: list[tuple[int, int]] = []

    def can_place_vessel(self, x, y, dimensions, anchorage_size, placed_vessels) -> bool:  # type: ignore[override]
        self.checked.append((x, y))
        return False


def test_pixel_drop_uses_given_planner(make_fleet) -> None:
    state = _state(make_fleet)
    planner = _ClosedAnchoragePlanner()
    result = PlacementFlowService.on_pixel_drop(
        state=state,
        layout=DropLayout(cell_size=40),
        designation="A",
        px=85.0,
        py=130.0,
        planner=planner,
    )
    assert planner.checked == [(2, 3)]
    assert result.status == "Invalid drop position."
    assert state.placed_vessels == ()


def test_on_remove_is_inverse_of_drop(make_fleet) -> None:
    state = _state(make_fleet, (("A", 3, 4, 1), ("B", 2, 2, 1)))
    PlacementFlowService.on_drop(state=state, designation="B", x=6, y=6)
    before = (state.placed_vessels, state.vessel_types)

    dropped = PlacementFlowService.on_drop(state=state, designation="A", x=0, y=0, is_rotated=True)
    assert dropped.placed is not None
    removed = PlacementFlowService.on_remove(state=state, vessel_id=dropped.placed.id)

    assert removed.handled
    assert removed.removed == dropped.placed
    assert removed.status == "Removed A."
    assert (state.placed_vessels, state.vessel_types) == before


def test_on_remove_unknown_id_is_not_handled(make_fleet) -> None:
    state = _state(make_fleet)
    assert not PlacementFlowService.on_remove(state=state, vessel_id="missing").handled
