"""Application service-layer helpers."""

from anchorage.puzzle.app.services.placement_flow import PlacementActionResult, PlacementFlowService
from anchorage.puzzle.app.services.session_flow import FleetSource, PuzzleProgress, SessionFlowService

__all__ = [
    "FleetSource",
    "PlacementActionResult",
    "PlacementFlowService",
    "PuzzleProgress",
    "SessionFlowService",
]
