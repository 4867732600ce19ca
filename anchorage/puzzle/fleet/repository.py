"""JSON file source for fleet definitions."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from anchorage.puzzle.core.models import FleetDefinition
from anchorage.puzzle.fleet.client import FleetFetchError
from anchorage.puzzle.fleet.schema import payload_to_fleet

logger = logging.getLogger(__name__)


class FleetFileSource:
    """Serve a fleet definition stored in the API's JSON shape."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def fetch_random_fleet(self) -> FleetDefinition:
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except OSError as exc:
            raise FleetFetchError(f"Fleet file '{self._path}' could not be read.") from exc
        except json.JSONDecodeError as exc:
            raise FleetFetchError(f"Fleet file '{self._path}' is not valid JSON.") from exc
        try:
            fleet = payload_to_fleet(payload)
        except ValueError as exc:
            raise FleetFetchError(f"Fleet file '{self._path}' is malformed: {exc}") from exc
        logger.info("fleet_loaded", extra={"path": str(self._path), "vessel_types": len(fleet.fleets)})
        return fleet
