"""Remote fleet source."""

from __future__ import annotations

import json
import logging
from http.client import HTTPException
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from anchorage.infra.config import ApiSettings
from anchorage.puzzle.core.models import FleetDefinition
from anchorage.puzzle.fleet.schema import payload_to_fleet

logger = logging.getLogger(__name__)


class FleetFetchError(RuntimeError):
    """The fleet definition could not be fetched or understood."""


class FleetClient:
    """Fetch random fleet definitions from the fleet API."""

    def __init__(self, settings: ApiSettings) -> None:
        if settings is None:
            raise TypeError("settings is required")
        self._settings = settings

    @property
    def settings(self) -> ApiSettings:
        return self._settings

    def fetch_random_fleet(self) -> FleetDefinition:
        """Fetch and validate one random fleet definition.

        Raises:
            FleetFetchError: on network failure, non-success status, or a
                payload that is not a valid fleet definition.
        """
        url = self._settings.fleet_url
        logger.info("fleet_fetch_start", extra={"url": url})
        payload = self._fetch_json(url, self._settings.timeout_s)
        try:
            fleet = payload_to_fleet(payload)
        except ValueError as exc:
            raise FleetFetchError(f"Malformed fleet payload from {url}: {exc}") from exc
        logger.info(
            "fleet_fetch_done",
            extra={
                "anchorage": f"{fleet.anchorage_size.width}x{fleet.anchorage_size.height}",
                "vessel_types": len(fleet.fleets),
            },
        )
        return fleet

    @staticmethod
    def _fetch_json(url: str, timeout_s: float) -> Any:
        request = Request(url, headers={"Accept": "application/json"})
        try:
            with urlopen(request, timeout=timeout_s) as resp:  # noqa: S310
                status = getattr(resp, "status", 200)
                raw = resp.read()
        except HTTPError as exc:
            raise FleetFetchError(f"Fleet API returned HTTP {exc.code} for {url}.") from exc
        except (URLError, HTTPException, OSError) as exc:
            raise FleetFetchError(f"Failed to fetch fleet data from {url}.") from exc
        if not 200 <= int(status) < 300:
            raise FleetFetchError(f"Fleet API returned HTTP {status} for {url}.")
        if not raw.strip():
            raise FleetFetchError(f"Empty response from fleet API at {url}.")
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise FleetFetchError(f"Fleet API at {url} did not return JSON.") from exc
