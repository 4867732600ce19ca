"""Fleet definition wire schema and validation helpers."""

from __future__ import annotations

from typing import Any

from anchorage.puzzle.core.models import AnchorageSize, FleetDefinition, VesselDimensions, VesselType


def fleet_to_payload(fleet: FleetDefinition) -> dict[str, object]:
    """Convert a fleet definition to the JSON-serializable wire shape."""
    return {
        "anchorageSize": {
            "width": fleet.anchorage_size.width,
            "height": fleet.anchorage_size.height,
        },
        "fleets": [
            {
                "singleShipDimensions": {
                    "width": vessel_type.dimensions.width,
                    "height": vessel_type.dimensions.height,
                },
                "shipDesignation": vessel_type.designation,
                "shipCount": vessel_type.required_count,
            }
            for vessel_type in fleet.fleets
        ],
    }


def payload_to_fleet(payload: object) -> FleetDefinition:
    """Convert a decoded fleet payload into a fleet definition."""
    if not isinstance(payload, dict):
        raise ValueError("Fleet payload must be an object.")

    raw_size = payload.get("anchorageSize")
    if not isinstance(raw_size, dict):
        raise ValueError("Fleet anchorageSize must be an object.")
    width, height = _read_extent(raw_size, "anchorageSize")
    anchorage_size = AnchorageSize(width=width, height=height)

    raw_fleets = payload.get("fleets")
    if not isinstance(raw_fleets, list):
        raise ValueError("Fleet fleets must be a list.")

    fleets: list[VesselType] = []
    for index, item in enumerate(raw_fleets):
        if not isinstance(item, dict):
            raise ValueError(f"Fleet entry {index} must be an object.")
        raw_dimensions = item.get("singleShipDimensions")
        if not isinstance(raw_dimensions, dict):
            raise ValueError(f"Fleet entry {index} singleShipDimensions must be an object.")
        ship_width, ship_height = _read_extent(raw_dimensions, f"fleets[{index}].singleShipDimensions")

        designation = item.get("shipDesignation")
        if not isinstance(designation, str) or not designation.strip():
            raise ValueError(f"Fleet entry {index} shipDesignation is required.")

        count = _int_field(item, "shipCount", f"fleets[{index}]")
        if count < 0:
            raise ValueError(f"Fleet entry {index} shipCount cannot be negative.")

        fleets.append(
            VesselType(
                dimensions=VesselDimensions(width=ship_width, height=ship_height),
                designation=designation,
                required_count=count,
            )
        )
    return FleetDefinition(anchorage_size=anchorage_size, fleets=tuple(fleets))


def _read_extent(raw: dict[str, Any], where: str) -> tuple[int, int]:
    width = _int_field(raw, "width", where)
    height = _int_field(raw, "height", where)
    if width <= 0 or height <= 0:
        raise ValueError(f"{where} must have positive width and height.")
    return width, height


def _int_field(raw: dict[str, Any], key: str, where: str) -> int:
    value = raw.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"{where}.{key} must be int-compatible.")
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{where}.{key} must be int-compatible.") from exc
