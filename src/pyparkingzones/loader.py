"""Zone catalog parsing and validation."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from typing import Any

import jsonschema

from .const import CATALOG_FILENAME, CATALOG_PACKAGE, CATALOG_SCHEMA_FILENAME
from .exceptions import CatalogError
from .models import ParkingZone
from .util import normalize_city_name, normalize_street_name


@dataclass(frozen=True, slots=True)
class CityCatalog:
    name: str
    aliases: tuple[str, ...]
    zones: tuple[ParkingZone, ...]


def _data_root() -> Traversable:
    return resources.files(CATALOG_PACKAGE)


def bundled_catalog_path() -> Traversable:
    return _data_root() / CATALOG_FILENAME


def load_catalog_schema() -> dict:
    schema_path = _data_root() / CATALOG_SCHEMA_FILENAME
    return json.loads(schema_path.read_text(encoding="utf-8"))


def _optional_rate(data: dict, key: str, zone_name: str) -> float | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise CatalogError(f"Zone {zone_name} {key} must be a number.")
    if value < 0:
        raise CatalogError(f"Zone {zone_name} {key} must not be negative.")
    return float(value)


def build_zone(data: Any) -> ParkingZone:
    if not isinstance(data, dict):
        raise CatalogError("Zone entry must be a JSON object.")
    missing = [key for key in ("name", "streets") if key not in data]
    if missing:
        raise CatalogError(f"Zone entry missing keys: {', '.join(missing)}.")
    name = data["name"]
    streets = data["streets"]
    description = data.get("description")
    if not isinstance(name, str) or not name.strip():
        raise CatalogError("Zone name must be a non-empty string.")
    if not isinstance(streets, list) or not all(isinstance(street, str) for street in streets):
        raise CatalogError(f"Zone {name} streets must be a list of strings.")
    if description is not None and not isinstance(description, str):
        raise CatalogError(f"Zone {name} description must be a string.")
    return ParkingZone(
        name=name,
        streets=tuple(streets),
        hourly_rate=_optional_rate(data, "hourly_rate", name),
        daily_rate=_optional_rate(data, "daily_rate", name),
        description=description,
    )


def build_zones(data: Any, city: str) -> list[ParkingZone]:
    if not isinstance(data, list):
        raise CatalogError(f"Zones for {city} must be a JSON array.")
    zones = [build_zone(entry) for entry in data]
    validate_zones(zones, city)
    return zones


def validate_zones(zones: Sequence[ParkingZone], city: str) -> None:
    """Reject catalogs the street matcher cannot answer unambiguously."""
    zone_names: set[str] = set()
    owners: dict[str, str] = {}
    for zone in zones:
        if zone.name in zone_names:
            raise CatalogError(f"Zone name {zone.name} is duplicated in {city}.")
        zone_names.add(zone.name)
        if not zone.streets:
            raise CatalogError(f"Zone {zone.name} in {city} has no streets.")
        for rate in (zone.hourly_rate, zone.daily_rate):
            if rate is not None and rate < 0:
                raise CatalogError(f"Zone {zone.name} in {city} has a negative rate.")
        for street in zone.streets:
            normalized = normalize_street_name(street)
            if not normalized:
                raise CatalogError(f"Zone {zone.name} in {city} has an empty street entry.")
            owner = owners.get(normalized)
            if owner is not None and owner != zone.name:
                raise CatalogError(
                    f"Street {street} in {city} belongs to both {owner} and {zone.name}."
                )
            owners[normalized] = zone.name


def parse_catalog_document(data: Any) -> list[CityCatalog]:
    try:
        jsonschema.validate(instance=data, schema=load_catalog_schema())
    except jsonschema.ValidationError as exc:
        raise CatalogError(f"Zone catalog does not match schema: {exc.message}") from exc
    cities: list[CityCatalog] = []
    seen: set[str] = set()
    for entry in data["cities"]:
        name = entry["name"]
        aliases = tuple(entry.get("aliases", ()))
        for key in (name, *aliases):
            normalized = normalize_city_name(key)
            if normalized in seen:
                raise CatalogError(f"City key {key} is defined more than once.")
            seen.add(normalized)
        zones = build_zones(entry["zones"], name)
        cities.append(CityCatalog(name=name, aliases=aliases, zones=tuple(zones)))
    return cities


def read_catalog_document(path: Traversable) -> list[CityCatalog]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise CatalogError("Zone catalog file could not be read.") from exc
    except json.JSONDecodeError as exc:
        raise CatalogError("Zone catalog is not valid JSON.") from exc
    return parse_catalog_document(data)
