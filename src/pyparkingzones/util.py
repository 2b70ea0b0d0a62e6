"""Shared utilities for validation and normalization."""

from __future__ import annotations

import math
import unicodedata
from collections.abc import Iterable, Sequence

from .exceptions import ValidationError
from .models import Coordinate, ParkingZone

# Letters with a stroke have no Unicode decomposition.
_STROKE_FOLDS = str.maketrans({"ł": "l", "đ": "d", "ø": "o", "ħ": "h", "ŧ": "t"})


def fold_text(value: str) -> str:
    folded = unicodedata.normalize("NFKD", value.casefold())
    stripped = "".join(char for char in folded if not unicodedata.combining(char))
    return stripped.translate(_STROKE_FOLDS).strip()


def normalize_street_name(street: str) -> str:
    """Canonicalize a street name for comparison.

    Case-folds, drops diacritics and trims surrounding whitespace, so that
    ``"  Floriańska "`` and ``"florianska"`` compare equal. Idempotent.
    """
    if not isinstance(street, str):
        raise ValidationError("Street name must be a string.")
    return fold_text(street)


def normalize_city_name(city: str) -> str:
    if not isinstance(city, str):
        raise ValidationError("City must be a string.")
    return fold_text(city)


def find_zone(street: str, zones: Sequence[ParkingZone]) -> ParkingZone | None:
    normalized = normalize_street_name(street)
    if not normalized:
        return None
    for zone in zones:
        for zone_street in zone.streets:
            if normalize_street_name(zone_street) == normalized:
                return zone
    return None


def filter_cities(cities: Iterable[str], query: str | None) -> list[str]:
    if query is None or not query.strip():
        return list(cities)
    needle = fold_text(query)
    return [city for city in cities if needle in fold_text(city)]


def validate_coordinate(coordinate: Coordinate) -> Coordinate:
    if not isinstance(coordinate, Coordinate):
        raise ValidationError("coordinate must be a Coordinate.")
    latitude = coordinate.latitude
    longitude = coordinate.longitude
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise ValidationError("Coordinate values must be finite.")
    if not -90.0 <= latitude <= 90.0:
        raise ValidationError("Latitude must be between -90 and 90 degrees.")
    if not -180.0 <= longitude <= 180.0:
        raise ValidationError("Longitude must be between -180 and 180 degrees.")
    return coordinate


def describe_coordinate(coordinate: Coordinate) -> str:
    return f"{coordinate.latitude:.3f},{coordinate.longitude:.3f}"
