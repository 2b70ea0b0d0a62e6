"""Public data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, TypeAlias


class AuthorizationStatus(Enum):
    NOT_DETERMINED = "not_determined"
    DENIED = "denied"
    RESTRICTED = "restricted"
    AUTHORIZED_WHEN_IN_USE = "authorized_when_in_use"
    AUTHORIZED_ALWAYS = "authorized_always"

    @property
    def is_authorized(self) -> bool:
        return self in (
            AuthorizationStatus.AUTHORIZED_WHEN_IN_USE,
            AuthorizationStatus.AUTHORIZED_ALWAYS,
        )


@dataclass(frozen=True, slots=True)
class Coordinate:
    latitude: float
    longitude: float
    accuracy: float | None = None
    timestamp: datetime | None = None


@dataclass(frozen=True, slots=True)
class Placemark:
    thoroughfare: str | None = None
    sub_thoroughfare: str | None = None
    locality: str | None = None
    postal_code: str | None = None
    country: str | None = None


@dataclass(frozen=True, slots=True)
class ParkingZone:
    name: str
    streets: tuple[str, ...]
    hourly_rate: float | None = None
    daily_rate: float | None = None
    description: str | None = None


@dataclass(frozen=True, slots=True)
class ZoneMatch:
    zone: ParkingZone
    street: str
    city: str

    def as_display(self) -> dict[str, Any]:
        return {
            "zone_name": self.zone.name,
            "hourly_rate": self.zone.hourly_rate,
            "daily_rate": self.zone.daily_rate,
            "description": self.zone.description,
            "resolved_street": self.street,
        }


@dataclass(frozen=True, slots=True)
class ZoneNotFound:
    """No zone of the city lists the resolved street; an outcome, not a fault."""

    city: str
    street: str

    error_code = "zone_not_found"

    @property
    def user_message(self) -> str:
        return f"No parking zone found for {self.street} in {self.city}."


ResolutionResult: TypeAlias = ZoneMatch | ZoneNotFound
