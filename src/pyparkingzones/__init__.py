"""pyparkingzones package."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .catalog import FileZoneCatalog, InMemoryZoneCatalog, RemoteZoneCatalog, ZoneCatalog
from .client import Client
from .exceptions import (
    CatalogError,
    GeocodingProviderError,
    NetworkError,
    PositioningPermissionDeniedError,
    PositioningUnavailableError,
    PositioningUndeterminedError,
    PositionUnobtainableError,
    PyParkingZonesError,
    ServiceError,
    StreetNotFoundError,
    ValidationError,
)
from .geocoding import NominatimStreetResolver, StreetResolver
from .models import (
    AuthorizationStatus,
    Coordinate,
    ParkingZone,
    Placemark,
    ResolutionResult,
    ZoneMatch,
    ZoneNotFound,
)
from .position import LocatorPositionProvider, PositionProvider, StaticPositionProvider
from .service import ZoneResolutionService

try:
    __version__ = version("pyparkingzones")
except PackageNotFoundError:  # pragma: no cover - not installed
    __version__ = "0.0.0"

__all__ = [
    "AuthorizationStatus",
    "CatalogError",
    "Client",
    "Coordinate",
    "FileZoneCatalog",
    "GeocodingProviderError",
    "InMemoryZoneCatalog",
    "LocatorPositionProvider",
    "NetworkError",
    "NominatimStreetResolver",
    "ParkingZone",
    "Placemark",
    "PositionProvider",
    "PositionUnobtainableError",
    "PositioningPermissionDeniedError",
    "PositioningUnavailableError",
    "PositioningUndeterminedError",
    "PyParkingZonesError",
    "RemoteZoneCatalog",
    "ResolutionResult",
    "ServiceError",
    "StaticPositionProvider",
    "StreetNotFoundError",
    "StreetResolver",
    "ValidationError",
    "ZoneCatalog",
    "ZoneMatch",
    "ZoneNotFound",
    "ZoneResolutionService",
    "__version__",
]
