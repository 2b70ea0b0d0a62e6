"""Zone catalogs and street matching."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any
from urllib.parse import quote

import aiohttp

from .const import REMOTE_CITIES_ENDPOINT
from .exceptions import CatalogError, NetworkError, ServiceError
from .loader import (
    CityCatalog,
    build_zones,
    bundled_catalog_path,
    read_catalog_document,
    validate_zones,
)
from .models import ParkingZone
from .transport import HttpEndpoint
from .util import find_zone, normalize_city_name

_LOGGER = logging.getLogger(__name__)


class ZoneCatalog(ABC):
    """Base class for parking zone data sources."""

    @abstractmethod
    async def load_zones(self, city: str) -> list[ParkingZone]:
        """Return the zones of ``city`` in catalog order, or [] if unknown."""

    @abstractmethod
    async def list_cities(self) -> list[str]:
        """Return the display names of all cities with a catalog."""

    def find_zone(self, street: str, zones: Sequence[ParkingZone]) -> ParkingZone | None:
        """Return the first zone listing ``street`` after normalization."""
        return find_zone(street, zones)


class InMemoryZoneCatalog(ZoneCatalog):
    """Catalog held in memory, keyed by city name."""

    def __init__(self, catalogs: Mapping[str, Sequence[ParkingZone]]) -> None:
        self._cities: list[str] = []
        self._zones: dict[str, tuple[ParkingZone, ...]] = {}
        for city, zones in catalogs.items():
            key = normalize_city_name(city)
            if not key:
                raise CatalogError("City name must not be empty.")
            if key in self._zones:
                raise CatalogError(f"City key {city} is defined more than once.")
            validate_zones(zones, city)
            self._cities.append(city)
            self._zones[key] = tuple(zones)

    async def load_zones(self, city: str) -> list[ParkingZone]:
        return list(self._zones.get(normalize_city_name(city), ()))

    async def list_cities(self) -> list[str]:
        return list(self._cities)


class FileZoneCatalog(ZoneCatalog):
    """Catalog read from a JSON document on every request.

    Defaults to the catalog bundled with the package.
    """

    def __init__(self, path: str | Path | Traversable | None = None) -> None:
        if path is None:
            self._path: Path | Traversable = bundled_catalog_path()
        elif isinstance(path, str):
            self._path = Path(path)
        else:
            self._path = path

    async def _read(self) -> list[CityCatalog]:
        return await asyncio.to_thread(read_catalog_document, self._path)

    async def load_zones(self, city: str) -> list[ParkingZone]:
        key = normalize_city_name(city)
        _LOGGER.debug("Catalog %s load_zones started", self._path)
        for entry in await self._read():
            keys = {normalize_city_name(name) for name in (entry.name, *entry.aliases)}
            if key in keys:
                _LOGGER.debug("Catalog %s load_zones found %s", self._path, entry.name)
                return list(entry.zones)
        _LOGGER.debug("Catalog %s has no zones for the requested city", self._path)
        return []

    async def list_cities(self) -> list[str]:
        return [entry.name for entry in await self._read()]


class RemoteZoneCatalog(HttpEndpoint, ZoneCatalog):
    """Catalog served by an HTTP API."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        *,
        base_url: str,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
    ) -> None:
        super().__init__(
            session,
            base_url=base_url,
            headers={"Accept": "application/json"},
            timeout=timeout,
            retry_count=retry_count,
        )

    async def load_zones(self, city: str) -> list[ParkingZone]:
        path = f"{REMOTE_CITIES_ENDPOINT}/{quote(city.strip(), safe='')}/zones"
        _LOGGER.debug("Remote catalog load_zones started")
        try:
            data = await self._fetch(path)
        except ServiceError as exc:
            if exc.status == 404:
                _LOGGER.debug("Remote catalog has no zones for the requested city")
                return []
            raise CatalogError("Zone catalog request failed.") from exc
        zones = build_zones(data, city)
        _LOGGER.debug("Remote catalog load_zones completed with %s zones", len(zones))
        return zones

    async def list_cities(self) -> list[str]:
        try:
            data = await self._fetch(REMOTE_CITIES_ENDPOINT)
        except ServiceError as exc:
            raise CatalogError("City list request failed.") from exc
        if not isinstance(data, list) or not all(isinstance(city, str) for city in data):
            raise CatalogError("City list must be a JSON array of strings.")
        return data

    async def _fetch(self, path: str) -> Any:
        try:
            return await self._request_json("GET", path)
        except NetworkError as exc:
            raise CatalogError("Zone catalog is unreachable.") from exc
