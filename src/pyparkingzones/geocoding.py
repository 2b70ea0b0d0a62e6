"""Street resolvers backed by reverse geocoding."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

import aiohttp

from .const import (
    DEFAULT_LANGUAGE,
    DEFAULT_USER_AGENT,
    NOMINATIM_BASE_URL,
    NOMINATIM_REVERSE_ENDPOINT,
    NOMINATIM_ZOOM_STREET,
    THOROUGHFARE_KEYS,
)
from .exceptions import GeocodingProviderError, NetworkError, ServiceError, StreetNotFoundError
from .models import Coordinate, Placemark
from .transport import HttpEndpoint
from .util import describe_coordinate, validate_coordinate

_LOGGER = logging.getLogger(__name__)


class StreetResolver(ABC):
    """Base class for coordinate to street name resolution."""

    async def resolve_street(self, coordinate: Coordinate) -> str:
        """Return the thoroughfare of the best placemark for ``coordinate``."""
        validate_coordinate(coordinate)
        _LOGGER.debug("Street lookup started at %s", describe_coordinate(coordinate))
        placemarks = await self._reverse_geocode(coordinate)
        street = self._street_from_placemarks(placemarks)
        _LOGGER.debug("Street lookup completed at %s", describe_coordinate(coordinate))
        return street

    def _street_from_placemarks(self, placemarks: list[Placemark]) -> str:
        if not placemarks:
            raise StreetNotFoundError(
                "Geocoding returned no placemarks.",
                user_message="Could not determine street name from location.",
            )
        thoroughfare = placemarks[0].thoroughfare
        if thoroughfare is None or not thoroughfare.strip():
            raise StreetNotFoundError(
                "Top placemark has no thoroughfare.",
                user_message="Could not determine street name from location.",
            )
        return thoroughfare.strip()

    @abstractmethod
    async def _reverse_geocode(self, coordinate: Coordinate) -> list[Placemark]:
        """Return candidate placemarks, best first.

        Provider failures must surface as GeocodingProviderError.
        """


class NominatimStreetResolver(HttpEndpoint, StreetResolver):
    """Resolve streets with the OpenStreetMap Nominatim reverse endpoint."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        *,
        base_url: str | None = None,
        user_agent: str | None = None,
        language: str | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
    ) -> None:
        super().__init__(
            session,
            base_url=base_url or NOMINATIM_BASE_URL,
            headers={
                "Accept": "application/json",
                "User-Agent": user_agent or DEFAULT_USER_AGENT,
            },
            timeout=timeout,
            retry_count=retry_count,
        )
        self._language = language or DEFAULT_LANGUAGE

    async def _reverse_geocode(self, coordinate: Coordinate) -> list[Placemark]:
        params = {
            "format": "jsonv2",
            "lat": f"{coordinate.latitude:.7f}",
            "lon": f"{coordinate.longitude:.7f}",
            "zoom": str(NOMINATIM_ZOOM_STREET),
            "addressdetails": "1",
            "accept-language": self._language,
        }
        try:
            data = await self._request_json("GET", NOMINATIM_REVERSE_ENDPOINT, params=params)
        except (NetworkError, ServiceError) as exc:
            raise GeocodingProviderError(
                f"Reverse geocoding failed: {exc}",
                cause=exc,
                user_message="The address lookup service is unavailable. Please try again later.",
            ) from exc
        return self._map_placemarks(data)

    def _map_placemarks(self, data: Any) -> list[Placemark]:
        if not isinstance(data, Mapping):
            raise GeocodingProviderError("Reverse geocoding response must be a JSON object.")
        if "error" in data:
            # Nominatim reports "Unable to geocode" for points far from any feature.
            _LOGGER.debug("Nominatim returned no result: %s", data.get("error"))
            return []
        address = data.get("address")
        if not isinstance(address, Mapping):
            return []
        return [
            Placemark(
                thoroughfare=self._first_text(address, THOROUGHFARE_KEYS),
                sub_thoroughfare=self._first_text(address, ("house_number",)),
                locality=self._first_text(address, ("city", "town", "village")),
                postal_code=self._first_text(address, ("postcode",)),
                country=self._first_text(address, ("country",)),
            )
        ]

    def _first_text(self, address: Mapping[str, Any], keys: tuple[str, ...]) -> str | None:
        for key in keys:
            value = address.get(key)
            if isinstance(value, str) and value.strip():
                return value
        return None
