"""Resolve the current position to a parking zone."""

from __future__ import annotations

import logging

from .catalog import ZoneCatalog
from .exceptions import ValidationError
from .geocoding import StreetResolver
from .models import ResolutionResult, ZoneMatch, ZoneNotFound
from .position import PositionProvider

_LOGGER = logging.getLogger(__name__)


class ZoneResolutionService:
    """Sequence position, street and catalog lookups into one resolution.

    Every call runs all steps again; nothing is kept between calls. Failures of
    the position, street or catalog step are raised unchanged. A street that no
    zone lists is reported as a ZoneNotFound value.
    """

    def __init__(
        self,
        position_provider: PositionProvider,
        street_resolver: StreetResolver,
        zone_catalog: ZoneCatalog,
    ) -> None:
        self._position_provider = position_provider
        self._street_resolver = street_resolver
        self._zone_catalog = zone_catalog

    async def resolve(self, city: str) -> ResolutionResult:
        if not isinstance(city, str) or not city.strip():
            raise ValidationError("city must be a non-empty string.")
        _LOGGER.debug("Zone resolution for %s started", city)
        coordinate = await self._position_provider.current_position()
        street = await self._street_resolver.resolve_street(coordinate)
        zones = await self._zone_catalog.load_zones(city)
        zone = self._zone_catalog.find_zone(street, zones)
        if zone is None:
            _LOGGER.debug("Zone resolution for %s completed without a zone", city)
            return ZoneNotFound(city=city, street=street)
        _LOGGER.debug("Zone resolution for %s completed with %s", city, zone.name)
        return ZoneMatch(zone=zone, street=street, city=city)
