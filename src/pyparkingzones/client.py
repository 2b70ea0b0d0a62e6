"""Client facade wiring the default adapters together."""

from __future__ import annotations

from pathlib import Path

import aiohttp

from .catalog import FileZoneCatalog, RemoteZoneCatalog, ZoneCatalog
from .const import DEFAULT_TIMEOUT
from .geocoding import NominatimStreetResolver
from .models import ResolutionResult
from .position import PositionProvider
from .service import ZoneResolutionService
from .util import filter_cities


class Client:
    """Facade for city discovery and zone resolution."""

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        *,
        geocoder_url: str | None = None,
        catalog_url: str | None = None,
        catalog_path: str | Path | None = None,
        user_agent: str | None = None,
        language: str | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
    ) -> None:
        self._session = session
        self._owns_session = session is None
        self._geocoder_url = geocoder_url
        self._catalog_url = catalog_url
        self._catalog_path = catalog_path
        self._user_agent = user_agent
        self._language = language
        self._timeout = timeout or DEFAULT_TIMEOUT
        self._retry_count = max(0, retry_count)

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def list_cities(self, query: str | None = None) -> list[str]:
        cities = await self._build_catalog().list_cities()
        return filter_cities(cities, query)

    async def build_service(self, position_provider: PositionProvider) -> ZoneResolutionService:
        session = self._ensure_session()
        street_resolver = NominatimStreetResolver(
            session,
            base_url=self._geocoder_url,
            user_agent=self._user_agent,
            language=self._language,
            timeout=self._timeout,
            retry_count=self._retry_count,
        )
        return ZoneResolutionService(position_provider, street_resolver, self._build_catalog())

    async def resolve(self, city: str, position_provider: PositionProvider) -> ResolutionResult:
        service = await self.build_service(position_provider)
        return await service.resolve(city)

    def _build_catalog(self) -> ZoneCatalog:
        if self._catalog_url is not None:
            return RemoteZoneCatalog(
                self._ensure_session(),
                base_url=self._catalog_url,
                timeout=self._timeout,
                retry_count=self._retry_count,
            )
        return FileZoneCatalog(self._catalog_path)

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session
