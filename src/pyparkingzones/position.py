"""Position providers."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Protocol

from .exceptions import (
    PositioningPermissionDeniedError,
    PositioningUnavailableError,
    PositioningUndeterminedError,
    PositionUnobtainableError,
)
from .models import AuthorizationStatus, Coordinate
from .util import describe_coordinate, validate_coordinate

_LOGGER = logging.getLogger(__name__)


class PositionProvider(ABC):
    """Base class for sources of the current position.

    Providers never prompt for permission; they only report the authorization
    state and refuse to produce a fix without it.
    """

    @abstractmethod
    def services_enabled(self) -> bool:
        """Return whether positioning is enabled at the platform level."""

    @abstractmethod
    def authorization_status(self) -> AuthorizationStatus:
        """Return the current positioning authorization."""

    @abstractmethod
    async def current_position(self) -> Coordinate:
        """Return a single position fix."""

    def _ensure_authorized(self) -> None:
        if not self.services_enabled():
            raise PositioningUnavailableError(
                "Positioning services are disabled.",
                user_message="Location services are disabled.",
            )
        status = self.authorization_status()
        if status in (AuthorizationStatus.DENIED, AuthorizationStatus.RESTRICTED):
            raise PositioningPermissionDeniedError(
                f"Positioning authorization is {status.value}.",
                user_message="Location permission denied.",
            )
        if status is AuthorizationStatus.NOT_DETERMINED:
            raise PositioningUndeterminedError(
                "Positioning authorization has not been requested yet.",
                user_message="Allow location access to find your parking zone.",
            )


class StaticPositionProvider(PositionProvider):
    """Provider that always reports the same coordinate."""

    def __init__(
        self,
        coordinate: Coordinate,
        *,
        status: AuthorizationStatus = AuthorizationStatus.AUTHORIZED_WHEN_IN_USE,
        services_enabled: bool = True,
    ) -> None:
        self._coordinate = validate_coordinate(coordinate)
        self._status = status
        self._services_enabled = services_enabled

    def services_enabled(self) -> bool:
        return self._services_enabled

    def authorization_status(self) -> AuthorizationStatus:
        return self._status

    async def current_position(self) -> Coordinate:
        self._ensure_authorized()
        return self._coordinate


class PlatformLocator(Protocol):
    """Single-shot, callback based positioning API of the host platform."""

    def services_enabled(self) -> bool: ...

    def authorization_status(self) -> AuthorizationStatus: ...

    def request_location(
        self,
        on_fix: Callable[[Coordinate], None],
        on_error: Callable[[Exception], None],
    ) -> None: ...

    def cancel_request(self) -> None: ...


class LocatorPositionProvider(PositionProvider):
    """Adapt a callback based locator into an awaitable position fix."""

    def __init__(self, locator: PlatformLocator) -> None:
        self._locator = locator

    def services_enabled(self) -> bool:
        return self._locator.services_enabled()

    def authorization_status(self) -> AuthorizationStatus:
        return self._locator.authorization_status()

    async def current_position(self) -> Coordinate:
        self._ensure_authorized()
        loop = asyncio.get_running_loop()
        future: asyncio.Future[Coordinate] = loop.create_future()

        def _settle_fix(coordinate: Coordinate) -> None:
            if future.done():
                _LOGGER.debug("Ignoring position fix for settled request")
                return
            future.set_result(coordinate)

        def _settle_error(error: Exception) -> None:
            if future.done():
                _LOGGER.debug("Ignoring position error for settled request: %s", error)
                return
            exc = PositionUnobtainableError(
                "Position fix could not be obtained.",
                user_message="Your location could not be determined.",
            )
            exc.__cause__ = error
            future.set_exception(exc)

        # The platform may call back from any thread, possibly more than once.
        def _dispatch(callback: Callable[..., None], value: object) -> None:
            try:
                loop.call_soon_threadsafe(callback, value)
            except RuntimeError:
                # The loop that awaited this request is already closed.
                _LOGGER.debug("Dropping position callback for closed event loop")

        def on_fix(coordinate: Coordinate) -> None:
            _dispatch(_settle_fix, coordinate)

        def on_error(error: Exception) -> None:
            _dispatch(_settle_error, error)

        _LOGGER.debug("Position request started")
        self._locator.request_location(on_fix, on_error)
        try:
            coordinate = await future
        except asyncio.CancelledError:
            _LOGGER.debug("Position request cancelled")
            if not future.done() or future.cancelled():
                self._locator.cancel_request()
            raise
        coordinate = validate_coordinate(coordinate)
        _LOGGER.debug("Position request completed at %s", describe_coordinate(coordinate))
        return coordinate
