from __future__ import annotations

import asyncio
import threading
from collections.abc import Callable

import pytest

from pyparkingzones.exceptions import (
    PositioningPermissionDeniedError,
    PositioningUnavailableError,
    PositioningUndeterminedError,
    PositionUnobtainableError,
    ValidationError,
)
from pyparkingzones.models import AuthorizationStatus, Coordinate
from pyparkingzones.position import LocatorPositionProvider, StaticPositionProvider


class _FakeLocator:
    def __init__(
        self,
        *,
        enabled: bool = True,
        status: AuthorizationStatus = AuthorizationStatus.AUTHORIZED_WHEN_IN_USE,
    ) -> None:
        self.enabled = enabled
        self.status = status
        self.requests = 0
        self.cancelled = 0
        self.on_fix: Callable[[Coordinate], None] | None = None
        self.on_error: Callable[[Exception], None] | None = None

    def services_enabled(self) -> bool:
        return self.enabled

    def authorization_status(self) -> AuthorizationStatus:
        return self.status

    def request_location(self, on_fix, on_error) -> None:
        self.requests += 1
        self.on_fix = on_fix
        self.on_error = on_error

    def cancel_request(self) -> None:
        self.cancelled += 1


async def _wait_for_request(locator: _FakeLocator) -> None:
    while locator.on_fix is None:
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_static_provider_returns_coordinate(warsaw_center: Coordinate) -> None:
    provider = StaticPositionProvider(warsaw_center)
    assert await provider.current_position() == warsaw_center


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "error"),
    [
        (AuthorizationStatus.DENIED, PositioningPermissionDeniedError),
        (AuthorizationStatus.RESTRICTED, PositioningPermissionDeniedError),
        (AuthorizationStatus.NOT_DETERMINED, PositioningUndeterminedError),
    ],
)
async def test_static_provider_checks_authorization(
    warsaw_center: Coordinate,
    status: AuthorizationStatus,
    error: type[Exception],
) -> None:
    provider = StaticPositionProvider(warsaw_center, status=status)
    with pytest.raises(error):
        await provider.current_position()


@pytest.mark.asyncio
async def test_disabled_services_take_precedence(warsaw_center: Coordinate) -> None:
    provider = StaticPositionProvider(
        warsaw_center,
        status=AuthorizationStatus.DENIED,
        services_enabled=False,
    )
    with pytest.raises(PositioningUnavailableError):
        await provider.current_position()


def test_static_provider_validates_coordinate() -> None:
    with pytest.raises(ValidationError):
        StaticPositionProvider(Coordinate(0.0, 200.0))


def test_authorization_status_is_authorized() -> None:
    assert AuthorizationStatus.AUTHORIZED_ALWAYS.is_authorized
    assert AuthorizationStatus.AUTHORIZED_WHEN_IN_USE.is_authorized
    assert not AuthorizationStatus.DENIED.is_authorized


@pytest.mark.asyncio
async def test_locator_provider_resolves_fix(warsaw_center: Coordinate) -> None:
    locator = _FakeLocator()
    provider = LocatorPositionProvider(locator)
    task = asyncio.create_task(provider.current_position())
    await _wait_for_request(locator)
    locator.on_fix(warsaw_center)
    assert await task == warsaw_center
    assert locator.requests == 1
    assert locator.cancelled == 0


@pytest.mark.asyncio
async def test_locator_provider_settles_once(warsaw_center: Coordinate) -> None:
    locator = _FakeLocator()
    provider = LocatorPositionProvider(locator)
    task = asyncio.create_task(provider.current_position())
    await _wait_for_request(locator)
    locator.on_fix(warsaw_center)
    locator.on_fix(Coordinate(50.0614, 19.9372))
    locator.on_error(RuntimeError("late failure"))
    assert await task == warsaw_center
    await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_locator_provider_error_is_unobtainable() -> None:
    locator = _FakeLocator()
    provider = LocatorPositionProvider(locator)
    task = asyncio.create_task(provider.current_position())
    await _wait_for_request(locator)
    cause = RuntimeError("no signal")
    locator.on_error(cause)
    with pytest.raises(PositionUnobtainableError) as excinfo:
        await task
    assert excinfo.value.__cause__ is cause


@pytest.mark.asyncio
async def test_locator_provider_accepts_callback_from_thread(warsaw_center: Coordinate) -> None:
    locator = _FakeLocator()
    provider = LocatorPositionProvider(locator)
    task = asyncio.create_task(provider.current_position())
    await _wait_for_request(locator)
    thread = threading.Thread(target=locator.on_fix, args=(warsaw_center,))
    thread.start()
    assert await task == warsaw_center
    thread.join()


@pytest.mark.asyncio
async def test_locator_provider_cancellation_cancels_request(warsaw_center: Coordinate) -> None:
    locator = _FakeLocator()
    provider = LocatorPositionProvider(locator)
    task = asyncio.create_task(provider.current_position())
    await _wait_for_request(locator)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert locator.cancelled == 1

    # A fix arriving after cancellation is dropped.
    locator.on_fix(warsaw_center)
    await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_locator_provider_checks_authorization_before_request() -> None:
    locator = _FakeLocator(status=AuthorizationStatus.NOT_DETERMINED)
    provider = LocatorPositionProvider(locator)
    with pytest.raises(PositioningUndeterminedError):
        await provider.current_position()
    assert locator.requests == 0


@pytest.mark.asyncio
async def test_locator_provider_settled_request_is_not_cancelled(
    warsaw_center: Coordinate,
) -> None:
    locator = _FakeLocator()
    provider = LocatorPositionProvider(locator)
    task = asyncio.create_task(provider.current_position())
    await _wait_for_request(locator)
    locator.on_fix(warsaw_center)
    # Let the fix settle the request before the task resumes.
    await asyncio.sleep(0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert locator.cancelled == 0


def test_locator_provider_drops_callback_after_loop_closed(warsaw_center: Coordinate) -> None:
    locator = _FakeLocator()
    provider = LocatorPositionProvider(locator)

    async def _abandon() -> None:
        task = asyncio.create_task(provider.current_position())
        await _wait_for_request(locator)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(_abandon())
    assert locator.cancelled == 1

    locator.on_fix(warsaw_center)
    locator.on_error(RuntimeError("late failure"))
