from __future__ import annotations

from typing import Any

import pytest

from pyparkingzones.models import Coordinate, ParkingZone


class FakeResponse:
    def __init__(
        self,
        payload: Any,
        *,
        status: int = 200,
        json_error: Exception | None = None,
    ) -> None:
        self.status = status
        self._payload = payload
        self._json_error = json_error

    async def json(self) -> Any:
        if self._json_error is not None:
            raise self._json_error
        return self._payload


class FakeRequestContext:
    def __init__(self, response: FakeResponse) -> None:
        self._response = response

    async def __aenter__(self) -> FakeResponse:
        return self._response

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        return False


class SequenceSession:
    def __init__(self, responses: list[object]) -> None:
        self._responses = responses
        self.calls: list[dict[str, Any]] = []
        self._index = 0

    def request(self, method: str, url: str, **kwargs: Any) -> FakeRequestContext:
        self.calls.append({"method": method, "url": url, "kwargs": kwargs})
        response = self._responses[self._index]
        self._index += 1
        if isinstance(response, Exception):
            raise response
        return FakeRequestContext(response)


@pytest.fixture
def warsaw_center() -> Coordinate:
    return Coordinate(latitude=52.2319, longitude=21.0187, accuracy=5.0)


@pytest.fixture
def warsaw_zones() -> list[ParkingZone]:
    return [
        ParkingZone(
            name="Zone A",
            streets=("Krakowskie Przedmieście", "Nowy Świat"),
            hourly_rate=3.0,
            daily_rate=20.0,
            description="City center",
        ),
        ParkingZone(
            name="Zone B",
            streets=("Marszałkowska", "Jerozolimskie"),
            hourly_rate=2.0,
            daily_rate=15.0,
            description="Business district",
        ),
    ]
