"""Shared aiohttp plumbing for the HTTP-backed adapters."""

from __future__ import annotations

from typing import Any

import aiohttp

from .const import DEFAULT_TIMEOUT
from .exceptions import NetworkError, ServiceError, ValidationError


class HttpEndpoint:
    """Base class for adapters that talk JSON over HTTP."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        *,
        base_url: str,
        headers: dict[str, str] | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
    ) -> None:
        if session is None:
            raise ValidationError("Session is required.")
        self._session = session
        self._base_url = self._normalize_base_url(base_url)
        self._headers = dict(headers or {})
        self._timeout = timeout or DEFAULT_TIMEOUT
        self._retry_count = max(0, retry_count)

    @property
    def base_url(self) -> str:
        return self._base_url

    def _build_url(self, path: str) -> str:
        if not isinstance(path, str) or not path:
            raise ValidationError("Path must be a non-empty string.")
        if path.startswith("http://") or path.startswith("https://"):
            raise ValidationError("Use relative paths when building requests.")
        normalized_path = path if path.startswith("/") else f"/{path}"
        return f"{self._base_url}{normalized_path}"

    async def _request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        url = self._build_url(path)
        retries = self._retry_count if method.upper() == "GET" else 0
        attempts = retries + 1
        timeout = kwargs.pop("timeout", None) or self._timeout
        headers = {**self._headers, **kwargs.pop("headers", {})}
        last_error: Exception | None = None
        for attempt in range(attempts):
            try:
                async with self._session.request(
                    method,
                    url,
                    headers=headers,
                    timeout=timeout,
                    ssl=True,
                    **kwargs,
                ) as response:
                    self._raise_for_status(response)
                    try:
                        return await response.json()
                    except (aiohttp.ContentTypeError, ValueError) as exc:
                        raise ServiceError(
                            "Response did not contain valid JSON.",
                            status=response.status,
                        ) from exc
            except (aiohttp.ClientError, TimeoutError) as exc:
                last_error = exc
                if attempt >= attempts - 1:
                    raise NetworkError("Network request failed.") from exc
        raise NetworkError("Network request failed.") from last_error

    def _raise_for_status(self, response: aiohttp.ClientResponse) -> None:
        if 200 <= response.status < 300:
            return
        raise ServiceError(
            f"Request failed with status {response.status}.",
            status=response.status,
        )

    def _normalize_base_url(self, base_url: str) -> str:
        if not isinstance(base_url, str) or not base_url.strip():
            raise ValidationError("base_url must be a non-empty string.")
        return base_url.strip().rstrip("/")
