from __future__ import annotations

import logging
from typing import Any

import httpx

from .types import FetchFailure

logger = logging.getLogger(__name__)


class HttpFetcher:
    """Fetch JSON documents over HTTP with httpx.

    The blocking client is shared by every ``fetch`` call. The async client is
    bound to the event loop of the batch that first uses it and must be
    released with ``aclose`` before that loop ends.
    """

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.Client | None = None
        self._async_client: httpx.AsyncClient | None = None

    def __enter__(self) -> HttpFetcher:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def fetch(self, locator: str) -> Any:
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout, transport=self._transport)

        try:
            response = self._client.get(locator)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchFailure(locator, _describe(exc)) from exc

        return _decode(locator, response)

    async def afetch(self, locator: str) -> Any:
        if self._async_client is None:
            self._async_client = httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            )

        try:
            response = await self._async_client.get(locator)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchFailure(locator, _describe(exc)) from exc

        return _decode(locator, response)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    async def aclose(self) -> None:
        if self._async_client is not None:
            await self._async_client.aclose()
            self._async_client = None


def _decode(locator: str, response: httpx.Response) -> Any:
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise FetchFailure(locator, f"HTTP {response.status_code}") from exc

    try:
        payload = response.json()
    except ValueError as exc:
        raise FetchFailure(locator, "response body is not valid JSON") from exc

    logger.debug("decoded %s (%d bytes)", locator, len(response.content))
    return payload


def _describe(exc: Exception) -> str:
    message = str(exc)
    return f"{type(exc).__name__}: {message}" if message else type(exc).__name__
