from __future__ import annotations

import asyncio

import httpx
import pytest

from fetchbench.fetch.http import HttpFetcher
from fetchbench.fetch.types import FetchFailure

BASE = "https://api.example.test"


def _handler(request: httpx.Request) -> httpx.Response:
    match request.url.path:
        case "/users/1":
            return httpx.Response(200, json={"id": 1, "name": "Leanne"})
        case "/posts":
            return httpx.Response(200, json=[{"userId": request.url.params["userId"]}])
        case "/broken":
            return httpx.Response(500)
        case "/html":
            return httpx.Response(200, text="<html></html>")
        case "/down":
            raise httpx.ConnectError("connection refused", request=request)
        case _:
            return httpx.Response(404)


def _fetcher() -> HttpFetcher:
    return HttpFetcher(timeout=1.0, transport=httpx.MockTransport(_handler))


async def _afetch(fetcher: HttpFetcher, locator: str):
    try:
        return await fetcher.afetch(locator)
    finally:
        await fetcher.aclose()


def test_fetch_decodes_json() -> None:
    with _fetcher() as fetcher:
        assert fetcher.fetch(f"{BASE}/users/1") == {"id": 1, "name": "Leanne"}
        assert fetcher.fetch(f"{BASE}/posts?userId=2") == [{"userId": "2"}]


def test_afetch_decodes_json() -> None:
    fetcher = _fetcher()
    assert asyncio.run(_afetch(fetcher, f"{BASE}/users/1")) == {"id": 1, "name": "Leanne"}


@pytest.mark.parametrize(
    "path, reason",
    [
        ("/broken", "HTTP 500"),
        ("/nope", "HTTP 404"),
        ("/html", "not valid JSON"),
        ("/down", "ConnectError"),
    ],
)
def test_fetch_failures_are_wrapped(path: str, reason: str) -> None:
    with _fetcher() as fetcher:
        with pytest.raises(FetchFailure) as e:
            fetcher.fetch(f"{BASE}{path}")

    assert reason in e.value.reason
    assert e.value.locator == f"{BASE}{path}"
    assert e.value.name is None


@pytest.mark.parametrize("path", ["/broken", "/html", "/down"])
def test_afetch_failures_are_wrapped(path: str) -> None:
    fetcher = _fetcher()
    with pytest.raises(FetchFailure):
        asyncio.run(_afetch(fetcher, f"{BASE}{path}"))


def test_url_without_scheme_is_a_fetch_failure() -> None:
    # The default transport rejects it before any connection is attempted.
    with HttpFetcher(timeout=1.0) as fetcher:
        with pytest.raises(FetchFailure) as e:
            fetcher.fetch("not a url")

    assert "UnsupportedProtocol" in e.value.reason
    assert isinstance(e.value.__cause__, httpx.UnsupportedProtocol)


def test_aclose_allows_a_new_event_loop() -> None:
    fetcher = _fetcher()
    asyncio.run(_afetch(fetcher, f"{BASE}/users/1"))
    assert asyncio.run(_afetch(fetcher, f"{BASE}/users/1")) == {"id": 1, "name": "Leanne"}


def test_failure_message_uses_name_when_known() -> None:
    exc = FetchFailure(f"{BASE}/x", "HTTP 500", name="user_1")
    assert str(exc) == "Fetch failed for user_1: HTTP 500"
