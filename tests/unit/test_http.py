from __future__ import annotations

import httpx
import pytest

from korje_hasana.errors import BackendRejection, MalformedResponse, NetworkFailure
from korje_hasana.infrastructure.http import build_async_client, get_json, post_json

URL = "https://store.test/rows"


def _client(test_settings, handler) -> httpx.AsyncClient:
    return build_async_client(test_settings, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_get_json_retries_one_transport_failure(test_settings):
    calls = []

    def flaky(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) == 1:
            raise httpx.ReadTimeout("slow sheet", request=request)
        return httpx.Response(200, json=[{"amount": "1"}])

    async with _client(test_settings, flaky) as client:
        rows = await get_json(client, URL, params={"sheet": "donations"}, attempts=2)

    assert rows == [{"amount": "1"}]
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_get_json_gives_up_after_bounded_attempts(test_settings):
    calls = []

    def down(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("unreachable", request=request)

    async with _client(test_settings, down) as client:
        with pytest.raises(NetworkFailure):
            await get_json(client, URL, attempts=2)

    assert len(calls) == 2


@pytest.mark.asyncio
async def test_rejection_is_not_retried(test_settings):
    calls = []

    def forbidden(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(403, json={"error": "bad api key"})

    async with _client(test_settings, forbidden) as client:
        with pytest.raises(BackendRejection) as excinfo:
            await get_json(client, URL, attempts=3)

    assert excinfo.value.status_code == 403
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_post_json_reports_malformed_body(test_settings):
    async with _client(test_settings, lambda r: httpx.Response(200, text="OK")) as client:
        with pytest.raises(MalformedResponse):
            await post_json(client, URL, {"data": [{}]})


@pytest.mark.asyncio
async def test_client_follows_redirects(test_settings):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "script.test":
            return httpx.Response(302, headers={"Location": "https://echo.test/out"})
        return httpx.Response(200, json={"status": "success"})

    async with _client(test_settings, handler) as client:
        body = await get_json(client, "https://script.test/exec")

    assert body == {"status": "success"}


@pytest.mark.asyncio
async def test_redirect_loop_is_a_network_failure(test_settings):
    def loop(request: httpx.Request) -> httpx.Response:
        return httpx.Response(302, headers={"Location": str(request.url)})

    async with _client(test_settings, loop) as client:
        with pytest.raises(NetworkFailure, match="failed"):
            await get_json(client, URL, attempts=1)
