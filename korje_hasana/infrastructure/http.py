"""
HTTP client factory and JSON request helpers for the row-store backends.

Provides a single place that builds the ``httpx.AsyncClient`` (timeouts,
redirects, headers) and maps everything that can go wrong on the wire onto
the error taxonomy in ``korje_hasana.errors``:

- no usable response, redirect loops -> NetworkFailure
- non-2xx responses                   -> BackendRejection
- bodies that are not JSON            -> MalformedResponse

Reads get one bounded retry on NetworkFailure using tenacity. Writes are sent
exactly once; resubmitting is the caller's decision.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from korje_hasana.config import Settings
from korje_hasana.errors import BackendRejection, MalformedResponse, NetworkFailure
from korje_hasana.utils.logging import get_logger

log = get_logger(__name__)

USER_AGENT = "korje-hasana-client"
_BODY_SNIPPET = 200


def build_async_client(
    settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
) -> httpx.AsyncClient:
    """
    Create the shared async HTTP client.

    Parameters
    ----------
    settings : Settings
        Supplies the per-request timeout.
    transport : httpx.AsyncBaseTransport, optional
        Override the transport (tests pass an ``httpx.MockTransport``).

    Notes
    -----
    Apps Script web apps answer with a 302 to a googleusercontent.com URL, so
    redirects are followed.
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout_seconds),
        follow_redirects=True,
        headers={"Accept": "application/json", "User-Agent": USER_AGENT},
        transport=transport,
    )


async def request_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    params: Optional[Mapping[str, str]] = None,
    json: Any = None,
) -> Any:
    """
    Send one request and decode the JSON body.

    Raises
    ------
    NetworkFailure
        No response was received.
    BackendRejection
        The response status was not 2xx.
    MalformedResponse
        The body could not be decoded as JSON.
    """
    try:
        response = await client.request(method, url, params=params, json=json)
    except httpx.TimeoutException as exc:
        raise NetworkFailure(f"{method} {url} timed out") from exc
    except httpx.TransportError as exc:
        raise NetworkFailure(f"{method} {url} failed: {exc}") from exc
    except httpx.RequestError as exc:
        # Redirect loops and undecodable bodies are not TransportErrors.
        raise NetworkFailure(f"{method} {url} failed: {exc}") from exc

    if not response.is_success:
        raise BackendRejection(
            f"{method} {url} returned HTTP {response.status_code}: "
            f"{response.text[:_BODY_SNIPPET]}",
            status_code=response.status_code,
        )

    try:
        return response.json()
    except ValueError as exc:
        raise MalformedResponse(
            f"{method} {url} returned a non-JSON body: {response.text[:_BODY_SNIPPET]!r}"
        ) from exc


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    params: Optional[Mapping[str, str]] = None,
    attempts: int = 2,
) -> Any:
    """
    GET and decode JSON, retrying transport failures up to ``attempts`` times in total.

    Rejections and malformed bodies are not retried; they will not fix themselves.
    """
    retrying = AsyncRetrying(
        stop=stop_after_attempt(max(1, attempts)),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(NetworkFailure),
        before_sleep=lambda state: log.warning(
            "Read failed, retrying",
            extra={"url": url, "attempt": state.attempt_number},
        ),
        reraise=True,
    )
    return await retrying(request_json, client, "GET", url, params=params)


async def post_json(client: httpx.AsyncClient, url: str, payload: Any, **kwargs: Any) -> Any:
    """POST a JSON payload once and decode the JSON reply."""
    return await request_json(client, "POST", url, json=payload, **kwargs)


__all__ = ["USER_AGENT", "build_async_client", "get_json", "post_json", "request_json"]
