"""Async HTTP client factory shared by outbound API clients."""
from typing import Any

import httpx

DEFAULT_TIMEOUT_SECONDS = 60.0


def create_http_client(
    base_url: str = "",
    *,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an async HTTP client with base URL, default headers and timeout.

    Transport-level retries are disabled; every request is attempted once.
    """
    if transport is None:
        transport = httpx.AsyncHTTPTransport(retries=0)
    return httpx.AsyncClient(
        base_url=base_url.rstrip("/"),
        headers=headers or {},
        timeout=httpx.Timeout(timeout),
        transport=transport,
    )


def response_json(resp: httpx.Response) -> Any:
    """Decode a JSON body, returning None when the body is empty or not JSON."""
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return None
