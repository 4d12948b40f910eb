"""
Shared long-lived httpx.AsyncClient for Sanity query executors.
Paginators built in the same process reuse one connection pool instead of opening a client per page fetch.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx

from docpager.version import __version__
from docpager.config import settings

USER_AGENT = f"docpager/{__version__}"

_http_client: httpx.AsyncClient | None = None


def get_http_client() -> httpx.AsyncClient:
    """Return the shared async HTTP client. Must be initialized via init_http_client() first."""
    if _http_client is None:
        raise RuntimeError("HTTP client not initialized; call init_http_client() or use shared_http_client().")
    return _http_client


def init_http_client(timeout: float | None = None, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """Create and store the shared client. A second call returns the existing one."""
    global _http_client
    if _http_client is not None:
        return _http_client
    _http_client = httpx.AsyncClient(
        timeout=settings.http_timeout_seconds if timeout is None else timeout,
        transport=transport,
        headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
    )
    return _http_client


async def close_http_client() -> None:
    """Close the shared client."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


@asynccontextmanager
async def shared_http_client(
    timeout: float | None = None, transport: httpx.AsyncBaseTransport | None = None
) -> AsyncIterator[httpx.AsyncClient]:
    """Open the shared client for the duration of the block (scripts, tests, app lifespan)."""
    client = init_http_client(timeout=timeout, transport=transport)
    try:
        yield client
    finally:
        await close_http_client()
