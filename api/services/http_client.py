"""Shared HTTP client utilities: one reusable httpx client per process."""

import httpx

from api.config import get_settings

# Module-level shared client (created lazily, lives for the process lifetime)
_client: httpx.AsyncClient | None = None


def get_shared_client() -> httpx.AsyncClient:
    """Return a shared httpx.AsyncClient, creating it on first call."""
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(timeout=get_settings().asana_timeout)
    return _client


async def close_shared_client() -> None:
    """Close the shared client, if one was created."""
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
    _client = None


def asana_headers() -> dict[str, str]:
    """Build standard Asana API request headers.

    Includes the Authorization header only when a token is configured.
    """
    settings = get_settings()
    headers: dict[str, str] = {
        "Accept": "application/json",
        "Content-Type": "application/json",
    }
    if settings.asana_access_token:
        headers["Authorization"] = f"Bearer {settings.asana_access_token}"
    return headers
