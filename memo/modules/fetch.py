import httpx
from typing import Optional

from memo.config import Settings, load_settings


async def http_get_body(url: str, settings: Optional[Settings] = None) -> bytes:
    """
    Fetches a URL and returns the response body.

    This is the slow, fallible kind of function Memo is meant to wrap:
    non-2xx responses raise httpx.HTTPStatusError and transport failures
    raise httpx.TransportError subclasses, both unchanged.
    """
    settings = settings or load_settings()
    async with httpx.AsyncClient(
        timeout=settings.http_timeout,
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    ) as client:
        response = await client.get(url)
        response.raise_for_status()
        return response.content
