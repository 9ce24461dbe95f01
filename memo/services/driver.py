import asyncio
import logging
import time
from typing import Any, Iterable, Iterator, List, Protocol, Sequence

from memo.models import FetchReport

logger = logging.getLogger(__name__)

DEFAULT_URLS = [
    "https://go.dev",
    "https://pkg.go.dev",
    "https://go.dev/play/",
    "http://gopl.io",
]


class Getter(Protocol):
    async def get(self, key: Any) -> Any: ...


def incoming_urls(urls: Sequence[str] = DEFAULT_URLS, repeat: int = 2) -> Iterator[str]:
    """Yields the URLs `repeat` times over, so every one of them is requested again."""
    for _ in range(repeat):
        yield from urls


async def _timed_get(memo: Getter, url: str) -> FetchReport:
    start = time.monotonic()
    try:
        value = await memo.get(url)
    except Exception as e:
        elapsed = time.monotonic() - start
        logger.error(f"{url}, {elapsed:.6f}s, error: {e}")
        return FetchReport(url=url, elapsed=elapsed, error=str(e) or type(e).__name__)
    elapsed = time.monotonic() - start
    logger.info(f"{url}, {elapsed:.6f}s, {len(value)} bytes")
    return FetchReport(url=url, elapsed=elapsed, size=len(value))


async def sequential(memo: Getter, urls: Iterable[str]) -> List[FetchReport]:
    """Requests every URL in turn, waiting for each before the next."""
    reports = []
    for url in urls:
        reports.append(await _timed_get(memo, url))
    return reports


async def concurrent(memo: Getter, urls: Iterable[str]) -> List[FetchReport]:
    """Requests all URLs at once. Reports come back in input order."""
    return list(await asyncio.gather(*(_timed_get(memo, url) for url in urls)))
