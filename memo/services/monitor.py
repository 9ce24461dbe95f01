import asyncio
import logging
from typing import Any, Dict, Hashable, Optional, Set

from memo.exceptions import MemoClosedError
from memo.services.cache import Entry, Func

logger = logging.getLogger(__name__)


class _Request:
    """A message asking the monitor to apply f to key."""

    def __init__(self, key: Hashable, response: asyncio.Future):
        self.key = key
        self.response = response  # resolved with the sealed Entry


class MonitorMemo:
    """
    Memoization of an async function whose cache is confined to a single
    monitor task.

    Callers never touch the cache. They put a request on the inbox and await
    their own response future. The monitor starts one computation per new key
    and one delivery per request, so it never blocks on a slow key.

    Clients must call close() (or use ``async with``). Requests accepted before
    close() are still served, and close() waits for them; get() after close()
    raises MemoClosedError.
    """

    def __init__(self, f: Func):
        self._f = f
        self._requests: asyncio.Queue = asyncio.Queue()
        self._server: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False
        self._closing: Optional[asyncio.Future] = None

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self):
        if self._closed:
            raise MemoClosedError()
        if self._server is None:
            self._server = asyncio.create_task(self._serve())

    async def get(self, key: Hashable) -> Any:
        self.start()
        response = asyncio.get_running_loop().create_future()
        self._requests.put_nowait(_Request(key, response))
        entry: Entry = await response
        return entry.result()

    async def close(self):
        # Every caller of close() waits for the same drain.
        if self._closing is None:
            self._closed = True
            self._closing = asyncio.ensure_future(self._drain())
        await asyncio.shield(self._closing)

    async def _drain(self):
        if self._server is None:
            return
        self._requests.put_nowait(None)
        await self._server
        if self._tasks:
            await asyncio.wait(set(self._tasks))

    async def __aenter__(self):
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def _serve(self):
        entries: Dict[Hashable, Entry] = {}
        while True:
            request = await self._requests.get()
            if request is None:
                break
            entry = entries.get(request.key)
            if entry is None:
                # First request for this key.
                logger.debug(f"Computing value for key {request.key!r}")
                entry = Entry(request.key)
                entries[request.key] = entry
                self._spawn(entry.call(self._f))
            self._spawn(self._deliver(entry, request.response))
        logger.debug(f"Monitor stopped holding {len(entries)} entries")

    def _spawn(self, coro):
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    @staticmethod
    async def _deliver(entry: Entry, response: asyncio.Future):
        await entry.wait()
        # The caller may have been cancelled while waiting.
        if not response.done():
            response.set_result(entry)
