import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Hashable, Optional, Set

from memo.exceptions import (
    ComputationAbandonedError,
    EntryAlreadySealedError,
    EntryNotReadyError,
)

logger = logging.getLogger(__name__)

# The function to memoize: key -> awaitable value. Failures are raised.
Func = Callable[[Hashable], Awaitable[Any]]


class Entry:
    """
    Memoized state for one key.

    An entry starts pending and is sealed exactly once with either a value or
    an error. Sealing fires the ready event; after that the outcome never
    changes and any number of tasks may read it.
    """

    def __init__(self, key: Hashable):
        self.key = key
        self.value: Any = None
        self.error: Optional[BaseException] = None
        self._traceback = None
        self._ready = asyncio.Event()

    @property
    def ready(self) -> bool:
        return self._ready.is_set()

    def seal(self, value: Any = None, error: Optional[BaseException] = None):
        if self._ready.is_set():
            raise EntryAlreadySealedError(self.key)
        self.value = value
        self.error = error
        if error is not None:
            self._traceback = error.__traceback__
        self._ready.set()

    async def wait(self):
        await self._ready.wait()

    def result(self) -> Any:
        if not self._ready.is_set():
            raise EntryNotReadyError(self.key)
        if self.error is not None:
            # Restart from the sealed traceback so repeated raises of the
            # shared exception do not accumulate callers' frames.
            raise self.error.with_traceback(self._traceback)
        return self.value

    async def call(self, f: Func):
        """
        Evaluates f(key) and seals the entry with the outcome.

        Exceptions raised by f are sealed as the entry's error. If the call is
        torn down by cancellation the entry is sealed with
        ComputationAbandonedError so waiters wake up, and the cancellation
        propagates to the caller.
        """
        try:
            value = await f(self.key)
        except Exception as exc:
            logger.warning(f"Caching failure for key {self.key!r}: {exc!r}")
            self.seal(error=exc)
        except BaseException:
            logger.warning(f"Computation for key {self.key!r} was abandoned")
            self.seal(error=ComputationAbandonedError(self.key))
            raise
        else:
            self.seal(value=value)


class Memo:
    """
    Concurrency-safe memoization of an async function.

    Requests for different keys proceed in parallel. Concurrent requests for
    the same key wait for the first one to finish, so f runs at most once per
    key. Failures are memoized like successes and are never retried.

    The computation runs in its own task, so cancelling any caller, the first
    one included, only abandons that caller's wait.
    """

    def __init__(self, f: Func):
        self._f = f
        self._entries: Dict[Hashable, Entry] = {}
        self._lock = asyncio.Lock()  # guards _entries
        self._tasks: Set[asyncio.Task] = set()

    async def get(self, key: Hashable) -> Any:
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                # First request for this key: start the computation.
                logger.debug(f"Computing value for key {key!r}")
                entry = Entry(key)
                self._entries[key] = entry
                task = asyncio.create_task(entry.call(self._f))
                self._tasks.add(task)
                task.add_done_callback(self._tasks.discard)

        await entry.wait()
        return entry.result()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key) -> bool:
        return key in self._entries
