"""
Earlier designs of the memoizing cache, kept for comparison with Memo and
MonitorMemo. Each one gets something wrong:

- UnsafeMemo: no synchronization at all. Concurrent misses for a key all call f.
- SerialMemo: safe, but holds one lock across f, so unrelated keys serialize.
- DuplicatingMemo: releases the lock during f, so keys run in parallel, but
  concurrent misses for the same key still duplicate work.
"""
import asyncio
import logging
from typing import Any, Dict, Hashable, Optional, Tuple

from memo.services.cache import Func

logger = logging.getLogger(__name__)

Result = Tuple[Any, Optional[Exception]]


async def _evaluate(f: Func, key: Hashable) -> Result:
    try:
        return await f(key), None
    except Exception as exc:
        return None, exc


def _unwrap(result: Result) -> Any:
    value, error = result
    if error is not None:
        raise error
    return value


class UnsafeMemo:
    def __init__(self, f: Func):
        self._f = f
        self._cache: Dict[Hashable, Result] = {}

    async def get(self, key: Hashable) -> Any:
        result = self._cache.get(key)
        if result is None:
            result = await _evaluate(self._f, key)
            self._cache[key] = result
        return _unwrap(result)


class SerialMemo:
    def __init__(self, f: Func):
        self._f = f
        self._cache: Dict[Hashable, Result] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: Hashable) -> Any:
        async with self._lock:
            result = self._cache.get(key)
            if result is None:
                result = await _evaluate(self._f, key)
                self._cache[key] = result
        return _unwrap(result)


class DuplicatingMemo:
    def __init__(self, f: Func):
        self._f = f
        self._cache: Dict[Hashable, Result] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: Hashable) -> Any:
        async with self._lock:
            result = self._cache.get(key)
        if result is None:
            result = await _evaluate(self._f, key)
            # Between the two critical sections several tasks may race to
            # compute f(key) and store it. The last one wins.
            async with self._lock:
                if key in self._cache:
                    logger.debug(f"Duplicate computation for key {key!r}")
                self._cache[key] = result
        return _unwrap(result)
