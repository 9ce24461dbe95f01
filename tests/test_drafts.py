import asyncio
import time

import pytest

from conftest import CountingFunc
from memo.services.drafts import DuplicatingMemo, SerialMemo, UnsafeMemo


@pytest.mark.asyncio
@pytest.mark.parametrize("memo_class", [UnsafeMemo, SerialMemo, DuplicatingMemo])
async def test_sequential_requests_hit_cache(memo_class):
    f = CountingFunc(fail_on={"bad"})
    memo = memo_class(f)
    assert await memo.get("a") == "value of a"
    assert await memo.get("a") == "value of a"
    with pytest.raises(ValueError):
        await memo.get("bad")
    with pytest.raises(ValueError):
        await memo.get("bad")
    assert f.calls == {"a": 1, "bad": 1}


@pytest.mark.asyncio
async def test_serial_memo_serializes_distinct_keys():
    f = CountingFunc(delay=0.1)
    memo = SerialMemo(f)
    start = time.monotonic()
    await asyncio.gather(*(memo.get(k) for k in "abc"))
    assert time.monotonic() - start >= 0.28


@pytest.mark.asyncio
async def test_serial_memo_never_duplicates_work():
    f = CountingFunc(delay=0.05)
    memo = SerialMemo(f)
    await asyncio.gather(*(memo.get("a") for _ in range(10)))
    assert f.calls["a"] == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("memo_class", [UnsafeMemo, DuplicatingMemo])
async def test_concurrent_misses_duplicate_work(memo_class):
    f = CountingFunc(delay=0.05)
    memo = memo_class(f)
    start = time.monotonic()
    results = await asyncio.gather(*(memo.get("a") for _ in range(10)))
    elapsed = time.monotonic() - start

    assert results == ["value of a"] * 10
    assert f.calls["a"] == 10
    # The duplicate calls still overlap rather than queueing
    assert elapsed < 0.3
