import asyncio
from collections import Counter

import httpx
import pytest

from memo.modules import fetch
from mock_upstream.main import app as upstream_app

UPSTREAM = "http://upstream"


class CountingFunc:
    """An async key -> value function that records how often each key was computed."""

    def __init__(self, delay: float = 0.0, fail_on=()):
        self.delay = delay
        self.fail_on = set(fail_on)
        self.calls = Counter()

    async def __call__(self, key):
        self.calls[key] += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if key in self.fail_on:
            raise ValueError(f"cannot compute {key}")
        return f"value of {key}"


@pytest.fixture
def counting():
    return CountingFunc()


@pytest.fixture
def slow_counting():
    return CountingFunc(delay=0.1)


@pytest.fixture
def upstream(monkeypatch):
    """Routes every httpx.AsyncClient made by the fetcher to the in-process mock upstream."""
    upstream_app.state.hits.clear()
    real_client = httpx.AsyncClient
    transport = httpx.ASGITransport(app=upstream_app)

    def client_factory(*args, **kwargs):
        return real_client(*args, transport=transport, **kwargs)

    monkeypatch.setattr(fetch.httpx, "AsyncClient", client_factory)
    return upstream_app
