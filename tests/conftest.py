"""
Shared fixtures for the playlist service tests.
"""

import json
from pathlib import Path
from typing import Callable

import httpx
import pytest

from shanghai_iptv.catalog import ChannelEntry
from shanghai_iptv.services import CacheStore, SourceResolver, UpstreamFetcher


UPSTREAM_URL = "https://bp-api.bestv.cn/cms/api/live/channels"


class FakeClock:
    """Settable clock for cache freshness tests."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class CountingHandler:
    """MockTransport handler that records requests and replays a fixed response."""

    def __init__(self, status_code: int = 200, content: bytes = b"", exc: Exception | None = None):
        self.status_code = status_code
        self.content = content
        self.exc = exc
        self.requests: list[httpx.Request] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return httpx.Response(self.status_code, content=self.content)


def make_document(channels: list[dict]) -> bytes:
    return json.dumps({"code": 0, "dt": channels}, ensure_ascii=False).encode("utf-8")


@pytest.fixture
def sample_document() -> bytes:
    """Upstream response covering a subset of the catalog plus an unknown channel."""
    return make_document([
        {"id": "2030", "channelUrl": "http://x/dfws.m3u8", "name": "东方卫视"},
        {"id": 21, "channelUrl": "http://x/dycj.m3u8"},
        {"id": "9999", "channelUrl": "http://x/other.m3u8"},
        {"id": "1601", "channelUrl": "http://x/mdy.m3u8"},
    ])


@pytest.fixture
def dfws_entry() -> ChannelEntry:
    return ChannelEntry(
        key="dfws",
        upstream_id="2030",
        display_name="东方卫视",
        tvg_id="东方卫视",
        tvg_name="东方卫视",
        logo_url="https://epg.iill.top/logo/东方卫视4K.png",
        group_title="上海台",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(now=1_000_000.0)


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    return tmp_path / "cache" / "bestv_channels.json"


@pytest.fixture
def cache_store(cache_path: Path, clock: FakeClock) -> CacheStore:
    return CacheStore(cache_path, ttl_seconds=60, clock=clock)


@pytest.fixture
def handler_factory() -> Callable[..., CountingHandler]:
    return CountingHandler


@pytest.fixture
def fetcher_factory() -> Callable[[CountingHandler], UpstreamFetcher]:
    def _factory(handler: CountingHandler) -> UpstreamFetcher:
        return UpstreamFetcher(UPSTREAM_URL, transport=httpx.MockTransport(handler))
    return _factory


@pytest.fixture
def resolver_factory(cache_store, fetcher_factory) -> Callable[[CountingHandler], SourceResolver]:
    def _factory(handler: CountingHandler) -> SourceResolver:
        return SourceResolver(cache_store, fetcher_factory(handler))
    return _factory
