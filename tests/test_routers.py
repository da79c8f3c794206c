"""
HTTP tests for the playlist endpoints.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from shanghai_iptv.dependencies import get_cache_store, get_upstream_fetcher
from shanghai_iptv.main import app


@pytest.fixture
def client_factory(cache_store, fetcher_factory):
    """Build a TestClient whose upstream is served by the given handler."""
    def _factory(handler):
        app.dependency_overrides[get_cache_store] = lambda: cache_store
        app.dependency_overrides[get_upstream_fetcher] = lambda: fetcher_factory(handler)
        return TestClient(app)

    yield _factory
    app.dependency_overrides.clear()


class TestPlaylistEndpoint:
    """Tests for GET /playlist.m3u."""

    def test_playlist_success(self, client_factory, handler_factory, sample_document):
        client = client_factory(handler_factory(content=sample_document))

        response = client.get("/playlist.m3u")

        assert response.status_code == 200
        assert response.headers["content-type"] == "audio/x-mpegurl; charset=utf-8"
        assert response.headers["cache-control"] == "no-cache, must-revalidate"
        assert response.headers["x-playlist-source"] == "upstream"
        lines = response.text.splitlines()
        assert lines[0] == '#EXTM3U x-tvg-url="https://epg.iill.top/e.xml"'
        assert lines[1].endswith(",东方卫视")
        assert lines[2] == "http://x/dfws.m3u8"
        assert lines[4].endswith(",上海第一财经")
        assert lines[5] == "http://x/dycj.m3u8"
        assert lines[7].endswith(",魔都眼")
        assert response.text.count("#EXTINF") == 3
        assert "http://x/other.m3u8" not in response.text

    def test_second_request_served_from_cache(self, client_factory, handler_factory, cache_path, clock, sample_document):
        handler = handler_factory(content=sample_document)
        client = client_factory(handler)

        first = client.get("/playlist.m3u")
        clock.now = cache_path.stat().st_mtime + 30
        second = client.get("/playlist.m3u")

        assert handler.calls == 1
        assert second.headers["x-playlist-source"] == "cache"
        assert second.text == first.text

    def test_upstream_failure_returns_error_playlist(self, client_factory, handler_factory, cache_path):
        client = client_factory(handler_factory(exc=httpx.ConnectTimeout("timed out")))

        response = client.get("/playlist.m3u")

        assert response.status_code == 200
        assert response.headers["content-type"] == "text/plain; charset=utf-8"
        assert response.text == "#EXTM3U\n# Error: 无法获取 Bestv API 数据\n"
        assert "x-playlist-source" not in response.headers
        assert not cache_path.exists()

    def test_malformed_document_returns_error_playlist(self, client_factory, handler_factory):
        client = client_factory(handler_factory(content=b'{"code": 1}'))

        response = client.get("/playlist.m3u")

        assert response.status_code == 200
        assert response.text.startswith("#EXTM3U\n")
        assert response.text == "#EXTM3U\n# Error: Bestv 数据结构异常\n"


class TestServiceEndpoints:
    """Tests for root and health endpoints."""

    def test_root(self, client_factory, handler_factory):
        with client_factory(handler_factory()) as client:
            data = client.get("/").json()

        assert data["service"] == "Shanghai IPTV Playlist"
        assert "playlist" in data["endpoints"]

    def test_health_does_not_contact_upstream(self, client_factory, handler_factory, cache_path):
        handler = handler_factory()
        client = client_factory(handler)

        data = client.get("/health").json()

        assert data["status"] == "ok"
        assert data["cache_file"] == str(cache_path)
        assert data["cache_fresh"] is False
        assert handler.calls == 0

    def test_health_reports_fresh_cache(self, client_factory, handler_factory, cache_path, clock, sample_document):
        client = client_factory(handler_factory(content=sample_document))

        client.get("/playlist.m3u")
        clock.now = cache_path.stat().st_mtime + 5

        assert client.get("/health").json()["cache_fresh"] is True
