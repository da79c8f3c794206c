"""
Dependency Injection Configuration

FastAPI dependency providers for the playlist pipeline. Each request gets
its own cache store, fetcher and resolver built from settings; tests swap
them out through `app.dependency_overrides`.
"""
import logging
from typing import Annotated

from fastapi import Depends

from shanghai_iptv.catalog import CHANNEL_CATALOG, ChannelEntry
from shanghai_iptv.config import settings
from shanghai_iptv.services import CacheStore, SourceResolver, UpstreamFetcher


logger = logging.getLogger(__name__)


def get_cache_store() -> CacheStore:
    """
    Build the cache store for the configured cache file.

    Returns:
        CacheStore bound to settings.cache_file_path
    """
    return CacheStore(settings.cache_file_path, settings.cache_ttl_sec)


def get_upstream_fetcher() -> UpstreamFetcher:
    """
    Build the upstream fetcher from settings.

    Returns:
        UpstreamFetcher for the configured BesTV endpoint
    """
    return UpstreamFetcher(
        settings.upstream_url,
        timeout=settings.upstream_timeout_sec,
        verify_tls=settings.upstream_verify_tls,
    )


def get_source_resolver(
    cache: Annotated[CacheStore, Depends(get_cache_store)],
    fetcher: Annotated[UpstreamFetcher, Depends(get_upstream_fetcher)],
) -> SourceResolver:
    """Combine cache and fetcher into a resolver."""
    return SourceResolver(cache, fetcher)


def get_catalog() -> tuple[ChannelEntry, ...]:
    """Channel catalog served by the playlist endpoint."""
    return CHANNEL_CATALOG


def get_epg_url() -> str:
    return settings.epg_url
