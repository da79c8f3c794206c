"""
Services package for the Shanghai IPTV playlist service

This package contains all business logic and service layer components.
"""
from shanghai_iptv.services.cache_service import CacheStore
from shanghai_iptv.services.upstream_service import FetchError, UpstreamFetcher
from shanghai_iptv.services.resolver_service import (
    MalformedDocumentError,
    ResolveError,
    ResolvedDirectory,
    SourceResolver,
    UpstreamUnavailableError,
)
from shanghai_iptv.services.playlist_service import (
    PlaylistDocument,
    build_playlist,
    render_error_playlist,
    render_playlist,
)

__all__ = [
    'CacheStore',
    'FetchError',
    'UpstreamFetcher',
    'MalformedDocumentError',
    'ResolveError',
    'ResolvedDirectory',
    'SourceResolver',
    'UpstreamUnavailableError',
    'PlaylistDocument',
    'build_playlist',
    'render_error_playlist',
    'render_playlist',
]
