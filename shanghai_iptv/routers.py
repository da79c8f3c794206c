from typing import Annotated
from fastapi import APIRouter, Depends
from fastapi.responses import Response
import logging

from shanghai_iptv.catalog import ChannelEntry
from shanghai_iptv.dependencies import (
    get_cache_store,
    get_catalog,
    get_epg_url,
    get_source_resolver,
)
from shanghai_iptv.schemas import HealthResponse, ServiceInfoResponse
from shanghai_iptv.services import CacheStore, SourceResolver, build_playlist


logger = logging.getLogger(__name__)

main_router = APIRouter()

SERVICE_NAME = "Shanghai IPTV Playlist"
SERVICE_VERSION = "0.1.0"
PLAYLIST_CACHE_CONTROL = "no-cache, must-revalidate"


@main_router.get("/", response_model=ServiceInfoResponse)
async def root() -> ServiceInfoResponse:
    """Root endpoint with service information"""
    return ServiceInfoResponse(
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
        endpoints={
            "playlist": "/playlist.m3u - M3U playlist of Shanghai channels",
            "health": "/health - Health check",
        },
    )


@main_router.get("/health", response_model=HealthResponse)
async def health_check(
    cache: Annotated[CacheStore, Depends(get_cache_store)]
) -> HealthResponse:
    """Health check endpoint; never contacts the upstream"""
    return HealthResponse(
        status="ok",
        cache_file=str(cache.file_path),
        cache_fresh=await cache.is_fresh(),
    )


@main_router.get("/playlist.m3u")
async def get_playlist(
    resolver: Annotated[SourceResolver, Depends(get_source_resolver)],
    catalog: Annotated[tuple[ChannelEntry, ...], Depends(get_catalog)],
    epg_url: Annotated[str, Depends(get_epg_url)],
) -> Response:
    """
    M3U playlist of the Shanghai channels currently on air

    Upstream failures are reported as a minimal playlist with an error
    comment and status 200, so players keep working.
    """
    document = await build_playlist(resolver, catalog, epg_url)

    headers = {"Cache-Control": PLAYLIST_CACHE_CONTROL}
    if document.source:
        headers["X-Playlist-Source"] = document.source

    return Response(
        content=document.body,
        media_type=document.media_type,
        headers=headers,
    )
