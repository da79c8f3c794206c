"""
Playlist Service

Joins the channel catalog against the upstream directory and renders M3U text.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from shanghai_iptv.catalog import ChannelEntry
from shanghai_iptv.config import DEFAULT_EPG_URL
from shanghai_iptv.schemas import UpstreamChannel
from shanghai_iptv.services.resolver_service import (
    MalformedDocumentError,
    SourceResolver,
    UpstreamUnavailableError,
)
from shanghai_iptv.utils.logging_helpers import log_playlist_summary


logger = logging.getLogger(__name__)

PLAYLIST_MEDIA_TYPE = "audio/x-mpegurl; charset=utf-8"
ERROR_MEDIA_TYPE = "text/plain; charset=utf-8"

UPSTREAM_UNAVAILABLE_MESSAGE = "无法获取 Bestv API 数据"
MALFORMED_DOCUMENT_MESSAGE = "Bestv 数据结构异常"


@dataclass(slots=True)
class PlaylistDocument:
    """Rendered playlist (or its error form) ready to be served."""
    body: str
    media_type: str
    ok: bool
    channel_count: int = 0
    source: str | None = None


def index_stream_urls(channels: Sequence[UpstreamChannel]) -> dict[str, str | None]:
    """
    Map upstream ids to stream URLs, keeping the first entry for each id.

    Args:
        channels: Upstream channels in upstream order

    Returns:
        Dictionary of id -> channel URL (None when the upstream entry has no URL)
    """
    index: dict[str, str | None] = {}
    for channel in channels:
        if channel.id is None:
            continue
        index.setdefault(channel.id, channel.channel_url)
    return index


def format_extinf(entry: ChannelEntry) -> str:
    """Metadata line for one channel; values are written verbatim."""
    return (
        f'#EXTINF:-1 tvg-id="{entry.tvg_id}" tvg-name="{entry.tvg_name}" '
        f'tvg-logo="{entry.logo_url}" group-title="{entry.group_title}",{entry.display_name}'
    )


def render_playlist(
    catalog: Sequence[ChannelEntry],
    channels: Sequence[UpstreamChannel],
    epg_url: str = DEFAULT_EPG_URL,
) -> str:
    """
    Render the M3U playlist for every catalog entry found upstream.

    Entries are emitted in catalog order. Entries without a match, or whose
    first match has no stream URL, are left out.

    Args:
        catalog: Channel entries in playlist order
        channels: Resolved upstream channels
        epg_url: Programme guide URL advertised in the header

    Returns:
        Playlist text, newline terminated
    """
    stream_urls = index_stream_urls(channels)
    lines = [f'#EXTM3U x-tvg-url="{epg_url}"']

    for entry in catalog:
        stream_url = stream_urls.get(entry.upstream_id)
        if not stream_url:
            logger.debug("No upstream stream for %s (id %s)", entry.key, entry.upstream_id)
            continue
        lines.append(format_extinf(entry))
        lines.append(stream_url)
        lines.append("")

    return "\n".join(lines) + "\n"


def render_error_playlist(message: str) -> str:
    """Minimal playlist that players can load without choking, carrying the error as a comment."""
    return f"#EXTM3U\n# Error: {message}\n"


def count_entries(body: str) -> int:
    return sum(1 for line in body.splitlines() if line.startswith("#EXTINF"))


async def build_playlist(
    resolver: SourceResolver,
    catalog: Sequence[ChannelEntry],
    epg_url: str = DEFAULT_EPG_URL,
) -> PlaylistDocument:
    """
    Resolve the upstream directory and render the playlist

    Resolution failures are turned into the error playlist rather than raised,
    so the HTTP layer always has something to serve.

    Args:
        resolver: Source of the upstream channel directory
        catalog: Channel entries in playlist order
        epg_url: Programme guide URL advertised in the header

    Returns:
        PlaylistDocument with body and media type
    """
    try:
        directory = await resolver.resolve()
    except UpstreamUnavailableError as exc:
        logger.error("Playlist unavailable, upstream failed: %s", exc)
        return PlaylistDocument(
            body=render_error_playlist(UPSTREAM_UNAVAILABLE_MESSAGE),
            media_type=ERROR_MEDIA_TYPE,
            ok=False,
        )
    except MalformedDocumentError as exc:
        logger.error("Playlist unavailable, malformed upstream document: %s", exc)
        return PlaylistDocument(
            body=render_error_playlist(MALFORMED_DOCUMENT_MESSAGE),
            media_type=ERROR_MEDIA_TYPE,
            ok=False,
        )

    body = render_playlist(catalog, directory.channels, epg_url)
    channel_count = count_entries(body)
    log_playlist_summary(logger, channel_count, len(catalog), directory.source)

    return PlaylistDocument(
        body=body,
        media_type=PLAYLIST_MEDIA_TYPE,
        ok=True,
        channel_count=channel_count,
        source=directory.source,
    )
