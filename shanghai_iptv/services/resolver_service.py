"""
Source Resolver Service

Turns "cache or upstream" into a parsed channel directory.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pydantic import ValidationError

from shanghai_iptv.schemas import UpstreamChannel, UpstreamDirectory
from shanghai_iptv.services.cache_service import CacheStore
from shanghai_iptv.services.upstream_service import FetchError, UpstreamFetcher


logger = logging.getLogger(__name__)


class ResolveError(Exception):
    """Base class for failures that prevent building a playlist"""
    pass


class UpstreamUnavailableError(ResolveError):
    """Nothing cached and the upstream fetch failed"""
    pass


class MalformedDocumentError(ResolveError):
    """The raw document is not JSON or lacks the `dt` channel list"""
    pass


@dataclass(slots=True)
class ResolvedDirectory:
    """Parsed upstream channel list and where it came from."""
    channels: list[UpstreamChannel] = field(default_factory=list)
    from_cache: bool = False

    @property
    def source(self) -> str:
        return "cache" if self.from_cache else "upstream"


def parse_directory(raw: bytes) -> list[UpstreamChannel]:
    """
    Parse a raw BesTV response into its channel list.

    Args:
        raw: Response body as returned by the API (or the cache)

    Returns:
        Channels in upstream order

    Raises:
        MalformedDocumentError: If the body is not a JSON object with a `dt` list
    """
    try:
        document = UpstreamDirectory.model_validate_json(raw)
    except ValidationError as exc:
        first = exc.errors()[0] if exc.error_count() else {}
        logger.error(
            "Upstream document rejected (%s errors, first: %s at %s)",
            exc.error_count(),
            first.get("type"),
            first.get("loc"),
        )
        raise MalformedDocumentError("Upstream document has no usable 'dt' list") from exc
    return document.dt


class SourceResolver:
    """Serves the channel directory from cache when fresh, otherwise from upstream."""

    def __init__(self, cache: CacheStore, fetcher: UpstreamFetcher) -> None:
        self.cache = cache
        self.fetcher = fetcher

    async def resolve(self) -> ResolvedDirectory:
        """
        Resolve the current channel directory.

        Only the cache's age is checked, never its content. A fresh upstream
        response is cached before it is parsed.

        Returns:
            ResolvedDirectory with the parsed channels

        Raises:
            UpstreamUnavailableError: Cache miss and the fetch failed
            MalformedDocumentError: Document could not be parsed
        """
        raw = await self.cache.get()
        from_cache = raw is not None

        if raw is None:
            try:
                raw = await self.fetcher.fetch()
            except FetchError as exc:
                raise UpstreamUnavailableError(str(exc)) from exc

            if not await self.cache.put(raw):
                logger.warning("Continuing without caching the upstream response")

        directory = ResolvedDirectory(channels=parse_directory(raw), from_cache=from_cache)
        logger.info("Resolved %s upstream channels from %s", len(directory.channels), directory.source)
        return directory
