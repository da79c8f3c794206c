"""
Cache Service

Keeps the last upstream response on disk for a short time so that
players polling the playlist do not hammer the BesTV API.
"""
import logging
import time
from pathlib import Path
from typing import Callable

from shanghai_iptv.utils.file_operations import file_age_seconds, read_file_bytes, write_file_bytes


logger = logging.getLogger(__name__)


class CacheStore:
    """
    Single-file cache with an age-based validity check.

    Freshness is judged by the file's modification time. Writes replace the
    whole file; concurrent writers are not coordinated and the last one wins.
    I/O errors never escape: a failed read is a miss, a failed write is dropped.
    """

    def __init__(
        self,
        file_path: Path | str,
        ttl_seconds: float,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.file_path = Path(file_path)
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    async def is_fresh(self) -> bool:
        """Return True if a cache file exists and is younger than the TTL."""
        try:
            age = await file_age_seconds(self.file_path, self._clock())
        except OSError as exc:
            logger.warning("Cannot inspect cache file %s: %s", self.file_path, exc)
            return False

        if age is None:
            logger.debug("Cache miss: %s does not exist", self.file_path)
            return False
        if age >= self.ttl_seconds:
            logger.debug("Cache stale: %s is %.1fs old (ttl %ss)", self.file_path, age, self.ttl_seconds)
            return False
        return True

    async def get(self) -> bytes | None:
        """
        Return the cached payload if it is still fresh.

        Returns:
            Cached bytes, or None on a miss, a stale entry, an empty file or an I/O error
        """
        if not await self.is_fresh():
            return None

        try:
            payload = await read_file_bytes(self.file_path)
        except OSError as exc:
            logger.warning("Cannot read cache file %s: %s", self.file_path, exc)
            return None

        if not payload:
            logger.debug("Cache miss: %s is empty", self.file_path)
            return None

        logger.info("Cache hit: %s (%s bytes)", self.file_path, len(payload))
        return payload

    async def put(self, payload: bytes) -> bool:
        """
        Overwrite the cache with a new payload; the write refreshes its mtime.

        Args:
            payload: Raw upstream response

        Returns:
            True if the write succeeded, False otherwise
        """
        try:
            await write_file_bytes(self.file_path, payload)
        except OSError as exc:
            logger.warning("Cannot write cache file %s: %s", self.file_path, exc)
            return False

        logger.debug("Cached %s bytes to %s", len(payload), self.file_path)
        return True
