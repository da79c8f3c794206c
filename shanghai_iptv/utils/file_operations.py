"""
File operation utilities

This module handles the small amount of disk I/O the playlist cache needs.
Errors are raised to the caller; the cache layer decides what to swallow.
"""
import logging
from pathlib import Path

import aiofiles
import aiofiles.os


logger = logging.getLogger(__name__)


async def read_file_bytes(file_path: Path) -> bytes:
    """
    Read a whole file into memory

    Args:
        file_path: Path to the file

    Returns:
        File contents

    Raises:
        OSError: If the file cannot be opened or read
    """
    async with aiofiles.open(file_path, 'rb') as f:
        return await f.read()


async def write_file_bytes(file_path: Path, payload: bytes, dir_mode: int = 0o755) -> None:
    """
    Overwrite a file with the given payload, creating parent directories

    Args:
        file_path: Destination path
        payload: Bytes to write
        dir_mode: Permission bits for newly created directories

    Raises:
        OSError: If the directory cannot be created or the file cannot be written
    """
    await aiofiles.os.makedirs(file_path.parent, mode=dir_mode, exist_ok=True)

    async with aiofiles.open(file_path, 'wb') as f:
        await f.write(payload)

    logger.debug(f"Wrote {len(payload)} bytes to {file_path}")


async def file_age_seconds(file_path: Path, now: float) -> float | None:
    """
    Age of a file based on its modification time

    Args:
        file_path: Path to inspect
        now: Current time as a POSIX timestamp

    Returns:
        Seconds since last modification, or None if the file does not exist

    Raises:
        OSError: If the file exists but cannot be inspected
    """
    try:
        modified_at = (await aiofiles.os.stat(file_path)).st_mtime
    except FileNotFoundError:
        return None
    return now - modified_at
