"""
Structured logging helpers for consistent log formatting.
"""
import logging


def log_section_start(logger: logging.Logger, section_name: str) -> None:
    """
    Log the start of a processing section.

    Args:
        logger: Logger instance
        section_name: Name of the section being started
    """
    logger.info(f"Starting: {section_name}")


def log_section_end(logger: logging.Logger, section_name: str) -> None:
    """
    Log the end of a processing section.

    Args:
        logger: Logger instance
        section_name: Name of the section being ended
    """
    logger.info(f"Completed: {section_name}")


def log_playlist_summary(
    logger: logging.Logger,
    matched_count: int,
    catalog_count: int,
    source: str
) -> None:
    """
    Log playlist render summary.

    Args:
        logger: Logger instance
        matched_count: Channels written to the playlist
        catalog_count: Channels in the catalog
        source: Where the upstream directory came from ('cache' or 'upstream')
    """
    logger.info(
        f"Playlist rendered - Channels: {matched_count}/{catalog_count}, Source: {source}"
    )
