"""
Fixed table of Shanghai channels published in the playlist.

Order matters: it is the order channels appear in the rendered playlist.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


LOGO_BASE_URL = "https://epg.iill.top/logo"
SHANGHAI_GROUP = "上海台"


@dataclass(frozen=True, slots=True)
class ChannelEntry:
    """Display metadata for one channel, keyed by its upstream id."""
    key: str
    upstream_id: str
    display_name: str
    tvg_id: str
    tvg_name: str
    logo_url: str
    group_title: str


def _shanghai_channel(key: str, upstream_id: str, name: str, logo: str) -> ChannelEntry:
    return ChannelEntry(
        key=key,
        upstream_id=upstream_id,
        display_name=name,
        tvg_id=name,
        tvg_name=name,
        logo_url=f"{LOGO_BASE_URL}/{logo}",
        group_title=SHANGHAI_GROUP,
    )


def validate_catalog(catalog: Sequence[ChannelEntry]) -> tuple[ChannelEntry, ...]:
    """
    Check that catalog keys and upstream ids are unique.

    Args:
        catalog: Channel entries in playlist order

    Returns:
        The catalog as a tuple

    Raises:
        ValueError: If a key or upstream id appears more than once
    """
    seen_keys: set[str] = set()
    seen_ids: set[str] = set()
    for entry in catalog:
        if entry.key in seen_keys:
            raise ValueError(f"Duplicate channel key in catalog: {entry.key}")
        if entry.upstream_id in seen_ids:
            raise ValueError(f"Duplicate upstream id in catalog: {entry.upstream_id}")
        seen_keys.add(entry.key)
        seen_ids.add(entry.upstream_id)
    return tuple(catalog)


CHANNEL_CATALOG: tuple[ChannelEntry, ...] = validate_catalog([
    _shanghai_channel("dfws", "2030", "东方卫视", "东方卫视4K.png"),
    _shanghai_channel("wxty", "1605", "五星体育", "五星体育.png"),
    _shanghai_channel("dycj", "21", "上海第一财经", "第一财经.png"),
    _shanghai_channel("xwzh", "20", "上海新闻综合", "上海新闻.png"),
    _shanghai_channel("dspd", "18", "上海都市频道", "上海都市.png"),
    _shanghai_channel("xjs", "1600", "新纪实", "新纪实.png"),
    _shanghai_channel("mdy", "1601", "魔都眼", "魔都眼.png"),
    _shanghai_channel("ash", "2029", "爱上海", "爱上海.png"),
])


__all__ = ["ChannelEntry", "CHANNEL_CATALOG", "validate_catalog"]
