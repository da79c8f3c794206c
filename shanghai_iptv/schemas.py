import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


logger = logging.getLogger(__name__)


class UpstreamChannel(BaseModel):
    """Single live channel as listed by the BesTV API"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | None = Field(None, description="Upstream channel ID, normalised to a string")
    channel_url: str | None = Field(None, alias="channelUrl", description="Live stream URL")

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v: Any) -> str | None:
        """Accept numeric ids so that 2030 and "2030" compare equal; anything else never matches"""
        if isinstance(v, str):
            return v
        if isinstance(v, bool):
            return None
        if isinstance(v, int):
            return str(v)
        if isinstance(v, float):
            return str(int(v)) if v.is_integer() else str(v)
        return None

    @field_validator("channel_url", mode="before")
    @classmethod
    def normalize_channel_url(cls, v: Any) -> str | None:
        """Non-string URLs are treated as missing"""
        return v if isinstance(v, str) else None


class UpstreamDirectory(BaseModel):
    """Top-level BesTV channel list document"""
    model_config = ConfigDict(extra="ignore")

    dt: list[UpstreamChannel] = Field(..., description="Channels currently on air")

    @field_validator("dt", mode="before")
    @classmethod
    def drop_non_objects(cls, v: Any) -> Any:
        """Skip list items that are not JSON objects; they can never match a channel"""
        if not isinstance(v, list):
            return v
        items = [item for item in v if isinstance(item, dict)]
        if len(items) != len(v):
            logger.debug("Dropped %s non-object entries from upstream list", len(v) - len(items))
        return items


class ServiceInfoResponse(BaseModel):
    """Root endpoint payload"""
    service: str
    version: str
    endpoints: dict[str, str]


class HealthResponse(BaseModel):
    """Health check payload"""
    status: str = Field("ok", description="Status indicator")
    cache_file: str = Field(..., description="Path of the cached upstream response")
    cache_fresh: bool = Field(..., description="Whether the cached response is within its TTL")
