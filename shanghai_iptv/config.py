from pathlib import Path
import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)

DEFAULT_UPSTREAM_URL = "https://bp-api.bestv.cn/cms/api/live/channels"
DEFAULT_EPG_URL = "https://epg.iill.top/e.xml"


class CustomSettings(BaseSettings):
    """Application settings loaded from environment variables.

    Validates configuration at startup to catch misconfiguration early.
    """

    cache_dir: str = "./cache"
    cache_file_name: str = "bestv_channels.json"
    cache_ttl_sec: int = 60  # Seconds a cached upstream response stays fresh

    upstream_url: str = DEFAULT_UPSTREAM_URL
    upstream_timeout_sec: float = 5.0
    upstream_verify_tls: bool = False  # Embedded targets often lack a CA bundle

    epg_url: str = DEFAULT_EPG_URL
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("upstream_url", "epg_url")
    @classmethod
    def validate_http_url(cls, value: str, info) -> str:
        """Validate URLs are HTTP/HTTPS."""
        if not value.lower().startswith(("http://", "https://")):
            raise ValueError(f"{info.field_name} must be HTTP/HTTPS: {value}")
        return value

    @field_validator("cache_ttl_sec")
    @classmethod
    def validate_cache_ttl(cls, value: int) -> int:
        """Ensure the cache window is a positive number of seconds."""
        if value <= 0:
            raise ValueError("cache_ttl_sec must be > 0")
        return value

    @field_validator("upstream_timeout_sec")
    @classmethod
    def validate_upstream_timeout(cls, value: float) -> float:
        """Ensure the upstream request timeout is positive."""
        if value <= 0:
            raise ValueError("upstream_timeout_sec must be > 0")
        return value

    @field_validator("cache_file_name")
    @classmethod
    def validate_cache_file_name(cls, value: str) -> str:
        """Cache file name must be a bare file name, not a path."""
        if not value.strip() or Path(value).name != value:
            raise ValueError(f"cache_file_name must be a plain file name: '{value}'")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate logging level name."""
        normalized = value.upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if normalized not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}")
        return normalized

    @property
    def cache_file_path(self) -> Path:
        """Full path of the cached upstream response."""
        return Path(self.cache_dir) / self.cache_file_name

    def __init__(self, **data):
        """Initialize settings and log configuration."""
        super().__init__(**data)

        logger.info("Configuration loaded:")
        logger.info("  Cache File: %s", self.cache_file_path)
        logger.info("  Cache TTL: %ss", self.cache_ttl_sec)
        logger.info("  Upstream: %s", self.upstream_url)
        logger.info("  Upstream Timeout: %ss", self.upstream_timeout_sec)
        logger.info(
            "  Upstream TLS Verification: %s",
            "enabled" if self.upstream_verify_tls else "disabled",
        )
        logger.info("  EPG URL: %s", self.epg_url)
        logger.info("  Log Level: %s", self.log_level)


settings = CustomSettings()


def setup_logging() -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
