from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from shanghai_iptv.catalog import CHANNEL_CATALOG
from shanghai_iptv.config import settings, setup_logging
from shanghai_iptv.routers import SERVICE_NAME, SERVICE_VERSION, main_router
from shanghai_iptv.utils.logging_helpers import log_section_end, log_section_start


setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events"""
    log_section_start(logger, SERVICE_NAME)
    logger.info(
        "Serving %s catalog channels, cache at %s (ttl %ss)",
        len(CHANNEL_CATALOG),
        settings.cache_file_path,
        settings.cache_ttl_sec,
    )
    if not settings.upstream_verify_tls:
        logger.warning("TLS certificate verification for %s is disabled", settings.upstream_url)

    yield

    log_section_end(logger, SERVICE_NAME)


app = FastAPI(
    title=SERVICE_NAME,
    version=SERVICE_VERSION,
    lifespan=lifespan
)

app.include_router(main_router)
