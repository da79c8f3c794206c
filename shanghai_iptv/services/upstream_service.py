"""
Upstream Service

Single-shot client for the BesTV live channel API.
"""
import logging

import httpx


logger = logging.getLogger(__name__)

REQUEST_HEADERS = {"Content-Type": "application/json"}
REQUEST_BODY = b"{}"


class FetchError(Exception):
    """Raised when the upstream API cannot deliver a usable response"""
    pass


class UpstreamFetcher:
    """
    Fetches the raw channel list from the provider.

    One POST per call, no retries. TLS verification is off by default because
    the service targets routers and set-top boxes that often ship without a
    usable CA bundle.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 5.0,
        verify_tls: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.verify_tls = verify_tls
        self._transport = transport

    async def fetch(self) -> bytes:
        """
        POST an empty JSON object to the channel endpoint

        Returns:
            Raw response body

        Raises:
            FetchError: On timeout, connection failure, non-2xx status or empty body
        """
        logger.info(f"Fetching channel list from {self.url}...")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                verify=self.verify_tls,
                transport=self._transport,
            ) as client:
                response = await client.post(self.url, content=REQUEST_BODY, headers=REQUEST_HEADERS)
                response.raise_for_status()

        except httpx.TimeoutException as e:
            logger.error(f"Upstream request timed out after {self.timeout}s: {type(e).__name__}")
            raise FetchError(f"Upstream request timed out after {self.timeout}s") from e

        except httpx.HTTPStatusError as e:
            logger.error(f"Upstream returned HTTP {e.response.status_code}")
            raise FetchError(f"Upstream returned HTTP {e.response.status_code}") from e

        except httpx.HTTPError as e:
            logger.error(f"Upstream request failed: {type(e).__name__}: {e}")
            raise FetchError(f"Upstream request failed: {e}") from e

        if not response.content:
            logger.error("Upstream returned an empty body")
            raise FetchError("Upstream returned an empty body")

        logger.info(f"Fetched {len(response.content)} bytes from upstream")
        return response.content
