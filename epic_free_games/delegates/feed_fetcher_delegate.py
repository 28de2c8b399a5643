# epic_free_games/delegates/feed_fetcher_delegate.py
import logging
from typing import Optional

import httpx

from .. import config
from ..errors import Err, Ok, Result, TransportError

logger = logging.getLogger(__name__)


class FeedFetcherDelegate:
    """Handles downloading the raw promotions feed."""
    def __init__(self, user_agent: str = config.USER_AGENT, timeout: float = config.REQUEST_TIMEOUT,
                 client: Optional[httpx.AsyncClient] = None):
        self.user_agent = user_agent
        self.timeout = timeout
        # An injected client belongs to the caller and is left open on exit.
        self.client = client
        self._owns_client = client is None

    async def __aenter__(self):
        if self.client is None:
            self.client = httpx.AsyncClient(headers={"User-Agent": self.user_agent}, timeout=self.timeout)
            logger.debug("FeedFetcherDelegate httpx.AsyncClient initialized.")
        else:
            logger.debug("FeedFetcherDelegate using injected client; its own User-Agent and timeout apply.")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.client and self._owns_client:
            await self.client.aclose()
            self.client = None
            logger.debug("FeedFetcherDelegate httpx.AsyncClient closed.")

    async def fetch_feed(self, url: str = config.FEED_URL) -> Result[bytes]:
        """
        Issues exactly one GET for the feed and returns the raw body.
        Cancellation of the surrounding task is not caught here: CancelledError reaches the caller as-is.
        """
        if not self.client:
            return Err(TransportError("HTTP client not initialized; use FeedFetcherDelegate as an async context manager"))

        try:
            logger.debug("Requesting promotions feed from: %s", url)
            response = await self.client.get(url, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("HTTP error fetching feed from %s: %s - Response: %s", url, e, e.response.text[:200])
            return Err(TransportError(f"Feed request returned HTTP {e.response.status_code}", cause=e))
        except httpx.RequestError as e:
            logger.error("Network error fetching feed from %s: %s", url, e)
            return Err(TransportError("Feed request failed", cause=e))

        logger.debug("Fetched %d bytes from %s", len(response.content), url)
        return Ok(response.content)
