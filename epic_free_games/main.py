# epic_free_games/main.py
import logging
from datetime import datetime, timezone
from typing import List, Optional

import httpx

from . import config
from .delegates import FeedFetcherDelegate
from .errors import Err, Ok, Result
from .models import FreeGame
from .pipeline.steps import (
    extract_elements,
    filter_active_promotion,
    filter_zero_price,
    parse_document,
    to_record,
)

logger = logging.getLogger(__name__)


async def scrape(client: Optional[httpx.AsyncClient] = None, now: Optional[datetime] = None,
                 timeout: float = config.REQUEST_TIMEOUT) -> Result[List[FreeGame]]:
    """
    Fetches the promotions feed once and returns the games that are free right now.

    Cancel the calling task to abort the request; the CancelledError propagates instead of
    becoming an Err. Every other failure comes back as Err(TransportError | ParseError | EmptyDocumentError).

    An injected client is used as configured: `timeout` and the configured User-Agent only apply to the
    client created when none is passed. A naive `now` is read as UTC.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    logger.info("Fetching promotions feed...")
    async with FeedFetcherDelegate(user_agent=config.USER_AGENT, timeout=timeout, client=client) as fetcher:
        fetched = await fetcher.fetch_feed()
    if isinstance(fetched, Err):
        return fetched

    parsed = parse_document(fetched.value)
    if isinstance(parsed, Err):
        return parsed

    elements = extract_elements(parsed.value)
    logger.info("Feed lists %d catalog elements.", len(elements))

    elements = filter_zero_price(elements)
    qualifying = filter_active_promotion(elements, now)
    free_games = [to_record(element) for element in qualifying]

    logger.info("Found %d free games.", len(free_games))
    return Ok(free_games)
