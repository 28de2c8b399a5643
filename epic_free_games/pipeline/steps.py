# epic_free_games/pipeline/steps.py
import json
import logging
from datetime import datetime, timezone
from typing import Iterator, List, Optional, Union

from pydantic import ValidationError

from .. import config
from ..errors import EmptyDocumentError, Err, Ok, ParseError, Result
from ..models import CatalogDocument, CatalogElement, FreeGame, PromotionalOffer, QualifyingElement

logger = logging.getLogger(__name__)


def parse_document(raw: Union[bytes, str]) -> Result[CatalogDocument]:
    """Deserializes the raw feed body into a CatalogDocument."""
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
    except UnicodeDecodeError as e:
        logger.error("Feed body is not valid UTF-8: %s", e)
        return Err(ParseError("Feed body is not valid UTF-8", cause=e))

    if not text.strip():
        logger.error("Feed body is empty.")
        return Err(EmptyDocumentError("Feed body is empty"))

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        snippet_start = max(0, e.pos - 50)
        logger.error("Failed to parse feed JSON: %s", e)
        logger.debug("Faulty JSON snippet around char %d: '%s'", e.pos, text[snippet_start:e.pos + 50])
        return Err(ParseError("Feed body is not valid JSON", cause=e))

    if payload is None:
        logger.error("Feed JSON is null.")
        return Err(EmptyDocumentError("Data is null"))

    try:
        document = CatalogDocument.model_validate(payload)
    except ValidationError as e:
        logger.error("Feed JSON does not match the catalog document shape: %s", e)
        return Err(ParseError("Feed JSON does not match the catalog document shape", cause=e))

    logger.debug("Successfully parsed catalog document.")
    return Ok(document)


def extract_elements(document: CatalogDocument) -> List[CatalogElement]:
    """Walks data.catalog.searchStore.elements; any missing node yields an empty list."""
    data = document.data
    catalog = data.catalog if data else None
    search_store = catalog.search_store if catalog else None
    elements = search_store.elements if search_store else None
    if elements is None:
        logger.warning("Catalog document has no data.catalog.searchStore.elements; treating as empty.")
        return []
    return list(elements)


def filter_zero_price(elements: List[CatalogElement]) -> List[CatalogElement]:
    """Keeps elements whose total discounted price is present and exactly zero."""
    filtered = []
    for element in elements:
        total_price = element.price.total_price if element.price else None
        if total_price is None or total_price.discount_price is None:
            continue
        if total_price.discount_price == 0:
            filtered.append(element)
    logger.debug("Zero-price filter kept %d of %d elements.", len(filtered), len(elements))
    return filtered


def _as_utc(now: Optional[datetime]) -> datetime:
    # Feed timestamps are UTC-aware; a naive reference time is read as UTC too.
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def is_valid_offer(offer: PromotionalOffer, now: Optional[datetime] = None) -> bool:
    """
    An offer is valid when its discount setting is exactly 0%, it has at least one bound,
    it has already started (if it has a start) and has not yet ended (if it has an end).
    """
    now = _as_utc(now)

    if offer.discount_setting is None or offer.discount_setting.discount_percentage != 0:
        return False
    if offer.start_date is None and offer.end_date is None:
        return False
    if offer.start_date is not None and offer.start_date > now:
        return False
    if offer.end_date is not None and offer.end_date < now:
        return False
    return True


def iter_valid_offers(element: CatalogElement, now: Optional[datetime] = None) -> Iterator[PromotionalOffer]:
    """Yields the element's valid offers across all offer groups, in feed order."""
    if element.promotions is None or element.promotions.promotional_offers is None:
        return
    for group in element.promotions.promotional_offers:
        if group.promotional_offers is None:
            continue
        for offer in group.promotional_offers:
            if is_valid_offer(offer, now):
                yield offer


def filter_active_promotion(elements: List[CatalogElement], now: Optional[datetime] = None) -> List[QualifyingElement]:
    """Keeps elements with at least one valid offer, pairing each with the first such offer."""
    now = _as_utc(now)

    qualifying = []
    for element in elements:
        offer = next(iter_valid_offers(element, now), None)
        if offer is None:
            logger.debug("Dropping '%s': no active 0%% promotional offer.", element.title)
            continue
        qualifying.append(QualifyingElement(element=element, offer=offer))
    logger.debug("Active-promotion filter kept %d of %d elements.", len(qualifying), len(elements))
    return qualifying


def get_image_url(element: CatalogElement) -> str:
    """The first wide store-front image, else the first wide offer image, else an empty string."""
    key_images = element.key_images or []
    for image_type in (config.PRIMARY_IMAGE_TYPE, config.FALLBACK_IMAGE_TYPE):
        image = next((image for image in key_images if image.type == image_type), None)
        if image is not None:
            return image.url or ""
    return ""


def get_store_url(element: CatalogElement) -> str:
    """Product slug first, then the first product-home catalog mapping, then the generic free-games page."""
    if element.product_slug:
        return config.STORE_PRODUCT_URL.format(slug=element.product_slug)

    mappings = element.catalog_ns.mappings if element.catalog_ns else None
    if mappings:
        mapping = next(
            (m for m in mappings if m.page_slug and m.page_type == config.PRODUCT_HOME_PAGE_TYPE),
            None,
        )
        if mapping is not None:
            return config.STORE_PRODUCT_URL.format(slug=mapping.page_slug)

    return config.FREE_GAMES_FALLBACK_URL


def to_record(qualifying: QualifyingElement) -> FreeGame:
    """Builds the output record from an element and the offer that made it qualify."""
    element = qualifying.element
    return FreeGame(
        title=element.title,
        image_url=get_image_url(element),
        store_url=get_store_url(element),
        start_date=qualifying.offer.start_date,
        end_date=qualifying.offer.end_date,
    )
