# epic_free_games/models/catalog_models.py

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class FeedModel(BaseModel):
    """
    Base for every node of the promotions feed. The feed uses camelCase keys; we read them
    into snake_case attributes. Unknown keys are ignored since the feed carries far more
    than we need.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore", frozen=True)


class DiscountSetting(FeedModel):
    discount_percentage: Optional[float] = None


class PromotionalOffer(FeedModel):
    discount_setting: Optional[DiscountSetting] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Feed timestamps carry a 'Z' suffix; treat any without an offset as UTC too.
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class PromotionalOfferGroup(FeedModel):
    promotional_offers: Optional[List[PromotionalOffer]] = None


class Promotions(FeedModel):
    promotional_offers: Optional[List[PromotionalOfferGroup]] = None


class TotalPrice(FeedModel):
    discount_price: Optional[float] = None


class Price(FeedModel):
    total_price: Optional[TotalPrice] = None


class KeyImage(FeedModel):
    type: Optional[str] = None
    url: Optional[str] = None


class CatalogMapping(FeedModel):
    page_slug: Optional[str] = None
    page_type: Optional[str] = None


class CatalogNs(FeedModel):
    mappings: Optional[List[CatalogMapping]] = None


class CatalogElement(FeedModel):
    """One listing of the store's promotions feed."""
    title: str = ""
    product_slug: Optional[str] = None
    catalog_ns: Optional[CatalogNs] = None
    key_images: Optional[List[KeyImage]] = None
    price: Optional[Price] = None
    promotions: Optional[Promotions] = None

    @field_validator("title", mode="before")
    @classmethod
    def _null_title_as_empty(cls, value: Optional[str]) -> str:
        return "" if value is None else value


class SearchStore(FeedModel):
    elements: Optional[List[CatalogElement]] = None


class Catalog(FeedModel):
    search_store: Optional[SearchStore] = None


class CatalogData(FeedModel):
    catalog: Optional[Catalog] = None


class CatalogDocument(FeedModel):
    """Root of the promotions feed: {"data": {"catalog": {"searchStore": {"elements": [...]}}}}."""
    data: Optional[CatalogData] = None
