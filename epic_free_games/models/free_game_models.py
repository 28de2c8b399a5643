# epic_free_games/models/free_game_models.py

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from .catalog_models import CatalogElement, PromotionalOffer


@dataclass(frozen=True)
class QualifyingElement:
    """
    A catalog element that passed both the price and the promotion filter, together with
    the first offer that made it qualify. Only the promotion filter builds these, so the
    record mapper never sees an element without an active offer.
    """
    element: CatalogElement
    offer: PromotionalOffer


@dataclass(frozen=True)
class FreeGame:
    """
    This class is the blueprint for our final output. It represents one game that is
    free to claim right now.
    """
    title: str
    image_url: str
    store_url: str
    start_date: Optional[datetime]
    end_date: Optional[datetime]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "imageUrl": self.image_url,
            "storeUrl": self.store_url,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
        }
