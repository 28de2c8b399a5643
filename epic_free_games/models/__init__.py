# epic_free_games/models/__init__.py

# This file makes the model classes directly available from the 'models' package.
# Instead of: from epic_free_games.models.free_game_models import FreeGame
# We can now use: from epic_free_games.models import FreeGame

from .catalog_models import (
    CatalogDocument,
    CatalogElement,
    CatalogMapping,
    KeyImage,
    PromotionalOffer,
)
from .free_game_models import FreeGame, QualifyingElement
