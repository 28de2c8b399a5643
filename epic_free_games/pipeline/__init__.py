# epic_free_games/pipeline/__init__.py

# This file makes the step functions directly available from the 'pipeline' package.
from .steps import (
    extract_elements,
    filter_active_promotion,
    filter_zero_price,
    get_image_url,
    get_store_url,
    is_valid_offer,
    iter_valid_offers,
    parse_document,
    to_record,
)
