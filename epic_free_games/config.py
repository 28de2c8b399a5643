# epic_free_games/config.py

# --- Feed Settings ---
# The promotions feed the store front itself uses. The locale/country parameters are fixed;
# other regions are not supported.
FEED_URL = (
    "https://store-site-backend-static-ipv4.ak.epicgames.com/freeGamesPromotions"
    "?locale=en-US&country=US&allowCountries=US"
)

# --- Store URL Settings ---
# Template for a product page. Filled with either the product slug or a catalog mapping page slug.
STORE_PRODUCT_URL = "https://www.epicgames.com/store/en-US/p/{slug}"
# Used when an element has neither a product slug nor a usable catalog mapping.
FREE_GAMES_FALLBACK_URL = "https://store.epicgames.com/en-US/free-games"
# Only mappings of this page type point to a product page.
PRODUCT_HOME_PAGE_TYPE = "productHome"

# --- Image Settings ---
# Key image types, in order of preference.
PRIMARY_IMAGE_TYPE = "DieselStoreFrontWide"
FALLBACK_IMAGE_TYPE = "OfferImageWide"

# --- Network Settings ---
# The User-Agent string sent with the feed request. A common browser one avoids being served a block page.
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/108.0.0.0 Safari/537.36"
# Maximum time (in seconds) the HTTP client waits for the feed.
REQUEST_TIMEOUT = 30.0
