# Ranker
MAX_RESULTS = 6             # products attached to a chat reply
LATEST_BATCH = 30           # catalog batch scanned for "latest" requests
TRENDING_BATCH = 50         # catalog batch scanned when no term was extracted
FALLBACK_TERM = "clothing"  # last search strategy
TITLE_MATCH_BONUS = 5.0
PRICE_FIT_BONUS = 3.0
LATEST_TERMS = {"latest", "new", "newest", "recent", "arrivals", "new arrivals"}

# Conversation
MAX_SUGGESTIONS = 4
MAX_FOLLOW_UPS = 3
MORNING_END_HOUR = 12
AFTERNOON_END_HOUR = 17
SUMMER_MONTHS = range(4, 10)  # April-September

# Outfit engine
MIN_OUTFIT_PRODUCTS = 3
MIN_OUTFIT_ITEMS = 3
MAX_OUTFIT_ITEMS = 4
OUTFIT_DRAWS = 5
DRAW_ATTEMPTS = 20
TOP_OUTFITS = 3
PRICE_VARIANCE_CAP = 20.0
PRICE_VARIANCE_SCALE = 100.0
CATEGORY_BONUS = 5.0
RATING_WEIGHT = 2.0
DISCOUNT_DIVISOR = 5.0

COLOR_PALETTE = [
    "black", "white", "blue", "red", "green", "yellow", "pink", "purple",
    "brown", "gray", "grey", "navy", "beige", "orange", "maroon", "olive",
    "cream", "gold", "silver",
]
