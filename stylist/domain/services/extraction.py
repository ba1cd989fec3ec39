# stylist/domain/services/extraction.py
"""
Rule-based entity extraction: turns a free-text chat message into
SearchSignals plus a partial UserPreferences update.

Extraction is best-effort and never raises; a missing signal is simply an
empty/None field.
"""
from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Tuple

from stylist.domain.models.chat import SearchSignals, UserPreferences
from stylist.domain.services.constants import COLOR_PALETTE

logger = logging.getLogger(__name__)

_NUM = r"(\d[\d,]*(?:\.\d+)?)"
_CUR = r"(?:₹|\brs\.?|\binr)?\s*"

# Ordered: the first pattern that matches wins, even if a later one would too.
PRICE_PATTERNS: List[re.Pattern] = [
    re.compile(rf"(?:under|below|less than|cheaper than|within)\s*{_CUR}{_NUM}\s*(k\b|thousand)?"),
    re.compile(rf"(?:budget|up to|upto|max|maximum)\s*(?:of|is|:)?\s*{_CUR}{_NUM}\s*(k\b|thousand)?"),
    re.compile(rf"(?:₹|\brs\.?|\binr)\s*{_NUM}\s*(k\b|thousand)?"),
    re.compile(rf"{_NUM}\s*(k\b|thousand)"),
]

# Values below this are read as thousands ("budget 50" -> 50000)
_THOUSANDS_THRESHOLD = 100

# Declaration order is match priority: the first category with a synonym
# found in the message wins, regardless of match length.
CATEGORY_TERMS: Dict[str, List[str]] = {
    "t-shirt": ["t-shirt", "t-shirts", "tshirt", "tshirts", "tees"],
    "shirt": ["shirt", "shirts"],
    "dress": ["dress", "dresses", "gown", "gowns"],
    "jeans": ["jeans", "denim", "denims"],
    "trousers": ["trousers", "pants", "chinos", "joggers"],
    "shorts": ["shorts"],
    "skirt": ["skirt", "skirts"],
    "jacket": ["jacket", "jackets", "coat", "coats", "blazer", "blazers"],
    "hoodie": ["hoodie", "hoodies", "sweatshirt", "sweatshirts"],
    "sweater": ["sweater", "sweaters", "cardigan", "pullover"],
    "kurta": ["kurta", "kurtas", "kurti", "kurtis"],
    "saree": ["saree", "sarees", "sari", "lehenga"],
    "tops": ["tops", "crop top", "tank top", "blouse", "blouses"],
    "sneakers": ["sneakers", "trainers", "running shoes"],
    "shoes": ["shoes", "footwear", "boots", "heels", "sandals", "loafers", "flats"],
    "sportswear": ["sportswear", "activewear", "gym wear", "tracksuit"],
    "watch": ["watch", "watches"],
    "bag": ["bag", "bags", "handbag", "handbags", "backpack", "purse", "wallet"],
    "sunglasses": ["sunglasses", "shades", "eyewear"],
    "jewellery": ["jewellery", "jewelry", "necklace", "earrings", "bracelet", "rings"],
    "accessories": ["accessories", "accessory", "belt", "belts", "scarf", "caps", "hats"],
}

STOP_WORDS = {
    "show", "find", "need", "want", "looking", "look", "search", "please",
    "something", "some", "with", "that", "this", "have", "give", "get",
    "would", "like", "could", "should", "about", "from", "under", "below",
    "less", "than", "budget", "price", "cheap", "cheaper", "within", "maximum",
    "help", "suggest", "recommend", "buy", "shop", "shopping", "items",
    "item", "thing", "things", "what", "which", "there", "your", "good",
    "best", "nice", "also", "just", "them", "they", "rupees", "thousand",
}

_SIZE_RE = re.compile(
    r"(?<![\w'’-])(xxl|xl|small|medium|large|s|m|l)(?![\w'’-])", re.IGNORECASE
)
_SIZE_CODES = {"small": "S", "medium": "M", "large": "L"}

OCCASION_KEYWORDS = [
    "casual", "formal", "party", "office", "wedding", "gym", "date",
    "festive", "vacation", "beach", "interview", "work",
]
STYLE_KEYWORDS = [
    "minimalist", "classic", "trendy", "bold", "vintage", "streetwear",
    "bohemian", "boho", "elegant", "sporty", "ethnic", "chic", "preppy",
]
SEASON_KEYWORDS = ["summer", "winter", "monsoon", "spring", "autumn", "fall"]

_WORD_RE = re.compile(r"[a-z][a-z'-]*")


def extract_price(text: str) -> Optional[float]:
    """Single price ceiling from the first matching pattern, or None."""
    lowered = text.lower()
    for pattern in PRICE_PATTERNS:
        m = pattern.search(lowered)
        if not m:
            continue
        try:
            value = float(m.group(1).replace(",", ""))
        except (TypeError, ValueError):
            return None
        matched = m.group(0)
        if "k" in matched or "thousand" in matched or value < _THOUSANDS_THRESHOLD:
            value *= 1000
        return value if value > 0 else None
    return None


def extract_category(text: str) -> Tuple[Optional[str], List[str]]:
    """
    Return (category, alternate_terms) for the first table entry with a
    synonym contained in the message (synonyms must start at a word).
    """
    lowered = text.lower()
    for category, terms in CATEGORY_TERMS.items():
        if any(mentions(lowered, term) for term in terms):
            return category, [t for t in terms if t != category]
    return None, []


def mentions(lowered: str, term: str) -> bool:
    """Substring match anchored at a word start ("tops" hits "tops!", not "laptops")."""
    return re.search(r"(?<![a-z])" + re.escape(term), lowered) is not None


def fallback_term(text: str) -> str:
    """Longest non-filler word (>3 chars); ties go to the leftmost one."""
    best = ""
    for word in _WORD_RE.findall(text.lower()):
        word = word.strip("'-")
        if len(word) <= 3 or word in STOP_WORDS:
            continue
        if len(word) > len(best):
            best = word
    return best


def extract_colors(text: str) -> List[str]:
    lowered = text.lower()
    return [c for c in COLOR_PALETTE if c in lowered]


def extract_size(text: str) -> Optional[str]:
    m = _SIZE_RE.search(text)
    if not m:
        return None
    token = m.group(1).lower()
    return _SIZE_CODES.get(token, token.upper())


def extract_occasions(text: str) -> List[str]:
    lowered = text.lower()
    return [o for o in OCCASION_KEYWORDS if re.search(rf"\b{o}\b", lowered)]


def extract_style(text: str) -> Optional[str]:
    lowered = text.lower()
    for style in STYLE_KEYWORDS:
        if re.search(rf"\b{style}\b", lowered):
            return style
    return None


def extract_season(text: str) -> Optional[str]:
    lowered = text.lower()
    for season in SEASON_KEYWORDS:
        if re.search(rf"\b{season}\b", lowered):
            return season
    return None


def extract_signals(text: str) -> SearchSignals:
    category, alternates = extract_category(text)
    search_term = category or fallback_term(text)
    signals = SearchSignals(
        search_term=search_term,
        category=category,
        alternate_terms=alternates,
        max_price=extract_price(text),
        colors=extract_colors(text),
        original_text=text,
        size=extract_size(text),
        occasions=extract_occasions(text),
        style=extract_style(text),
        season=extract_season(text),
    )
    logger.debug(
        "extracted term=%r category=%r max_price=%s colors=%s size=%s occasions=%s style=%s",
        signals.search_term, signals.category, signals.max_price, signals.colors,
        signals.size, signals.occasions, signals.style,
    )
    return signals


def preferences_from_signals(signals: SearchSignals) -> UserPreferences:
    return UserPreferences(
        size=signals.size,
        style=signals.style,
        budget=signals.max_price,
        colors=list(signals.colors),
        occasions=list(signals.occasions),
        last_search=signals.search_term or None,
    )


def extract(text: str) -> Tuple[SearchSignals, UserPreferences]:
    signals = extract_signals(text)
    return signals, preferences_from_signals(signals)
