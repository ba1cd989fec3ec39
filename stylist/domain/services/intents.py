# stylist/domain/services/intents.py
"""
Keyword intent classification.

Checks run in a fixed order and the first hit wins: greeting, size, budget,
occasion, style, color, product_search, then general_conversation. This is a
coarse heuristic, not a learned priority: "casual tees, what's my budget?"
resolves to budget_preference because budget is checked before occasion.
"""
import re
from typing import Dict, List

from stylist.domain.models.chat import Intent
from stylist.domain.services.constants import COLOR_PALETTE, MAX_FOLLOW_UPS
from stylist.domain.services.extraction import (
    CATEGORY_TERMS,
    OCCASION_KEYWORDS,
    PRICE_PATTERNS,
    STYLE_KEYWORDS,
    mentions,
)

GREETINGS = [
    "hi", "hello", "hey", "hola", "namaste", "greetings", "howdy",
    "good morning", "good afternoon", "good evening",
]
# A greeting must open the message and end at a word boundary ("hi" but not "high")
_GREETING_RE = re.compile(r"^(?:" + "|".join(re.escape(g) for g in GREETINGS) + r")(?![a-z])")

_SIZE_RE = re.compile(r"\b(my size|size|sizes|i wear|fits? me)\b")
_BUDGET_RE = re.compile(r"\b(budget|spend|afford|affordable|cheap|expensive)\b")
_OCCASION_RE = re.compile(
    r"\b(occasion|attending|event)\b|\bfor (?:a |an |the |my )?(" + "|".join(OCCASION_KEYWORDS) + r")\b"
)
_STYLE_RE = re.compile(r"\b(style|styles|my look|aesthetic|" + "|".join(STYLE_KEYWORDS) + r")\b")
_COLOR_RE = re.compile(r"\b(colou?rs?|shade|favou?rite colou?r)\b")
_PRODUCT_RE = re.compile(
    r"\b(show|find|search|looking for|look for|need|want|buy|get me|recommend|suggest|browse|trending|sale|latest)\b"
)

# Fashion-adjacent words that keep a query in the clothing domain
FASHION_KEYWORDS = [
    "fashion", "outfit", "outfits", "clothes", "clothing", "wear", "apparel",
    "style", "wardrobe", "look", "fit", "dress up", "ethnic", "western",
]
NON_CLOTHING_KEYWORDS = [
    "electronics", "electronic", "laptop", "laptops", "phone", "phones",
    "mobile", "smartphone", "tablet", "television", "tv", "camera",
    "furniture", "sofa", "table", "chair", "bed", "mattress",
    "groceries", "grocery", "food", "vegetables", "fruits",
    "car", "bike", "motorcycle", "appliance", "fridge", "refrigerator",
    "washing machine", "microwave", "skincare", "perfume", "fragrance",
    "makeup", "cosmetics", "toys", "books", "medicine",
]

FOLLOW_UP_QUESTIONS: Dict[str, List[str]] = {
    "greeting": [
        "What occasion are you shopping for?",
        "Do you have a budget in mind?",
        "Which colors do you usually wear?",
    ],
    "size_preference": [
        "Do you prefer a slim or relaxed fit?",
        "Should I only show items in your size?",
        "Are you shopping for tops or bottoms?",
    ],
    "budget_preference": [
        "Would you like to see items on sale?",
        "Which category should I search within your budget?",
        "Do you want premium picks slightly above budget?",
    ],
    "occasion_preference": [
        "Is it a day or evening event?",
        "Do you need footwear to go with it?",
        "Should I put together a complete outfit?",
    ],
    "style_preference": [
        "Which colors match your style?",
        "Do you prefer branded or budget options?",
        "Any occasion you are dressing for?",
    ],
    "color_preference": [
        "Should I look for matching accessories?",
        "Do you prefer solid colors or prints?",
        "Which category should I search in this color?",
    ],
    "product_search": [
        "Do you have a budget in mind?",
        "What size do you usually wear?",
        "Any color preference?",
    ],
    "general_conversation": [
        "Would you like to see trending products?",
        "Are you shopping for a special occasion?",
        "Can I help you find something specific?",
    ],
}


def _normalize(text: str) -> str:
    return " ".join(text.strip().lower().split())


def is_greeting(text: str) -> bool:
    """Greeting tokens must open the message as whole words, not merely appear in it."""
    normalized = _normalize(text)
    return bool(_GREETING_RE.match(normalized))


def classify_intent(text: str) -> Intent:
    normalized = _normalize(text)
    if is_greeting(normalized):
        return "greeting"
    if _SIZE_RE.search(normalized):
        return "size_preference"
    if _BUDGET_RE.search(normalized):
        return "budget_preference"
    if _OCCASION_RE.search(normalized):
        return "occasion_preference"
    if _STYLE_RE.search(normalized):
        return "style_preference"
    if _COLOR_RE.search(normalized) or any(mentions(normalized, c) for c in COLOR_PALETTE):
        return "color_preference"
    if _PRODUCT_RE.search(normalized) or mentions_category(normalized):
        return "product_search"
    return "general_conversation"


def mentions_category(text: str) -> bool:
    lowered = text.lower()
    return any(mentions(lowered, term) for terms in CATEGORY_TERMS.values() for term in terms)


def is_product_query(text: str) -> bool:
    """Keyword, category or price-pattern hit."""
    lowered = _normalize(text)
    if _PRODUCT_RE.search(lowered) or mentions_category(lowered):
        return True
    return any(p.search(lowered) for p in PRICE_PATTERNS)


def is_clothing_related(text: str) -> bool:
    """
    False only when the message names no clothing category or fashion word and
    does name an explicit non-clothing product.
    """
    lowered = _normalize(text)
    if mentions_category(lowered) or any(re.search(rf"\b{re.escape(k)}\b", lowered) for k in FASHION_KEYWORDS):
        return True
    return not any(re.search(rf"\b{re.escape(k)}\b", lowered) for k in NON_CLOTHING_KEYWORDS)


def follow_ups_for(intent: str) -> List[str]:
    return FOLLOW_UP_QUESTIONS.get(intent, FOLLOW_UP_QUESTIONS["general_conversation"])[:MAX_FOLLOW_UPS]
