import random
from datetime import datetime
from statistics import mean
from typing import List, Optional, Sequence

from stylist.domain.models.product import Product
from stylist.domain.services.constants import (
    AFTERNOON_END_HOUR,
    MAX_SUGGESTIONS,
    MORNING_END_HOUR,
    SUMMER_MONTHS,
)

DEFAULT_SUGGESTIONS = [
    "Show me trending products",
    "Find clothes under ₹1000",
    "Casual t-shirts for men",
    "What's on sale?",
]

GREETING_VARIANTS = [
    "Good {period}! I'm your personal fashion assistant. What are you shopping for today?",
    "Good {period}! Looking for something stylish? Tell me the occasion, budget or colors you love.",
    "Good {period}! I can help you discover outfits, deals and the latest arrivals. Where shall we start?",
]

OFF_TOPIC_REPLY = (
    "I specialise in fashion and clothing, so I can't help with that one. "
    "Can I help you find an outfit, shoes or accessories instead?"
)

APOLOGY_REPLY = (
    "Sorry, I'm having trouble finding products right now. Please try again in a moment."
)

# Style words looked for in titles/descriptions of found products
STYLE_VOCABULARY = [
    "casual", "formal", "classic", "slim", "oversized", "vintage",
    "printed", "striped", "denim", "cotton", "floral", "sporty",
]


def time_of_day(now: datetime) -> str:
    if now.hour < MORNING_END_HOUR:
        return "morning"
    if now.hour < AFTERNOON_END_HOUR:
        return "afternoon"
    return "evening"


def greeting_text(now: datetime, rng: random.Random) -> str:
    return rng.choice(GREETING_VARIANTS).format(period=time_of_day(now))


def season_for(month: int) -> str:
    return "summer" if month in SUMMER_MONTHS else "winter"


def dynamic_suggestions(
    products: Sequence[Product],
    rng: random.Random,
    today: datetime,
    limit: int = MAX_SUGGESTIONS,
) -> List[str]:
    """
    Chips derived from what was found: style+category pairs, two price chips
    around the mean price, and one seasonal chip. Shuffled, then capped.
    """
    if not products:
        return []

    categories: List[str] = []
    for p in products:
        cat = p.category.strip().lower()
        if cat and cat not in categories:
            categories.append(cat)

    text = " ".join(f"{p.title} {p.description}" for p in products).lower()
    styles = [s for s in STYLE_VOCABULARY if s in text]

    out: List[str] = []
    for style, cat in zip(styles, categories or ["outfits"]):
        out.append(f"Show me {style} {cat}")

    main_cat: Optional[str] = categories[0] if categories else None
    avg = mean(p.price for p in products)
    label = main_cat or "items"
    out.append(f"{label.capitalize()} under ₹{round(avg)}")
    out.append(f"Premium {label} above ₹{round(avg)}")

    season = season_for(today.month)
    out.append(f"{season.capitalize()} {main_cat or 'collection'} picks")

    unique = list(dict.fromkeys(out))
    rng.shuffle(unique)
    return unique[:limit]
