# stylist/domain/services/outfit_svc.py
from __future__ import annotations

import asyncio
import logging
import math
import random
import time
import uuid
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from stylist.domain.models.outfit import GeneratedOutfit, OutfitRequest
from stylist.domain.models.product import Product
from stylist.domain.services.completion_svc import TextCompleter
from stylist.domain.services.constants import (
    CATEGORY_BONUS,
    COLOR_PALETTE,
    DISCOUNT_DIVISOR,
    DRAW_ATTEMPTS,
    MAX_OUTFIT_ITEMS,
    MIN_OUTFIT_ITEMS,
    MIN_OUTFIT_PRODUCTS,
    OUTFIT_DRAWS,
    PRICE_VARIANCE_CAP,
    PRICE_VARIANCE_SCALE,
    RATING_WEIGHT,
    TOP_OUTFITS,
)
from stylist.domain.services.errors import InsufficientInventory
from stylist.domain.services.prompts import STYLIST_CONTEXT, stylist_task

logger = logging.getLogger(__name__)


class OccasionRules(BaseModel):
    categories: Tuple[str, ...]
    avoid: Tuple[str, ...]
    # Declared per occasion but not applied to the budget check (see DESIGN.md).
    price_multiplier: float = 1.0

    model_config = ConfigDict(frozen=True)


OCCASION_RULES: Dict[str, OccasionRules] = {
    "casual": OccasionRules(
        categories=("t-shirt", "shirt", "jeans", "sneakers", "hoodie", "jacket", "top"),
        avoid=("formal", "suit", "blazer", "heels"),
        price_multiplier=1.0,
    ),
    "formal": OccasionRules(
        categories=("shirt", "trousers", "blazer", "dress", "shoes", "pants"),
        avoid=("sneakers", "t-shirt", "shorts", "hoodie"),
        price_multiplier=1.5,
    ),
    "party": OccasionRules(
        categories=("dress", "jacket", "shirt", "jeans", "shoes", "accessories"),
        avoid=("gym", "sportswear", "casual"),
        price_multiplier=1.3,
    ),
    "gym": OccasionRules(
        categories=("sportswear", "sneakers", "activewear", "shorts", "top"),
        avoid=("formal", "jeans", "dress"),
        price_multiplier=1.0,
    ),
}

_Combo = List[Product]


def filter_by_occasion(products: Sequence[Product], request: OutfitRequest) -> List[Product]:
    """
    Keep products whose "category title" text hits an allowed keyword, hits no
    avoid keyword, fits the budget and is not in an excluded category.
    """
    rules = OCCASION_RULES[request.occasion]
    excluded = {c.strip().lower() for c in request.exclude_categories if c.strip()}
    out: List[Product] = []
    for p in products:
        if p.category.strip().lower() in excluded:
            continue
        if request.budget is not None and p.price > request.budget:
            continue
        text = f"{p.category} {p.title}".lower()
        if not any(cat in text for cat in rules.categories):
            continue
        if any(bad in text for bad in rules.avoid):
            continue
        out.append(p)
    return out


def group_by_category(products: Sequence[Product]) -> Dict[str, List[Product]]:
    groups: Dict[str, List[Product]] = {}
    for p in products:
        groups.setdefault(p.category.strip().lower(), []).append(p)
    return groups


def draw_combinations(groups: Dict[str, List[Product]], rng: random.Random) -> List[_Combo]:
    """
    Bounded random search: OUTFIT_DRAWS draws, each picking up to 3-4 distinct
    categories with at most DRAW_ATTEMPTS category picks. Draws with fewer than
    MIN_OUTFIT_ITEMS items are dropped. Not exhaustive on purpose.
    """
    categories = list(groups)
    combos: List[_Combo] = []
    if len(categories) < MIN_OUTFIT_ITEMS:
        return combos

    target = min(MAX_OUTFIT_ITEMS, len(categories))
    for _ in range(OUTFIT_DRAWS):
        outfit: _Combo = []
        used = set()
        attempts = 0
        while len(outfit) < target and attempts < DRAW_ATTEMPTS:
            cat = rng.choice(categories)
            if cat not in used and groups[cat]:
                outfit.append(rng.choice(groups[cat]))
                used.add(cat)
            attempts += 1
        if len(outfit) >= MIN_OUTFIT_ITEMS:
            combos.append(outfit)
    return combos


def compatibility_score(items: Sequence[Product]) -> int:
    """
    100 - min(20, mean |price - avg| / 100) + 5 per category
    + 2 * avg rating + avg discount / 5, rounded half up and clamped to [0, 100].
    """
    if not items:
        return 0
    n = len(items)
    prices = [p.price for p in items]
    avg_price = sum(prices) / n
    deviation = sum(abs(x - avg_price) for x in prices) / n

    score = 100.0
    score -= min(PRICE_VARIANCE_CAP, deviation / PRICE_VARIANCE_SCALE)
    score += len({p.category.strip().lower() for p in items}) * CATEGORY_BONUS
    score += RATING_WEIGHT * sum(p.rating for p in items) / n
    score += sum(p.discount_percentage for p in items) / n / DISCOUNT_DIVISOR
    return max(0, min(100, math.floor(score + 0.5)))


def extract_colors(items: Sequence[Product]) -> List[str]:
    seen: List[str] = []
    for p in items:
        title = p.title.lower()
        for color in COLOR_PALETTE:
            if color in title and color not in seen:
                seen.append(color)
    return seen


def fallback_reasoning(occasion: str, n_items: int) -> str:
    return f"Perfect {occasion} outfit combining {n_items} stylish pieces that work great together!"


async def _reasoning_for(items: Sequence[Product], request: OutfitRequest, completer: TextCompleter) -> str:
    """Styling copy for one outfit; never raises."""
    try:
        prompt = stylist_task(request.occasion, items, request.color_preference, request.style)
        completion = await completer.complete(prompt, STYLIST_CONTEXT)
        return completion.text.strip() or fallback_reasoning(request.occasion, len(items))
    except Exception as e:
        logger.warning(f"Outfit reasoning failed, using template: {e}")
        return fallback_reasoning(request.occasion, len(items))


def _build_outfit(items: _Combo, score: int, request: OutfitRequest, reasoning: str) -> GeneratedOutfit:
    total = round(sum(p.price for p in items))
    discounted = round(sum(p.discounted_price for p in items))
    return GeneratedOutfit(
        id=f"outfit-{uuid.uuid4().hex[:12]}",
        occasion=request.occasion,
        items=list(items),
        total_price=total,
        discounted_price=discounted if discounted < total else None,
        compatibility_score=score,
        reasoning=reasoning,
        color_scheme=extract_colors(items),
    )


async def generate_outfits(
    *,
    products: Sequence[Product],
    request: OutfitRequest,
    completer: TextCompleter,
    rng: Optional[random.Random] = None,
) -> List[GeneratedOutfit]:
    """
    Compose up to TOP_OUTFITS outfits for `request` from a catalog snapshot.

    Steps: occasion filter -> group by category -> random draws -> score ->
    top 3 (stable on ties) -> AI reasoning per outfit (template on failure).

    Raises InsufficientInventory when fewer than MIN_OUTFIT_PRODUCTS products
    qualify. The random source is request-local; pass a seeded one to pin results.
    """
    rng = rng or random.Random()
    t0 = time.perf_counter()

    filtered = filter_by_occasion(products, request)
    logger.info(
        "outfits start occasion=%s budget=%s catalog=%s qualifying=%s",
        request.occasion, request.budget, len(products), len(filtered),
    )
    if len(filtered) < MIN_OUTFIT_PRODUCTS:
        raise InsufficientInventory(request.occasion, len(filtered))

    groups = group_by_category(filtered)
    combos = draw_combinations(groups, rng)
    logger.debug("outfits categories=%s combinations=%s", list(groups), len(combos))

    scored = [(combo, compatibility_score(combo)) for combo in combos]
    top = sorted(scored, key=lambda pair: pair[1], reverse=True)[:TOP_OUTFITS]

    reasonings = await asyncio.gather(
        *(_reasoning_for(combo, request, completer) for combo, _ in top)
    )
    outfits = [
        _build_outfit(combo, score, request, reasoning)
        for (combo, score), reasoning in zip(top, reasonings)
    ]
    logger.info(
        "outfits done occasion=%s returned=%s scores=%s time=%.3fs",
        request.occasion, len(outfits), [o.compatibility_score for o in outfits],
        time.perf_counter() - t0,
    )
    return outfits
