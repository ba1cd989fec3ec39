import logging
import re
import time
from typing import List, Optional

from stylist.domain.models.chat import SearchSignals
from stylist.domain.models.product import Product
from stylist.domain.repositories.product_repo import CatalogQuery
from stylist.domain.services.constants import (
    FALLBACK_TERM,
    LATEST_BATCH,
    LATEST_TERMS,
    MAX_RESULTS,
    PRICE_FIT_BONUS,
    TITLE_MATCH_BONUS,
    TRENDING_BATCH,
)

logger = logging.getLogger(__name__)

_RECENCY_RE = re.compile(r"\b(latest|newest|new arrivals?|recent|just in)\b")


def trending_score(p: Product) -> float:
    return p.rating * 2 + p.discount_percentage / 10


def relevance_score(p: Product, term: str, max_price: Optional[float]) -> float:
    """
    rating*2 + discount/10, +5 when the title contains the search term, plus a
    price-fit bonus of 3*(1 - price/max_price) when a ceiling is set.
    """
    score = trending_score(p)
    if term and term.lower() in p.title.lower():
        score += TITLE_MATCH_BONUS
    if max_price:
        score += PRICE_FIT_BONUS * (1 - p.price / max_price)
    return score


def is_latest_request(signals: SearchSignals) -> bool:
    term = signals.search_term.strip().lower()
    if term in LATEST_TERMS:
        return True
    # no category was named, but the shopper asked for new stock
    return signals.category is None and bool(_RECENCY_RE.search(signals.original_text.lower()))


def search_strategies(signals: SearchSignals) -> List[str]:
    """Exact term, each alternate synonym, the term's first word, then the generic fallback."""
    term = signals.search_term.strip()
    ordered = [term, *signals.alternate_terms]
    if term:
        ordered.append(term.split()[0])
    ordered.append(FALLBACK_TERM)
    seen, out = set(), []
    for t in ordered:
        key = t.strip().lower()
        if key and key not in seen:
            seen.add(key)
            out.append(t.strip())
    return out


def apply_filters(products: List[Product], signals: SearchSignals) -> List[Product]:
    """
    Price ceiling (price <= max) when set; otherwise the color filter on
    title+description. The two filters are never combined.
    """
    if signals.max_price is not None:
        return [p for p in products if p.price <= signals.max_price]
    if signals.colors:
        wanted = [c.lower() for c in signals.colors]
        return [
            p for p in products
            if any(c in f"{p.title} {p.description}".lower() for c in wanted)
        ]
    return products


async def rank_products(*, catalog: CatalogQuery, signals: SearchSignals, limit: int = MAX_RESULTS) -> List[Product]:
    """
    Heuristic product ranking for one chat message.

    Flow:
      1) "latest" requests: the catalog's highest ids, descending, no scoring.
      2) No search term: trending request, ordered by rating/discount.
      3) Otherwise try search strategies in order and stop at the first hit.
      4) Filter (price xor color), score, stable sort, cut to `limit`.

    Catalog errors propagate; the conversation layer owns the fallback.
    """
    t0 = time.perf_counter()
    limit = min(limit, MAX_RESULTS)

    if is_latest_request(signals):
        batch = await catalog.fetch_latest(LATEST_BATCH)
        ranked = sorted(apply_filters(batch, signals), key=lambda p: p.id, reverse=True)[:limit]
        logger.info("rank latest batch=%s returned=%s", len(batch), len(ranked))
        return ranked

    if not signals.search_term.strip():
        batch = await catalog.fetch_batch(TRENDING_BATCH, 0)
        ranked = sorted(apply_filters(batch, signals), key=trending_score, reverse=True)[:limit]
        logger.info("rank trending batch=%s returned=%s", len(batch), len(ranked))
        return ranked

    candidates: List[Product] = []
    used_term = None
    for term in search_strategies(signals):
        candidates = await catalog.search(term)
        logger.debug("search strategy term=%r hits=%s", term, len(candidates))
        if candidates:
            used_term = term
            break

    filtered = apply_filters(candidates, signals)
    # sorted() is stable, so ties keep catalog order
    ranked = sorted(
        filtered,
        key=lambda p: relevance_score(p, signals.search_term, signals.max_price),
        reverse=True,
    )[:limit]

    logger.info(
        "rank term=%r strategy=%r candidates=%s filtered=%s returned=%s time=%.3fs",
        signals.search_term, used_term, len(candidates), len(filtered), len(ranked),
        time.perf_counter() - t0,
    )
    return ranked
