import logging
import random
import re
import time
from datetime import datetime
from typing import Callable, List, Optional

from stylist.domain.models.chat import ChatMessage, ChatSession
from stylist.domain.models.product import Product
from stylist.domain.repositories.product_repo import CatalogQuery
from stylist.domain.services.completion_svc import TextCompleter, related_searches
from stylist.domain.services.constants import MAX_RESULTS
from stylist.domain.services.extraction import extract
from stylist.domain.services.intents import (
    classify_intent,
    follow_ups_for,
    is_clothing_related,
    is_product_query,
)
from stylist.domain.services.prompts import GENERAL_CONTEXT, search_context
from stylist.domain.services.ranking_svc import rank_products
from stylist.domain.services.suggestions import (
    APOLOGY_REPLY,
    DEFAULT_SUGGESTIONS,
    OFF_TOPIC_REPLY,
    dynamic_suggestions,
    greeting_text,
)

logger = logging.getLogger(__name__)

_FASHION_TALK_RE = re.compile(r"\b(fashion|style|styles|clothes|clothing|wear|wearing|outfits?)\b")


def _bot(text: str, *, products: Optional[List[Product]] = None,
         suggestions: Optional[List[str]] = None,
         follow_ups: Optional[List[str]] = None) -> ChatMessage:
    return ChatMessage(
        text=text,
        is_bot=True,
        products=products or None,
        suggestions=suggestions or None,
        follow_up_questions=follow_ups or None,
    )


async def respond(
    *,
    session: ChatSession,
    text: str,
    catalog: CatalogQuery,
    completer: TextCompleter,
    rng: Optional[random.Random] = None,
    now: Optional[Callable[[], datetime]] = None,
) -> ChatMessage:
    """
    Handle one user message within `session` and return the bot reply.

    Sequence per message:
      1) Extract signals and merge the preference update into the session.
      2) Classify intent.
      3) Greeting: time-of-day greeting, default chips, no search.
      4) Product query outside the clothing domain: fixed refusal, no search.
      5) Product query: rank, ask the completer for copy, attach products/chips.
      6) Anything else: consultant-style completion.

    Both user message and reply are appended to the session. This function
    never raises for collaborator failures; it answers with an apology instead.
    """
    rng = rng or random.Random()
    clock = now or datetime.now
    t0 = time.perf_counter()

    session.append(ChatMessage(text=text, is_bot=False))

    signals, update = extract(text)
    prefs = session.merge(update)
    intent = classify_intent(text)
    follow_ups = follow_ups_for(intent)
    logger.info(
        "chat turn conversation_id=%s intent=%s term=%r max_price=%s",
        session.conversation_id, intent, signals.search_term, signals.max_price,
    )
    logger.debug("session preferences=%s", prefs.model_dump())

    if intent == "greeting":
        reply = _bot(
            greeting_text(clock(), rng),
            suggestions=list(DEFAULT_SUGGESTIONS),
            follow_ups=follow_ups,
        )
        session.append(reply)
        return reply

    product_query = is_product_query(text)
    if product_query and not is_clothing_related(text):
        logger.info("off-topic product query conversation_id=%s", session.conversation_id)
        reply = _bot(OFF_TOPIC_REPLY, suggestions=list(DEFAULT_SUGGESTIONS))
        session.append(reply)
        return reply

    try:
        if product_query:
            products = await rank_products(catalog=catalog, signals=signals)
            context = search_context(intent, signals.search_term, len(products), signals.max_price)
            completion = await completer.complete(text, context)
            suggestions = (
                dynamic_suggestions(products, rng, clock())
                or completion.suggestions
                or await related_searches(completer, text)
                or list(DEFAULT_SUGGESTIONS)
            )
            reply = _bot(
                completion.text,
                products=products[:MAX_RESULTS],
                suggestions=suggestions,
                follow_ups=follow_ups,
            )
        else:
            completion = await completer.complete(text, GENERAL_CONTEXT)
            suggestions = list(DEFAULT_SUGGESTIONS) if _FASHION_TALK_RE.search(text.lower()) else None
            reply = _bot(completion.text, suggestions=suggestions, follow_ups=follow_ups)
    except Exception as e:
        logger.error("chat turn failed conversation_id=%s: %s", session.conversation_id, e)
        reply = _bot(APOLOGY_REPLY)

    session.append(reply)
    logger.info(
        "chat reply conversation_id=%s products=%s time=%.3fs",
        session.conversation_id, len(reply.products or []), time.perf_counter() - t0,
    )
    return reply
