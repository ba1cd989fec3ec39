from typing import Optional, Sequence

from stylist.domain.models.product import Product


def system_prompt(context: str = "") -> str:
    base = "You are a helpful shopping assistant for a fashion e-commerce store."
    return f"{base}\n{context}".strip()


def chat_task(user_message: str) -> str:
    return (
        f'User message: "{user_message}"\n\n'
        "Please provide:\n"
        "1. A helpful, friendly response (max 50 words)\n"
        "2. 4 relevant follow-up suggestions that users might ask (each max 6 words)\n\n"
        "Format your response as JSON:\n"
        '{"response": "your response here", '
        '"suggestions": ["suggestion 1", "suggestion 2", "suggestion 3", "suggestion 4"]}\n\n'
        'Make suggestions specific to shopping like "Show me red dresses", "Find shoes under ₹2000".'
    )


def search_context(intent: str, term: str, found: int, max_price: Optional[float]) -> str:
    parts = [f"The user intent is {intent}."]
    if term:
        parts.append(f'They searched for "{term}".')
    if max_price:
        parts.append(f"Their budget is ₹{int(max_price)}.")
    if found:
        parts.append(f"We found {found} matching products that are shown below your reply; mention them briefly.")
    else:
        parts.append("We found no matching products; suggest a broader search.")
    return " ".join(parts)


GENERAL_CONTEXT = (
    "You are a friendly fashion consultant. Keep the conversation about clothing, "
    "styling and shopping; gently steer unrelated topics back to fashion."
)

STYLIST_CONTEXT = "You are a professional fashion stylist with expertise in creating cohesive outfits."


def stylist_task(
    occasion: str,
    items: Sequence[Product],
    colors: Sequence[str] = (),
    style: Optional[str] = None,
) -> str:
    lines = "\n".join(f"{i}. {p.title} (₹{p.price:g})" for i, p in enumerate(items, start=1))
    prefs = ""
    if colors:
        prefs += f"\nThe shopper likes these colors: {', '.join(colors)}."
    if style:
        prefs += f"\nTheir style is {style}."
    return (
        f"Explain why this outfit works well for {occasion}:\n\n"
        f"Items:\n{lines}\n{prefs}\n\n"
        "Provide a brief, enthusiastic 2-sentence explanation focusing on style, color harmony, "
        "and occasion appropriateness. Keep it under 50 words."
    )


RELATED_SEARCH_CONTEXT = "You suggest follow-up product searches for a fashion store."


def related_searches_task(query: str) -> str:
    return (
        f'Generate 4 related product search suggestions for: "{query}"\n\n'
        'Make them specific shopping queries like "Show me [item] under ₹[price]" or "Find [color] [item]".\n'
        "Return only the suggestions, one per line."
    )
