import pytest

from stylist.domain.services.intents import (
    GREETINGS,
    classify_intent,
    follow_ups_for,
    is_clothing_related,
    is_product_query,
)


@pytest.mark.parametrize("greeting", GREETINGS)
def test_greeting_prefix_any_case(greeting):
    assert classify_intent(f"  {greeting.upper()} there, show me jeans") == "greeting"


def test_greeting_must_be_prefix():
    assert classify_intent("show me jeans, hello") != "greeting"


@pytest.mark.parametrize("text", ["high waisted jeans under 2k", "history of denim", "heyday of flares"])
def test_greeting_needs_whole_word(text):
    assert classify_intent(text) != "greeting"


@pytest.mark.parametrize("text", ["hi!", "hello", "hey, any new jackets?", "good morning :)"])
def test_greeting_followed_by_punctuation(text):
    assert classify_intent(text) == "greeting"


@pytest.mark.parametrize("text, intent", [
    ("what size should I pick?", "size_preference"),
    ("my budget is tight", "budget_preference"),
    ("I need something for a wedding", "occasion_preference"),
    ("I love a minimalist style", "style_preference"),
    ("what colour suits me", "color_preference"),
    ("Show me casual t-shirts under ₹1000", "product_search"),
    ("tell me a joke", "general_conversation"),
])
def test_classification(text, intent):
    assert classify_intent(text) == intent


def test_fixed_order_resolves_overlaps():
    # budget is checked before occasion/style
    assert classify_intent("casual budget picks") == "budget_preference"


def test_product_query_detection():
    assert is_product_query("find me a laptop")
    assert is_product_query("jeans")
    assert is_product_query("anything under 2k")
    assert not is_product_query("how are you today")


def test_clothing_relevance():
    assert not is_clothing_related("find me a laptop")
    assert not is_clothing_related("show furniture deals")
    assert is_clothing_related("laptop bag")  # bag is a clothing-adjacent category
    assert is_clothing_related("show me trending stuff")


def test_follow_ups_capped():
    for intent in ("greeting", "product_search", "general_conversation", "unknown"):
        assert 0 < len(follow_ups_for(intent)) <= 3
