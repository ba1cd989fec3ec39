import pytest

from stylist.domain.models.chat import SearchSignals, UserPreferences, merge_preferences
from stylist.domain.services.extraction import (
    extract,
    extract_category,
    extract_colors,
    extract_price,
    extract_size,
    extract_signals,
    fallback_term,
)


@pytest.mark.parametrize("text, expected", [
    ("under ₹2000", 2000),
    ("under 2k", 2000),
    ("shoes below 1500", 1500),
    ("something for ₹500", 500),
    ("budget 500", 500),
    ("budget 50", 50000),
    ("jeans under ₹1,200", 1200),
    ("around 3 thousand", 3000),
])
def test_price_extraction(text, expected):
    assert extract_price(text) == expected


def test_price_first_pattern_wins():
    # "under" pattern is tried before the bare currency pattern
    assert extract_price("under 700 but ₹900 is fine") == 700


def test_no_price():
    assert extract_price("show me red dresses") is None
    assert extract_signals("show me red dresses").max_price is None


@pytest.mark.parametrize("text", [
    "black trousers 32 waist",
    "show me sneakers 9 uk",
    "joggers in dark colours 40",
])
def test_currency_marker_needs_word_start(text):
    assert extract_price(text) is None


def test_trailing_rs_keeps_color_filter():
    signals, prefs = extract("black trousers 32 waist")
    assert signals.max_price is None
    assert signals.colors == ["black"]
    assert prefs.budget is None


def test_rs_prefix_still_counts():
    assert extract_price("jackets rs. 2500") == 2500
    assert extract_price("tops under rs 800") == 800


def test_category_table_order_beats_specificity():
    category, alternates = extract_category("casual t-shirts please")
    assert category == "t-shirt"
    assert "tshirt" in alternates
    assert "t-shirt" not in alternates

    # "shirt" is declared before "jeans", so it wins even though both appear
    assert extract_category("a shirt to go with my jeans")[0] == "shirt"


def test_category_needs_word_start():
    assert extract_category("cheap laptops")[0] is None


def test_fallback_term_longest_leftmost():
    assert fallback_term("show me some scarves") == "scarves"
    # equal lengths: leftmost wins
    assert fallback_term("find velvet kimono") == "velvet"
    assert fallback_term("hi") == ""


def test_colors_all_matches():
    assert sorted(extract_colors("Black or white, maybe navy")) == ["black", "navy", "white"]
    assert extract_colors("plain shirt") == []


@pytest.mark.parametrize("text, expected", [
    ("I wear size M", "M"),
    ("xl please", "XL"),
    ("something in medium", "M"),
    ("I'm looking for t-shirts", None),
])
def test_size(text, expected):
    assert extract_size(text) == expected


def test_occasions_multi_style_single():
    s = extract_signals("a classic vintage look for office and wedding")
    assert s.occasions == ["office", "wedding"]
    assert s.style == "classic"


def test_scenario_casual_tshirts():
    signals, update = extract("Show me casual t-shirts under ₹1000")
    assert signals.category == "t-shirt"
    assert signals.search_term == "t-shirt"
    assert signals.max_price == 1000
    assert signals.occasions == ["casual"]
    assert update.budget == 1000
    assert update.last_search == "t-shirt"


def test_max_price_parsing_is_lenient():
    assert SearchSignals(max_price="1,500").max_price == 1500
    assert SearchSignals(max_price="cheap").max_price is None
    assert SearchSignals(max_price=-4).max_price is None


def test_merge_empty_update_is_noop():
    prefs = UserPreferences(size="M", budget=2000, colors=["red"], last_search="jeans")
    assert merge_preferences(prefs, UserPreferences()) == prefs


def test_merge_overwrites_non_empty_fields_only():
    prefs = UserPreferences(size="M", budget=2000, colors=["red"])
    merged = merge_preferences(prefs, UserPreferences(budget=900, colors=[], style="bold"))
    assert merged.size == "M"
    assert merged.budget == 900
    assert merged.colors == ["red"]
    assert merged.style == "bold"
