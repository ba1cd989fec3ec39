import pytest

from conftest import FakeCatalog, make_product
from stylist.domain.models.chat import SearchSignals
from stylist.domain.services.extraction import extract_signals
from stylist.domain.services.ranking_svc import (
    apply_filters,
    rank_products,
    relevance_score,
    search_strategies,
)


async def test_scenario_excludes_over_budget(apparel):
    catalog = FakeCatalog(apparel)
    signals = extract_signals("Show me casual t-shirts under ₹1000")

    ranked = await rank_products(catalog=catalog, signals=signals)

    assert ranked
    assert all(p.price <= 1000 for p in ranked)
    assert "2" not in [p.id for p in ranked]  # 1299 t-shirt filtered out
    assert catalog.searches[0] == "t-shirt"


async def test_never_more_than_six():
    products = [make_product(str(i), f"Shirt {i}", category="shirts") for i in range(40)]
    ranked = await rank_products(catalog=FakeCatalog(products), signals=SearchSignals(search_term="shirt"))
    assert len(ranked) == 6


async def test_empty_catalog_returns_empty():
    assert await rank_products(catalog=FakeCatalog([]), signals=SearchSignals(search_term="shirt")) == []
    assert await rank_products(catalog=FakeCatalog([]), signals=SearchSignals()) == []


async def test_strategies_stop_at_first_hit():
    products = [make_product("1", "Soft Tee Top", category="tops")]
    catalog = FakeCatalog(products)
    signals = SearchSignals(search_term="t-shirt", alternate_terms=["tshirt", "tee"])

    ranked = await rank_products(catalog=catalog, signals=signals)

    assert [p.id for p in ranked] == ["1"]
    assert catalog.searches == ["t-shirt", "tshirt", "tee"]


async def test_falls_back_to_clothing():
    products = [make_product("1", "Plain Kurta", description="cotton clothing")]
    catalog = FakeCatalog(products)
    ranked = await rank_products(catalog=catalog, signals=SearchSignals(search_term="velvet cape"))
    assert catalog.searches == ["velvet cape", "velvet", "clothing"]
    assert [p.id for p in ranked] == ["1"]


def test_search_strategies_dedupe():
    signals = SearchSignals(search_term="jeans", alternate_terms=["denim", "jeans"])
    assert search_strategies(signals) == ["jeans", "denim", "clothing"]


async def test_latest_sorted_by_descending_id(apparel):
    catalog = FakeCatalog(apparel)
    ranked = await rank_products(catalog=catalog, signals=SearchSignals(search_term="latest"))
    ids = [p.id for p in ranked]
    assert ids == sorted(ids, reverse=True)
    assert ids[0] == "8"
    assert catalog.searches == []


async def test_latest_from_message_without_category(apparel):
    catalog = FakeCatalog(apparel)
    ranked = await rank_products(catalog=catalog, signals=extract_signals("what are the latest arrivals?"))
    assert [p.id for p in ranked][:2] == ["8", "7"]


async def test_latest_reaches_past_the_first_batch():
    products = [make_product(f"{i:03d}", f"Linen Shirt {i}", category="shirts") for i in range(1, 61)]
    catalog = FakeCatalog(products)

    ranked = await rank_products(catalog=catalog, signals=SearchSignals(search_term="latest"))

    assert [p.id for p in ranked] == ["060", "059", "058", "057", "056", "055"]
    assert catalog.latest == [30]
    assert catalog.batches == []


async def test_trending_when_no_term(apparel):
    ranked = await rank_products(catalog=FakeCatalog(apparel), signals=SearchSignals())
    # hoodie: 4.3*2 + 30/10 = 11.6, ahead of the jacket at 11.3
    assert ranked[0].id == "5"
    assert len(ranked) == 6


async def test_max_price_applies_to_every_branch(apparel):
    for signals in (SearchSignals(max_price=1000), SearchSignals(search_term="latest", max_price=1000)):
        ranked = await rank_products(catalog=FakeCatalog(apparel), signals=signals)
        assert ranked
        assert all(p.price <= 1000 for p in ranked)


def test_price_filter_takes_precedence_over_colors(apparel):
    out = apply_filters(apparel, SearchSignals(max_price=900, colors=["white"]))
    assert {p.id for p in out} == {"1", "4", "7"}


def test_color_filter_title_and_description():
    products = [
        make_product("1", "Summer Dress", description="bright red print"),
        make_product("2", "Blue Dress"),
        make_product("3", "Green Dress"),
    ]
    out = apply_filters(products, SearchSignals(colors=["RED", "blue"]))
    assert [p.id for p in out] == ["1", "2"]


def test_relevance_score_components():
    p = make_product("1", "Black Shirt", price=500, rating=4.0, discount=20)
    assert relevance_score(p, "", None) == pytest.approx(10.0)
    assert relevance_score(p, "shirt", None) == pytest.approx(15.0)
    assert relevance_score(p, "shirt", 1000) == pytest.approx(16.5)
    # over the ceiling the price bonus turns negative
    assert relevance_score(p, "", 250) == pytest.approx(7.0)


async def test_ties_keep_catalog_order():
    products = [make_product(str(i), f"Shirt {i}", rating=4, discount=0) for i in range(1, 5)]
    ranked = await rank_products(catalog=FakeCatalog(products), signals=SearchSignals(search_term="shirt"))
    assert [p.id for p in ranked] == ["1", "2", "3", "4"]


async def test_catalog_errors_propagate():
    with pytest.raises(ConnectionError):
        await rank_products(catalog=FakeCatalog([], fail=True), signals=SearchSignals(search_term="shirt"))
