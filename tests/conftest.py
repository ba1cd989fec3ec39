import random
from typing import List, Optional

import pytest

from stylist.domain.models.product import Product
from stylist.domain.services.completion_svc import Completion
from stylist.domain.services.errors import CompletionError


def make_product(pid, title, *, category="tops", price=500.0, rating=4.0,
                 discount=10.0, description="", brand="Acme") -> Product:
    return Product(
        id=pid,
        title=title,
        description=description,
        price=price,
        discountPercentage=discount,
        rating=rating,
        stock=5,
        brand=brand,
        category=category,
    )


class FakeCatalog:
    """In-memory catalog with the same query semantics as ProductRepo."""

    def __init__(self, products: List[Product], fail: bool = False):
        self.products = products
        self.fail = fail
        self.searches: List[str] = []
        self.batches: List[tuple] = []
        self.latest: List[int] = []

    async def search(self, term: str) -> List[Product]:
        self.searches.append(term)
        if self.fail:
            raise ConnectionError("catalog down")
        t = term.lower()
        return [
            p for p in self.products
            if any(t in f.lower() for f in (p.title, p.description, p.category, p.brand))
        ]

    async def fetch_batch(self, limit: int, offset: int = 0) -> List[Product]:
        self.batches.append((limit, offset))
        if self.fail:
            raise ConnectionError("catalog down")
        ordered = sorted(self.products, key=lambda p: p.id)
        return ordered[offset:offset + limit]

    async def fetch_latest(self, limit: int) -> List[Product]:
        self.latest.append(limit)
        if self.fail:
            raise ConnectionError("catalog down")
        return sorted(self.products, key=lambda p: p.id, reverse=True)[:limit]


class FakeCompleter:
    def __init__(self, text: str = "Here are some picks you'll love!",
                 suggestions: Optional[List[str]] = None, fail: bool = False):
        self.text = text
        self.suggestions = suggestions or []
        self.fail = fail
        self.calls: List[tuple] = []

    async def complete(self, prompt: str, context: str = "") -> Completion:
        self.calls.append((prompt, context))
        if self.fail:
            raise CompletionError("service unavailable")
        return Completion(text=self.text, suggestions=list(self.suggestions))


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def apparel():
    return [
        make_product("1", "Black Cotton T-Shirt", category="tops", price=499, rating=4.5, discount=20),
        make_product("2", "White Graphic T-Shirt", category="tops", price=1299, rating=4.8, discount=5),
        make_product("3", "Blue Slim Jeans", category="jeans", price=1599, rating=4.1, discount=15),
        make_product("4", "Red Casual Shirt", category="shirts", price=899, rating=3.9, discount=0,
                     description="A relaxed casual shirt"),
        make_product("5", "Grey Hoodie", category="hoodies", price=1099, rating=4.3, discount=30),
        make_product("6", "White Sneakers", category="sneakers", price=2499, rating=4.6, discount=12),
        make_product("7", "Navy T-Shirt Pack", category="tops", price=799, rating=4.0, discount=8),
        make_product("8", "Denim Jacket", category="jackets", price=2999, rating=4.4, discount=25),
    ]
