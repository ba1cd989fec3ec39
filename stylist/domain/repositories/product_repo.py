# stylist/domain/repositories/product_repo.py

from __future__ import annotations
import logging
import re
from typing import Any, Dict, List, Protocol

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError

from stylist.domain.models.product import Product
from stylist.domain.services.errors import CatalogUnavailable

logger = logging.getLogger(__name__)


class CatalogQuery(Protocol):
    """
    Catalog collaborator consumed by the ranker and the outfit engine.
    Every call may return fewer items than asked for.
    """

    async def search(self, term: str) -> List[Product]: ...

    async def fetch_batch(self, limit: int, offset: int = 0) -> List[Product]: ...

    async def fetch_latest(self, limit: int) -> List[Product]: ...


class ProductRepo:
    """
    Product catalog backed by the 'products' collection.
    Documents keep the storefront's camelCase keys (discountPercentage, ...).
    """

    SEARCH_FIELDS = ("title", "description", "category", "brand")
    SEARCH_LIMIT = 100

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "products"):
        self.col = db[collection_name]

    @staticmethod
    def _to_products(docs: List[Dict[str, Any]]) -> List[Product]:
        out: List[Product] = []
        for doc in docs:
            try:
                out.append(Product.model_validate(doc))
            except ValidationError as e:
                logger.warning("Skipping malformed product id=%s: %s", doc.get("id"), e.errors()[:1])
        return out

    async def search(self, term: str) -> List[Product]:
        """Case-insensitive substring match across title/description/category/brand."""
        term = (term or "").strip()
        if not term:
            return []
        pattern = {"$regex": re.escape(term), "$options": "i"}
        query = {"$or": [{field: pattern} for field in self.SEARCH_FIELDS]}
        cursor = self.col.find(query, {"_id": 0}).sort("id", 1).limit(self.SEARCH_LIMIT)
        docs = [doc async for doc in cursor]
        logger.debug("catalog search term=%r hits=%s", term, len(docs))
        return self._to_products(docs)

    async def fetch_batch(self, limit: int, offset: int = 0) -> List[Product]:
        """Paginated fetch with a stable ordering on `id`."""
        cursor = self.col.find({}, {"_id": 0}).sort("id", 1).skip(max(0, offset)).limit(max(0, limit))
        docs = [doc async for doc in cursor]
        logger.debug("catalog batch limit=%s offset=%s got=%s", limit, offset, len(docs))
        return self._to_products(docs)

    async def fetch_latest(self, limit: int) -> List[Product]:
        """Highest ids first; ids stand in for arrival order."""
        cursor = self.col.find({}, {"_id": 0}).sort("id", -1).limit(max(0, limit))
        docs = [doc async for doc in cursor]
        logger.debug("catalog latest limit=%s got=%s", limit, len(docs))
        return self._to_products(docs)


class UnavailableCatalog:
    """Stand-in used when MONGO_URI is unset; every query fails with CatalogUnavailable."""

    async def search(self, term: str) -> List[Product]:
        raise CatalogUnavailable("catalog backend is not connected")

    async def fetch_batch(self, limit: int, offset: int = 0) -> List[Product]:
        raise CatalogUnavailable("catalog backend is not connected")

    async def fetch_latest(self, limit: int) -> List[Product]:
        raise CatalogUnavailable("catalog backend is not connected")
