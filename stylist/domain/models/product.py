from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List


class Review(BaseModel):
    rating: float = 0.0
    comment: str = ""
    reviewer_name: str = Field(default="", alias="reviewerName")
    date: Optional[str] = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ProductMeta(BaseModel):
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Product(BaseModel):
    """
    Catalog snapshot of a product. The core only ever reads these.
    Accepts the catalog's camelCase keys as well as the Python field names.
    """
    id: str
    title: str
    description: str = ""
    price: float = 0.0
    discount_percentage: float = Field(default=0.0, ge=0, le=100, alias="discountPercentage")
    rating: float = Field(default=0.0, ge=0, le=5)
    stock: int = Field(default=0, ge=0)
    brand: str = ""
    category: str = ""
    thumbnail: str = ""
    images: List[str] = Field(default_factory=list)
    reviews: List[Review] = Field(default_factory=list)
    meta: Optional[ProductMeta] = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)  # immutable = safe

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v):
        # catalogs ship numeric ids; ordering is done on the string form
        return str(v) if v is not None else v

    @field_validator("description", "brand", "category", "thumbnail", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return "" if v is None else v

    @property
    def discounted_price(self) -> float:
        return self.price * (1 - self.discount_percentage / 100)
