from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stylist.domain.models.chat import parse_price
from stylist.domain.models.product import Product

Occasion = Literal["casual", "formal", "party", "gym"]


class OutfitRequest(BaseModel):
    occasion: Occasion
    budget: Optional[float] = None
    color_preference: List[str] = Field(default_factory=list)
    style: Optional[str] = None
    exclude_categories: List[str] = Field(default_factory=list)

    @field_validator("budget", mode="before")
    @classmethod
    def _lenient_budget(cls, v):
        return parse_price(v)


class GeneratedOutfit(BaseModel):
    """
    Items belong to mutually distinct categories and never repeat.
    """
    id: str
    occasion: str
    items: List[Product]
    total_price: float
    discounted_price: Optional[float] = None
    compatibility_score: int = Field(ge=0, le=100)
    reasoning: str = ""
    color_scheme: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(frozen=True)
