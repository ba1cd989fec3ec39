from __future__ import annotations

import math
import uuid
from datetime import datetime, timezone
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stylist.domain.models.product import Product

Intent = Literal[
    "greeting",
    "size_preference",
    "budget_preference",
    "occasion_preference",
    "style_preference",
    "color_preference",
    "product_search",
    "general_conversation",
]


def parse_price(value: Any) -> Optional[float]:
    """
    Best-effort price ceiling parsing. Anything that is not a finite positive
    number (after stripping currency symbols and separators) becomes None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        num = float(value)
    else:
        text = str(value).strip().lower().replace(",", "").replace("₹", "").replace("rs", "")
        try:
            num = float(text)
        except ValueError:
            return None
    if not math.isfinite(num) or num <= 0:
        return None
    return num


class SearchSignals(BaseModel):
    """Structured shopping signals derived from one user message."""
    search_term: str = ""
    category: Optional[str] = None
    alternate_terms: List[str] = Field(default_factory=list)
    max_price: Optional[float] = None
    colors: List[str] = Field(default_factory=list)
    original_text: str = ""
    size: Optional[str] = None
    occasions: List[str] = Field(default_factory=list)
    style: Optional[str] = None
    season: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("max_price", mode="before")
    @classmethod
    def _lenient_price(cls, v):
        return parse_price(v)


class UserPreferences(BaseModel):
    size: Optional[str] = None
    style: Optional[str] = None
    budget: Optional[float] = None
    colors: List[str] = Field(default_factory=list)
    occasions: List[str] = Field(default_factory=list)
    last_search: Optional[str] = None

    model_config = ConfigDict(frozen=True)


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == []


def merge_preferences(existing: UserPreferences, update: UserPreferences) -> UserPreferences:
    """
    Shallow merge: every non-empty field of `update` overwrites the same field
    of `existing`; empty fields leave the existing value untouched.
    """
    changes = {
        name: value
        for name, value in update.model_dump().items()
        if not _is_empty(value)
    }
    if not changes:
        return existing
    return existing.model_copy(update=changes)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ChatMessage(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    text: str
    is_bot: bool
    timestamp: datetime = Field(default_factory=_now)
    products: Optional[List[Product]] = None
    suggestions: Optional[List[str]] = None
    follow_up_questions: Optional[List[str]] = None

    model_config = ConfigDict(frozen=True)


class ChatSession(BaseModel):
    """
    One conversation. Owned by a single caller at a time; the message list is
    append-only and preferences are replaced wholesale on merge.
    """
    conversation_id: str
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    messages: List[ChatMessage] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_now)

    def append(self, message: ChatMessage) -> None:
        self.messages.append(message)

    def merge(self, update: UserPreferences) -> UserPreferences:
        self.preferences = merge_preferences(self.preferences, update)
        return self.preferences
