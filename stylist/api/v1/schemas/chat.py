# stylist/api/v1/schemas/chat.py
from typing import List, Optional

from pydantic import BaseModel, Field

from stylist.domain.models.chat import ChatMessage, UserPreferences
from stylist.domain.models.outfit import GeneratedOutfit


class ChatIn(BaseModel):
    text: str = Field(min_length=1, max_length=1000)


class SessionOut(BaseModel):
    conversation_id: str
    preferences: UserPreferences
    messages: List[ChatMessage]
    count: int


class OutfitsOut(BaseModel):
    occasion: str
    outfits: List[GeneratedOutfit]
    count: int
    message: Optional[str] = None
