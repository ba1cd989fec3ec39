# stylist/domain/repositories/session_repo.py
from __future__ import annotations
import logging
from typing import Dict, Optional, Protocol

from redis.asyncio import Redis

from stylist.domain.models.chat import ChatMessage, ChatSession

logger = logging.getLogger(__name__)

WELCOME_TEXT = (
    "Hello! I'm your shopping assistant. I can help you find products. "
    "Try asking me something like 'show me shirts under 1000' or 'I need a red dress'."
)


class SessionRepo(Protocol):
    async def get(self, conversation_id: str) -> Optional[ChatSession]: ...

    async def save(self, session: ChatSession) -> None: ...

    async def end(self, conversation_id: str) -> bool: ...


def new_session(conversation_id: str) -> ChatSession:
    session = ChatSession(conversation_id=conversation_id)
    session.append(ChatMessage(text=WELCOME_TEXT, is_bot=True))
    return session


async def get_or_create(repo: SessionRepo, conversation_id: str) -> ChatSession:
    """Sessions start on the first message of a conversation."""
    session = await repo.get(conversation_id)
    if session is None:
        logger.info("Starting chat session conversation_id=%s", conversation_id)
        session = new_session(conversation_id)
        await repo.save(session)
    return session


class RedisSessionRepo:
    """
    Chat sessions serialized as JSON in Redis.
    Key: "{prefix}:{conversation_id}", refreshed TTL on every save.
    """
    def __init__(self, redis: Redis, key_prefix: str = "chat", ttl: int = 7200):
        self.cache = redis
        self.prefix = key_prefix
        self.ttl = ttl

    def key(self, conversation_id: str) -> str:
        return f"{self.prefix}:{conversation_id}"

    async def get(self, conversation_id: str) -> Optional[ChatSession]:
        raw = await self.cache.get(self.key(conversation_id))
        if raw:
            return ChatSession.model_validate_json(raw)
        return None

    async def save(self, session: ChatSession) -> None:
        await self.cache.set(self.key(session.conversation_id), session.model_dump_json(), ex=self.ttl)

    async def end(self, conversation_id: str) -> bool:
        return bool(await self.cache.delete(self.key(conversation_id)))


class InMemorySessionRepo:
    """Process-local sessions for when Redis is not configured. One instance per app."""
    def __init__(self):
        self._sessions: Dict[str, ChatSession] = {}

    async def get(self, conversation_id: str) -> Optional[ChatSession]:
        return self._sessions.get(conversation_id)

    async def save(self, session: ChatSession) -> None:
        self._sessions[session.conversation_id] = session

    async def end(self, conversation_id: str) -> bool:
        return self._sessions.pop(conversation_id, None) is not None
