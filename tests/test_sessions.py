from stylist.domain.models.chat import ChatMessage, UserPreferences
from stylist.domain.repositories.session_repo import (
    WELCOME_TEXT,
    InMemorySessionRepo,
    RedisSessionRepo,
    get_or_create,
)


class _FakeRedis:
    def __init__(self):
        self.store, self.ttls = {}, {}

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.store[key] = value
        self.ttls[key] = ex

    async def delete(self, key):
        return 1 if self.store.pop(key, None) is not None else 0


async def test_in_memory_lifecycle():
    repo = InMemorySessionRepo()
    session = await get_or_create(repo, "abc")
    assert [m.text for m in session.messages] == [WELCOME_TEXT]
    assert await get_or_create(repo, "abc") is session
    assert await repo.end("abc") is True
    assert await repo.get("abc") is None
    assert await repo.end("abc") is False


async def test_redis_roundtrip_keeps_messages_and_preferences():
    redis = _FakeRedis()
    repo = RedisSessionRepo(redis, key_prefix="chat", ttl=60)
    session = await get_or_create(repo, "xyz")
    session.merge(UserPreferences(size="L", colors=["navy"]))
    session.append(ChatMessage(text="show me jackets", is_bot=False))
    await repo.save(session)

    loaded = await repo.get("xyz")
    assert loaded.preferences == session.preferences
    assert [m.text for m in loaded.messages] == [WELCOME_TEXT, "show me jackets"]
    assert redis.ttls["chat:xyz"] == 60

    assert await repo.end("xyz") is True
    assert await repo.get("xyz") is None
