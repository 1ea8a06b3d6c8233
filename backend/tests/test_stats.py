import asyncio

from community_chat.store.backend import DocumentKind, InMemoryBackend
from community_chat.store.community import CommunityStore
from community_chat.store.models import now_ms, to_iso


def test_stats_after_three_messages_from_two_users():
    store = CommunityStore(InMemoryBackend())

    async def scenario():
        await store.messages.add_message("u1", "Alice", "one")
        await store.messages.add_message("u2", "Bob", "two")
        await store.messages.add_message("u1", "Alice", "three")
        await store.presence.touch("u1", "Alice")
        return await store.stats.compute_stats()

    stats = asyncio.run(scenario())

    assert stats.total_messages == 3
    assert stats.unique_users == 2
    assert stats.online_users == 1
    assert stats.messages_last_24h == 3


def test_messages_last_24h_skips_old_and_unparseable_timestamps():
    backend = InMemoryBackend()
    now = now_ms()
    backend.seed(
        DocumentKind.MESSAGES,
        {
            "messages": [
                {"id": "a", "userId": "u1", "timestamp": to_iso(now - 60_000)},
                {"id": "b", "userId": "u2", "timestamp": to_iso(now - 2 * 24 * 60 * 60 * 1000)},
                {"id": "c", "userId": "u3", "timestamp": "yesterday-ish"},
                {"id": "d", "userId": "u1", "timestamp": to_iso(now + 60_000)},
            ]
        },
    )
    backend.seed(
        DocumentKind.PRESENCE,
        {"users": [{"userId": "u9", "userName": "Gone", "lastActivity": now - 300_000}]},
    )
    store = CommunityStore(backend)

    stats = asyncio.run(store.stats.compute_stats())

    assert stats.to_document() == {
        "totalMessages": 4,
        "onlineUsers": 0,
        "uniqueUsers": 3,
        "messagesLast24h": 2,
    }


def test_ensure_files_creates_both_documents():
    backend = InMemoryBackend()
    store = CommunityStore(backend)

    asyncio.run(store.ensure_files())

    assert backend.files[DocumentKind.MESSAGES] == '{\n  "messages": []\n}'
    assert backend.files[DocumentKind.PRESENCE] == '{\n  "users": []\n}'
