import asyncio
import json

import pytest

from community_chat.store.backend import DocumentKind, InMemoryBackend
from community_chat.store.errors import ValidationError
from community_chat.store.models import now_ms
from community_chat.store.presence import PresenceTracker


def make_tracker():
    backend = InMemoryBackend()
    return PresenceTracker(backend), backend


def test_touch_then_list_online():
    tracker, _ = make_tracker()

    asyncio.run(tracker.touch("u1", "Alice"))
    online = asyncio.run(tracker.list_online())

    assert online.count == 1
    assert online.users[0].user_id == "u1"
    assert online.users[0].user_name == "Alice"


def test_stale_touch_is_returned_but_not_online():
    tracker, backend = make_tracker()
    stale_at = now_ms() - 200_000

    record = asyncio.run(tracker.touch("u1", "Alice", stale_at))
    online = asyncio.run(tracker.list_online())

    assert record.last_activity == stale_at
    assert online.count == 0
    assert online.users == []
    assert json.loads(backend.files[DocumentKind.PRESENCE]) == {"users": []}


def test_recent_explicit_activity_counts_as_online():
    tracker, _ = make_tracker()

    asyncio.run(tracker.touch("u1", "Alice", now_ms() - 60_000))

    assert asyncio.run(tracker.list_online()).count == 1


def test_repeated_touch_keeps_one_record_per_user():
    tracker, backend = make_tracker()

    async def scenario():
        await tracker.touch("u1", "Alice")
        await tracker.touch("u1", "Alice Renamed")
        return await tracker.list_online()

    online = asyncio.run(scenario())

    assert online.count == 1
    assert online.users[0].user_name == "Alice Renamed"
    assert len(json.loads(backend.files[DocumentKind.PRESENCE])["users"]) == 1


def test_touch_truncates_user_name():
    tracker, _ = make_tracker()

    record = asyncio.run(tracker.touch("u1", "x" * 70))

    assert record.user_name == "x" * 50


@pytest.mark.parametrize("user_id,user_name", [(None, "Alice"), ("u1", None), ("", "Alice")])
def test_touch_rejects_missing_fields(user_id, user_name):
    tracker, backend = make_tracker()

    with pytest.raises(ValidationError):
        asyncio.run(tracker.touch(user_id, user_name))

    assert DocumentKind.PRESENCE not in backend.files


def test_list_online_compacts_stored_records():
    tracker, backend = make_tracker()
    now = now_ms()
    backend.seed(
        DocumentKind.PRESENCE,
        {
            "users": [
                {"userId": "old", "userName": "Old", "lastActivity": now - 120_000},
                {"userId": "new", "userName": "New", "lastActivity": now},
            ]
        },
    )

    online = asyncio.run(tracker.list_online())

    assert [item.user_id for item in online.users] == ["new"]
    stored = json.loads(backend.files[DocumentKind.PRESENCE])
    assert [item["userId"] for item in stored["users"]] == ["new"]


def test_peek_online_does_not_write_back():
    tracker, backend = make_tracker()
    now = now_ms()
    backend.seed(
        DocumentKind.PRESENCE,
        {"users": [{"userId": "old", "userName": "Old", "lastActivity": now - 500_000}]},
    )
    before = backend.files[DocumentKind.PRESENCE]

    assert asyncio.run(tracker.peek_online()) == []
    assert backend.files[DocumentKind.PRESENCE] == before
