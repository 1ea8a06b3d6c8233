import logging

from community_chat.store.backend import DocumentBackend, DocumentKind
from community_chat.store.errors import ValidationError
from community_chat.store.models import OnlineUsers, PresenceRecord, is_stale, normalize_presence, now_ms

logger = logging.getLogger(__name__)


def prune_stale(users: list[dict], now: int) -> list[dict]:
    return [item for item in users if not is_stale(item.get("lastActivity"), now)]


class PresenceTracker:
    """Per-user liveness records; expiry is derived from ``lastActivity`` on every access."""

    def __init__(self, backend: DocumentBackend) -> None:
        self._backend = backend

    async def touch(
        self,
        user_id: str | None,
        user_name: str | None,
        last_activity: int | float | None = None,
    ) -> PresenceRecord:
        if not user_id or not user_name:
            raise ValidationError("userId and userName are required")

        record = normalize_presence(user_id, user_name, last_activity)
        async with self._backend.lock(DocumentKind.PRESENCE):
            document = await self._backend.load(DocumentKind.PRESENCE)
            users = document["users"]
            index = next((i for i, item in enumerate(users) if item.get("userId") == user_id), None)
            if index is None:
                users.append(record.to_document())
            else:
                users[index] = record.to_document()

            # May drop the record just written when the caller sent a stale lastActivity.
            document["users"] = prune_stale(users, now_ms())
            await self._backend.save(DocumentKind.PRESENCE, document)

        return record

    async def list_online(self) -> OnlineUsers:
        async with self._backend.lock(DocumentKind.PRESENCE):
            document = await self._backend.load(DocumentKind.PRESENCE)
            active = prune_stale(document["users"], now_ms())
            pruned = len(document["users"]) - len(active)
            document["users"] = active
            await self._backend.save(DocumentKind.PRESENCE, document)

        if pruned:
            logger.debug("Pruned %d stale presence records", pruned)
        return OnlineUsers(users=[PresenceRecord.from_document(item) for item in active])

    async def peek_online(self) -> list[PresenceRecord]:
        document = await self._backend.load(DocumentKind.PRESENCE)
        return [PresenceRecord.from_document(item) for item in prune_stale(document["users"], now_ms())]
