import logging

from community_chat.store.backend import DocumentBackend, DocumentKind
from community_chat.store.errors import NotFoundError, ValidationError
from community_chat.store.models import MAX_MESSAGES, Message, normalize_message, parse_timestamp

logger = logging.getLogger(__name__)


class MessageLedger:
    """Retention-bounded chat history kept in the messages document."""

    def __init__(self, backend: DocumentBackend, max_messages: int = MAX_MESSAGES) -> None:
        self._backend = backend
        self._max_messages = max_messages

    async def raw_messages(self) -> list[dict]:
        document = await self._backend.load(DocumentKind.MESSAGES)
        return document["messages"]

    async def list_messages(self) -> list[Message]:
        # Unparseable timestamps sort with a NaN key, so their position is unspecified.
        items = sorted(await self.raw_messages(), key=lambda item: parse_timestamp(item.get("timestamp")))
        return [Message.from_document(item) for item in items]

    async def add_message(
        self,
        user_id: str | None,
        user_name: str | None,
        message: str | None,
        timestamp: str | None = None,
    ) -> Message:
        if not user_id or not user_name or not message:
            raise ValidationError("userId, userName and message are required")

        new_message = normalize_message(user_id, user_name, message, timestamp)
        async with self._backend.lock(DocumentKind.MESSAGES):
            document = await self._backend.load(DocumentKind.MESSAGES)
            messages = document["messages"]
            messages.append(new_message.to_document())
            if len(messages) > self._max_messages:
                document["messages"] = messages[-self._max_messages:]
            await self._backend.save(DocumentKind.MESSAGES, document)

        logger.info("Message added by %s", new_message.user_name)
        return new_message

    async def delete_message(self, message_id: str) -> Message:
        async with self._backend.lock(DocumentKind.MESSAGES):
            document = await self._backend.load(DocumentKind.MESSAGES)
            messages = document["messages"]
            index = next((i for i, item in enumerate(messages) if item.get("id") == message_id), None)
            if index is None:
                raise NotFoundError(f"Message {message_id} not found")
            removed = messages.pop(index)
            await self._backend.save(DocumentKind.MESSAGES, document)

        logger.info("Message %s deleted", message_id)
        return Message.from_document(removed)

    async def clear_all(self) -> None:
        async with self._backend.lock(DocumentKind.MESSAGES):
            await self._backend.save(DocumentKind.MESSAGES, DocumentKind.MESSAGES.empty_document())
        logger.info("All messages cleared")
