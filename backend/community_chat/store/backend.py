"""Whole-document JSON persistence for the two community collections.

Each collection is one JSON file that is read and rewritten in full on every
operation. Reads never fail: an absent or unreadable file yields a fresh empty
document, and ``load_result`` reports which of the two happened. Writes go to a
temporary file that is renamed over the target.
"""
import asyncio
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import anyio

from community_chat.store.errors import StorageError

logger = logging.getLogger(__name__)


class DocumentKind(str, Enum):
    MESSAGES = "messages"
    PRESENCE = "presence"

    @property
    def collection_key(self) -> str:
        return "messages" if self is DocumentKind.MESSAGES else "users"

    def empty_document(self) -> dict[str, list]:
        return {self.collection_key: []}


class LoadStatus(str, Enum):
    OK = "ok"
    ABSENT = "absent"
    CORRUPT = "corrupt"


@dataclass
class LoadResult:
    status: LoadStatus
    document: dict[str, Any]


def serialize_document(document: dict[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


class DocumentBackend(ABC):
    """Storage for the messages and presence documents.

    Subclasses only move raw text; parsing, fallback and serialization live here.
    """

    def __init__(self) -> None:
        self._locks = {kind: asyncio.Lock() for kind in DocumentKind}

    def lock(self, kind: DocumentKind) -> asyncio.Lock:
        return self._locks[kind]

    @abstractmethod
    async def read_text(self, kind: DocumentKind) -> str | None:
        """Return the stored text, or None when nothing is stored."""

    @abstractmethod
    async def write_text(self, kind: DocumentKind, text: str) -> None:
        ...

    @abstractmethod
    async def exists(self, kind: DocumentKind) -> bool:
        ...

    async def load_result(self, kind: DocumentKind) -> LoadResult:
        try:
            text = await self.read_text(kind)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s document (%s), using an empty one", kind.value, exc)
            return LoadResult(LoadStatus.CORRUPT, kind.empty_document())

        if text is None:
            return LoadResult(LoadStatus.ABSENT, kind.empty_document())

        try:
            document = json.loads(text)
        except ValueError:
            logger.warning("Corrupt %s document, using an empty one", kind.value)
            return LoadResult(LoadStatus.CORRUPT, kind.empty_document())

        items = document.get(kind.collection_key) if isinstance(document, dict) else None
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            logger.warning("Unexpected shape in %s document, using an empty one", kind.value)
            return LoadResult(LoadStatus.CORRUPT, kind.empty_document())

        return LoadResult(LoadStatus.OK, document)

    async def load(self, kind: DocumentKind) -> dict[str, Any]:
        return (await self.load_result(kind)).document

    async def save(self, kind: DocumentKind, document: dict[str, Any]) -> None:
        try:
            await self.write_text(kind, serialize_document(document))
        except OSError as exc:
            raise StorageError(f"Failed to write {kind.value} document: {exc}") from exc

    async def ensure_exists(self, kind: DocumentKind) -> bool:
        """Create the document with its empty default if it is missing. Returns True if created."""
        if await self.exists(kind):
            return False
        await self.save(kind, kind.empty_document())
        return True


class JsonFileBackend(DocumentBackend):
    def __init__(self, messages_path: Path | str, presence_path: Path | str) -> None:
        super().__init__()
        self.paths = {
            DocumentKind.MESSAGES: anyio.Path(messages_path),
            DocumentKind.PRESENCE: anyio.Path(presence_path),
        }

    async def read_text(self, kind: DocumentKind) -> str | None:
        try:
            return await self.paths[kind].read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    async def write_text(self, kind: DocumentKind, text: str) -> None:
        target = self.paths[kind]
        await target.parent.mkdir(parents=True, exist_ok=True)
        tmp = target.with_name(target.name + ".tmp")
        try:
            await tmp.write_text(text, encoding="utf-8")
            await tmp.replace(target)
        except BaseException:
            await tmp.unlink(missing_ok=True)
            raise

    async def exists(self, kind: DocumentKind) -> bool:
        return await self.paths[kind].exists()


class InMemoryBackend(DocumentBackend):
    def __init__(self) -> None:
        super().__init__()
        self.files: dict[DocumentKind, str] = {}

    def seed_raw(self, kind: DocumentKind, text: str) -> None:
        self.files[kind] = text

    def seed(self, kind: DocumentKind, document: dict[str, Any]) -> None:
        self.files[kind] = serialize_document(document)

    async def read_text(self, kind: DocumentKind) -> str | None:
        return self.files.get(kind)

    async def write_text(self, kind: DocumentKind, text: str) -> None:
        self.files[kind] = text

    async def exists(self, kind: DocumentKind) -> bool:
        return kind in self.files
