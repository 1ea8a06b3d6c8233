import logging
from pathlib import Path

from community_chat.core.config import Settings
from community_chat.store.backend import DocumentBackend, DocumentKind, JsonFileBackend
from community_chat.store.messages import MessageLedger
from community_chat.store.presence import PresenceTracker
from community_chat.store.stats import StatsAggregator

logger = logging.getLogger(__name__)


class CommunityStore:
    def __init__(self, backend: DocumentBackend) -> None:
        self.backend = backend
        self.messages = MessageLedger(backend)
        self.presence = PresenceTracker(backend)
        self.stats = StatsAggregator(self.messages, self.presence)

    async def ensure_files(self) -> None:
        for kind in DocumentKind:
            if await self.backend.ensure_exists(kind):
                logger.info("Created empty %s document", kind.value)


def build_store(settings: Settings) -> CommunityStore:
    data_dir = Path(settings.data_dir)
    backend = JsonFileBackend(
        messages_path=data_dir / settings.messages_file,
        presence_path=data_dir / settings.presence_file,
    )
    return CommunityStore(backend)
