from community_chat.store.messages import MessageLedger
from community_chat.store.models import DAY_MS, Stats, now_ms, parse_timestamp
from community_chat.store.presence import PresenceTracker


class StatsAggregator:
    def __init__(self, ledger: MessageLedger, tracker: PresenceTracker) -> None:
        self._ledger = ledger
        self._tracker = tracker

    async def compute_stats(self) -> Stats:
        # The two documents are read separately; counts may come from different moments.
        messages = await self._ledger.raw_messages()
        online = await self._tracker.peek_online()

        now = now_ms()
        # NaN compares false, so unparseable timestamps never count as recent.
        recent = [item for item in messages if now - parse_timestamp(item.get("timestamp")) < DAY_MS]
        return Stats(
            total_messages=len(messages),
            online_users=len(online),
            unique_users=len({item.get("userId") for item in messages}),
            messages_last_24h=len(recent),
        )
