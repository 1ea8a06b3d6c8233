import math
import random
import string
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

MAX_USER_NAME_LENGTH = 50
MAX_MESSAGE_LENGTH = 500
MAX_MESSAGES = 500
PRESENCE_TTL_MS = 2 * 60 * 1000
DAY_MS = 24 * 60 * 60 * 1000

_ID_ALPHABET = string.digits + string.ascii_lowercase


def now_ms() -> int:
    return int(time.time() * 1000)


def to_iso(epoch_ms: int) -> str:
    moment = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_iso() -> str:
    return to_iso(now_ms())


def parse_timestamp(value: Any) -> float:
    """Return ``value`` as epoch milliseconds, or NaN when it is not a valid ISO-8601 string.

    Numbers are taken as epoch milliseconds already. Naive values are read as UTC.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if not isinstance(value, str):
        return math.nan
    try:
        moment = datetime.fromisoformat(value)
    except ValueError:
        return math.nan
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.timestamp() * 1000


def generate_message_id(epoch_ms: int | None = None) -> str:
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"{epoch_ms if epoch_ms is not None else now_ms()}_{suffix}"


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _timestamp(value: Any) -> str | int | float:
    # Older writers stored whatever the client sent, including epoch numbers.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return _text(value)


def is_stale(last_activity: Any, now: int) -> bool:
    if not isinstance(last_activity, (int, float)) or isinstance(last_activity, bool):
        return True
    return now - last_activity >= PRESENCE_TTL_MS


@dataclass
class Message:
    id: str
    user_id: str
    user_name: str
    message: str
    timestamp: str | int | float
    created_at: str

    def to_document(self) -> dict[str, str | int | float]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "userName": self.user_name,
            "message": self.message,
            "timestamp": self.timestamp,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_document(cls, raw: dict[str, Any]) -> "Message":
        return cls(
            id=_text(raw.get("id")),
            user_id=_text(raw.get("userId")),
            user_name=_text(raw.get("userName")),
            message=_text(raw.get("message")),
            timestamp=_timestamp(raw.get("timestamp")),
            created_at=_text(raw.get("createdAt")),
        )


@dataclass
class PresenceRecord:
    user_id: str
    user_name: str
    last_activity: int | float

    def to_document(self) -> dict[str, str | int | float]:
        return {
            "userId": self.user_id,
            "userName": self.user_name,
            "lastActivity": self.last_activity,
        }

    @classmethod
    def from_document(cls, raw: dict[str, Any]) -> "PresenceRecord":
        return cls(
            user_id=_text(raw.get("userId")),
            user_name=_text(raw.get("userName")),
            last_activity=raw.get("lastActivity", 0),
        )


@dataclass
class OnlineUsers:
    users: list[PresenceRecord] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.users)


@dataclass
class Stats:
    total_messages: int
    online_users: int
    unique_users: int
    messages_last_24h: int

    def to_document(self) -> dict[str, int]:
        return {
            "totalMessages": self.total_messages,
            "onlineUsers": self.online_users,
            "uniqueUsers": self.unique_users,
            "messagesLast24h": self.messages_last_24h,
        }


def normalize_message(user_id: str, user_name: str, message: str, timestamp: str | None = None) -> Message:
    created = now_ms()
    created_iso = to_iso(created)
    return Message(
        id=generate_message_id(created),
        user_id=user_id,
        user_name=user_name[:MAX_USER_NAME_LENGTH],
        message=message[:MAX_MESSAGE_LENGTH],
        timestamp=timestamp or created_iso,
        created_at=created_iso,
    )


def normalize_presence(user_id: str, user_name: str, last_activity: int | float | None = None) -> PresenceRecord:
    return PresenceRecord(
        user_id=user_id,
        user_name=user_name[:MAX_USER_NAME_LENGTH],
        last_activity=last_activity or now_ms(),
    )
