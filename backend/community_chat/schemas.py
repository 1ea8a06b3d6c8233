from pydantic import BaseModel


class MessageCreate(BaseModel):
    userId: str | None = None
    userName: str | None = None
    message: str | None = None
    timestamp: str | None = None


class ActivityUpdate(BaseModel):
    userId: str | None = None
    userName: str | None = None
    lastActivity: int | float | None = None


class MessageOut(BaseModel):
    id: str
    userId: str
    userName: str
    message: str
    timestamp: str | int | float
    createdAt: str


class MessageListOut(BaseModel):
    messages: list[MessageOut]


class MessageCreatedOut(BaseModel):
    success: bool = True
    message: MessageOut


class ActionResult(BaseModel):
    success: bool = True
    message: str


class PresenceOut(BaseModel):
    userId: str
    userName: str
    lastActivity: int | float


class ActivityOut(BaseModel):
    success: bool = True
    user: PresenceOut


class OnlineUsersOut(BaseModel):
    users: list[PresenceOut]
    count: int


class StatsOut(BaseModel):
    totalMessages: int
    onlineUsers: int
    uniqueUsers: int
    messagesLast24h: int
