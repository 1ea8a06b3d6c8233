from fastapi import APIRouter, Depends

from community_chat.core.deps import get_store
from community_chat.schemas import ActivityOut, ActivityUpdate, OnlineUsersOut
from community_chat.store.community import CommunityStore


router = APIRouter(prefix="/users", tags=["users"])


@router.post("/activity", response_model=ActivityOut)
async def update_activity(payload: ActivityUpdate, store: CommunityStore = Depends(get_store)):
    record = await store.presence.touch(
        user_id=payload.userId,
        user_name=payload.userName,
        last_activity=payload.lastActivity,
    )
    return {"success": True, "user": record.to_document()}


@router.get("/online", response_model=OnlineUsersOut)
async def list_online_users(store: CommunityStore = Depends(get_store)):
    online = await store.presence.list_online()
    return {"users": [item.to_document() for item in online.users], "count": online.count}
