from fastapi import APIRouter, Depends

from community_chat.core.deps import get_store
from community_chat.schemas import ActionResult, MessageCreate, MessageCreatedOut, MessageListOut
from community_chat.store.community import CommunityStore


router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("", response_model=MessageListOut)
async def list_messages(store: CommunityStore = Depends(get_store)):
    messages = await store.messages.list_messages()
    return {"messages": [item.to_document() for item in messages]}


@router.post("", response_model=MessageCreatedOut, status_code=201)
async def add_message(payload: MessageCreate, store: CommunityStore = Depends(get_store)):
    message = await store.messages.add_message(
        user_id=payload.userId,
        user_name=payload.userName,
        message=payload.message,
        timestamp=payload.timestamp,
    )
    return {"success": True, "message": message.to_document()}


@router.delete("/{message_id}", response_model=ActionResult)
async def delete_message(message_id: str, store: CommunityStore = Depends(get_store)):
    await store.messages.delete_message(message_id)
    return {"success": True, "message": "Message deleted"}


@router.delete("", response_model=ActionResult)
async def clear_messages(store: CommunityStore = Depends(get_store)):
    await store.messages.clear_all()
    return {"success": True, "message": "All messages cleared"}
