from fastapi import APIRouter

from community_chat.api.routes import messages, stats, users


api_router = APIRouter(prefix="/api/community-chat")
api_router.include_router(messages.router)
api_router.include_router(users.router)
api_router.include_router(stats.router)
