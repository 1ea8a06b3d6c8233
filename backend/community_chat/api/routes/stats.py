from fastapi import APIRouter, Depends

from community_chat.core.deps import get_store
from community_chat.schemas import StatsOut
from community_chat.store.community import CommunityStore


router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=StatsOut)
async def get_stats(store: CommunityStore = Depends(get_store)):
    stats = await store.stats.compute_stats()
    return stats.to_document()
