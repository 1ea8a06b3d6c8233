from community_chat.core.config import get_settings
from community_chat.store.community import CommunityStore, build_store

community_store = build_store(get_settings())


def get_store() -> CommunityStore:
    return community_store
