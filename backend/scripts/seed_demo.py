import asyncio

from community_chat.core.config import get_settings
from community_chat.core.logger import configure_logging
from community_chat.store.community import CommunityStore, build_store


DEMO_USERS = [
    ("demo_anna", "Anna"),
    ("demo_omar", "Omar"),
    ("demo_lena", "Lena"),
]

DEMO_MESSAGES = [
    ("demo_anna", "Anna", "Welcome to the community chat!"),
    ("demo_omar", "Omar", "Hi everyone, glad to be here."),
    ("demo_lena", "Lena", "Does anyone know when the next meetup is?"),
    ("demo_anna", "Anna", "Next Friday, details will be posted here."),
]


async def seed(store: CommunityStore) -> None:
    await store.ensure_files()

    existing = await store.messages.list_messages()
    seeded_ids = {item.user_id for item in existing if item.user_id.startswith("demo_")}
    if not seeded_ids:
        for user_id, user_name, text in DEMO_MESSAGES:
            await store.messages.add_message(user_id, user_name, text)

    for user_id, user_name in DEMO_USERS:
        await store.presence.touch(user_id, user_name)


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    asyncio.run(seed(build_store(settings)))
    print(f"Demo seed complete: {settings.data_dir}/{settings.messages_file}")


if __name__ == "__main__":
    main()
