import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parents[2] / ".env")


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_env: str
    cors_origins: str
    data_dir: str
    messages_file: str
    presence_file: str
    static_dir: str
    index_page: str
    host: str
    port: int
    log_level: str

    def parsed_cors_origins(self) -> list[str]:
        return [item.strip() for item in self.cors_origins.split(",") if item.strip()]


def get_settings() -> Settings:
    return Settings(
        app_name=os.getenv("APP_NAME", "Community Chat API"),
        app_env=os.getenv("APP_ENV", "dev"),
        cors_origins=os.getenv("CORS_ORIGINS", "*"),
        data_dir=os.getenv("DATA_DIR", "."),
        messages_file=os.getenv("MESSAGES_FILE", "community-messages.json"),
        presence_file=os.getenv("PRESENCE_FILE", "community-users.json"),
        static_dir=os.getenv("STATIC_DIR", "public"),
        index_page=os.getenv("INDEX_PAGE", "community-chat.html"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
