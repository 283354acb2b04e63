# core/config.py
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional


def _split_csv(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass
class Settings:
    """Runtime configuration read from environment variables.

    Every field has a development default so the API and CLI start without
    any environment set up. Tests build their own instance.
    """
    database_url: str = "sqlite:///shelfstream.db"
    content_root: str = "content"
    demo_users_path: Optional[str] = None
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    payment_key_secret: str = ""
    stream_chunk_size: int = 64 * 1024
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: [
        "http://localhost:5173",
        "http://localhost:4173",
        "http://127.0.0.1:5173",
        "http://localhost",
    ])

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            database_url=os.getenv("DATABASE_URL", defaults.database_url),
            content_root=os.getenv("CONTENT_ROOT", defaults.content_root),
            demo_users_path=os.getenv("DEMO_USERS_PATH") or None,
            jwt_secret=os.getenv("JWT_SECRET", defaults.jwt_secret),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", defaults.jwt_algorithm),
            payment_key_secret=os.getenv("PAYMENT_KEY_SECRET", defaults.payment_key_secret),
            stream_chunk_size=int(os.getenv("STREAM_CHUNK_SIZE", defaults.stream_chunk_size)),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level),
            cors_origins=_split_csv(os.getenv("CORS_ORIGINS")) or defaults.cors_origins,
        )


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings; also used as a FastAPI dependency."""
    return Settings.from_env()
