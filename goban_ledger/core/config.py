"""Process configuration, read from the environment (and a .env file if present)."""

import os
from dataclasses import dataclass, field

from dotenv import find_dotenv, load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///./goban_ledger.db"
DEFAULT_GAME_NAME = "Test game"


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    default_game_name: str = DEFAULT_GAME_NAME
    log_level: str = "INFO"
    sql_echo: bool = False
    host: str = "0.0.0.0"
    port: int = 8080
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])


def get_settings() -> Settings:
    """Build Settings from GOBAN_* environment variables, falling back to the defaults."""
    load_dotenv(find_dotenv(usecwd=True))

    origins = os.getenv("GOBAN_ALLOWED_ORIGINS", "*")
    return Settings(
        database_url=os.getenv("GOBAN_DATABASE_URL", DEFAULT_DATABASE_URL),
        default_game_name=os.getenv("GOBAN_DEFAULT_GAME_NAME", DEFAULT_GAME_NAME),
        log_level=os.getenv("GOBAN_LOG_LEVEL", "INFO").upper(),
        sql_echo=_as_bool(os.getenv("GOBAN_SQL_ECHO", "0")),
        host=os.getenv("GOBAN_HOST", "0.0.0.0"),
        port=int(os.getenv("GOBAN_PORT", "8080")),
        allowed_origins=[o.strip() for o in origins.split(",") if o.strip()],
    )
