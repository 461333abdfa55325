"""Application settings loaded from the environment."""

from dataclasses import dataclass, field
from os import getenv
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

ENV_FILE_PATHS = [
    Path(__file__).parent.parent / ".env",
    Path.cwd() / ".env",
]

SORT_ORDERS = ("asc", "desc")

# Wire name -> model attribute
OWNER_FIELDS = {
    "name": "name",
    "userId": "user_id",
}

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./feedbacks.db"


def load_env_file() -> Optional[Path]:
    """Load the first .env file found. Real environment variables win."""
    for env_file in ENV_FILE_PATHS:
        if env_file.is_file():
            load_dotenv(env_file, override=False)
            return env_file
    return None


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the feedbacks service."""

    database_url: str = DEFAULT_DATABASE_URL
    host: str = "0.0.0.0"
    port: int = 5000
    debug: bool = False
    sort_order: str = "asc"
    owner_field: str = "name"
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])

    def __post_init__(self) -> None:
        if self.sort_order not in SORT_ORDERS:
            raise ValueError(
                f"Invalid sort order '{self.sort_order}', expected one of {SORT_ORDERS}"
            )
        if self.owner_field not in OWNER_FIELDS:
            raise ValueError(
                f"Invalid owner field '{self.owner_field}', expected one of {tuple(OWNER_FIELDS)}"
            )
        if not 0 < self.port < 65536:
            raise ValueError(f"Invalid port {self.port}")

    @property
    def owner_attribute(self) -> str:
        """Model attribute holding the author identity used for ownership checks."""
        return OWNER_FIELDS[self.owner_field]


def _parse_port(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"PORT must be an integer, got '{raw}'") from None


def get_settings() -> Settings:
    """
    Build settings from environment variables.

    Variables:
        DATABASE_URL: SQLAlchemy async connection string
        HOST / PORT: listen address (PORT defaults to 5000)
        APP_DEBUG: "true" enables debug logging and automatic table creation
        FEEDBACK_SORT_ORDER: "asc" or "desc" ordering of the list endpoint
        FEEDBACK_OWNER_FIELD: "name" or "userId", the field compared on update/delete
        CORS_ALLOW_ORIGINS: comma-separated list of allowed origins
    """
    load_env_file()

    origins = [
        origin.strip()
        for origin in getenv("CORS_ALLOW_ORIGINS", "*").split(",")
        if origin.strip()
    ]

    return Settings(
        database_url=getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        host=getenv("HOST", "0.0.0.0"),
        port=_parse_port(getenv("PORT") or "5000"),
        debug=getenv("APP_DEBUG", "false").lower() == "true",
        sort_order=getenv("FEEDBACK_SORT_ORDER", "asc").lower(),
        owner_field=getenv("FEEDBACK_OWNER_FIELD", "name"),
        cors_allow_origins=origins or ["*"],
    )
