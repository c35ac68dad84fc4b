"""
Configuration helpers for the atype backend.

Routers/services read a Settings instance instead of fetching os.environ
directly; tests reset the cache with get_settings.cache_clear().
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

DEFAULT_DB_FILE = Path(__file__).resolve().parents[2] / "db.json"
DEFAULT_ADMIN_LOGINS = ("testa acc", "mops")
CORRUPT_POLICIES = ("reset", "fail")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    host: str
    port: int
    db_file: Path
    admin_logins: tuple
    cors_origins: tuple
    corrupt_policy: str
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _list(value: str | None, default: tuple) -> tuple:
        if value is None:
            return default
        return tuple(item.strip() for item in value.split(",") if item.strip())

    policy = (os.getenv("CORRUPT_DB_POLICY") or "reset").strip().lower()
    if policy not in CORRUPT_POLICIES:
        policy = "reset"

    log_level = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        log_level = "INFO"

    return Settings(
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT", "3000"), 3000),
        db_file=Path(os.getenv("DB_FILE") or DEFAULT_DB_FILE),
        admin_logins=_list(os.getenv("ADMIN_LOGINS"), DEFAULT_ADMIN_LOGINS),
        cors_origins=_list(os.getenv("CORS_ORIGINS"), ("*",)),
        corrupt_policy=policy,
        log_level=log_level,
    )
