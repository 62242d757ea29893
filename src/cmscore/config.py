"""Environment-driven settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def load_env_file(path: Path) -> None:
    if not path.exists():
        return
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = value


def _flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class Settings:
    base_url: str = "/"
    imgur_client_id: str = ""
    imgur_mashape_key: str = ""
    schema_path: str | None = None
    use_db: bool = False
    db_url: str | None = None
    db_pool_min: int = 1
    db_pool_max: int = 10
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            base_url=os.getenv("CMS_BASE_URL", "").strip() or "/",
            imgur_client_id=os.getenv("IMGUR_CLIENT_ID", "").strip(),
            imgur_mashape_key=os.getenv("IMGUR_MASHAPE_KEY", "").strip(),
            schema_path=os.getenv("CMS_SCHEMA_PATH", "").strip() or None,
            use_db=_flag("USE_DB"),
            db_url=os.getenv("DATABASE_URL", "").strip() or None,
            db_pool_min=int(os.getenv("CMS_DB_POOL_MIN", "1")),
            db_pool_max=int(os.getenv("CMS_DB_POOL_MAX", "10")),
            log_level=os.getenv("CMS_LOG_LEVEL", "").strip().upper() or "INFO",
        )
