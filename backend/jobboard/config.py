from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import unquote


def _split_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class Settings:
    app_name: str = os.getenv("APP_NAME", "Job Board")
    environment: str = os.getenv("ENV", "development")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./db/jobboard.db")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    owner_open_id: str = os.getenv("OWNER_OPEN_ID", "")
    auth_secret: str = os.getenv("AUTH_SECRET", "jobboard-dev-secret")
    auth_token_ttl_seconds: int = int(os.getenv("AUTH_TOKEN_TTL_SECONDS", str(60 * 60 * 24 * 14)))
    identity_shared_secret: str = os.getenv("IDENTITY_SHARED_SECRET", "")
    allowed_origins: list[str] = field(
        default_factory=lambda: _split_origins(
            os.getenv("ALLOWED_ORIGINS", "http://localhost,http://localhost:8000,http://127.0.0.1:8000")
        )
    )

    def ensure_directories(self) -> None:
        self._ensure_sqlite_directory()

    def _ensure_sqlite_directory(self) -> None:
        if not self.database_url.startswith("sqlite:///"):
            return
        raw_path = self.database_url.replace("sqlite:///", "", 1)
        if not raw_path or raw_path == ":memory:":
            return
        db_path = Path(unquote(raw_path))
        if not db_path.is_absolute():
            db_path = Path(".") / db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)


settings = Settings()
