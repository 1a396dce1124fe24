from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import unquote


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    app_name: str = os.getenv("APP_NAME", "JobBoard")
    environment: str = os.getenv("ENV", "development")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./db/jobboard.db")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    auth_secret: str = os.getenv("AUTH_SECRET", "jobboard-dev-secret")
    auth_token_ttl_seconds: int = int(os.getenv("AUTH_TOKEN_TTL_SECONDS", str(60 * 60 * 24 * 14)))
    pinata_jwt: str = os.getenv("PINATA_JWT", "")
    pinata_api_url: str = os.getenv("PINATA_API_URL", "https://api.pinata.cloud")
    pinata_gateway_url: str = os.getenv("PINATA_GATEWAY_URL", "https://gateway.pinata.cloud")
    max_upload_size_mb: int = int(os.getenv("MAX_UPLOAD_SIZE_MB", "5"))
    resend_api_key: str = os.getenv("RESEND_API_KEY", "")
    resend_from_email: str = os.getenv("RESEND_FROM_EMAIL", "onboarding@resend.dev")
    public_base_url: str = os.getenv("PUBLIC_BASE_URL", "http://localhost:3000")
    default_admin_email: str = os.getenv("DEFAULT_ADMIN_EMAIL", "")
    default_admin_password: str = os.getenv("DEFAULT_ADMIN_PASSWORD", "")
    cors_origins: list[str] = field(
        default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"))
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
