"""Environment-driven settings. A `.env` file in the working directory is honoured."""

import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class ConfigurationError(RuntimeError):
    """Required configuration is missing or incomplete."""


class Settings(BaseModel):
    database_url: Optional[str] = None
    public_backend_url: str = ""
    public_backend_anon_key: str = ""
    vapid_public_key: Optional[str] = None
    vapid_private_key: Optional[str] = None
    vapid_subject: str = "mailto:support@aussiegolf.com"
    upload_dir: str = "uploads"
    upload_base_url: str = "/uploads"
    cors_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    chat_poll_interval: float = Field(5.0, gt=0)
    log_level: str = "INFO"

    @property
    def push_configured(self) -> bool:
        return bool(self.vapid_public_key and self.vapid_private_key)

    def require_database(self) -> str:
        if not self.database_url:
            raise ConfigurationError("DATABASE_URL is not set")
        return self.database_url


def _env(*names: str) -> Optional[str]:
    """First non-empty value among several variable names."""
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return None


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Read settings from the process environment."""
    load_dotenv(env_file)
    values = {
        "database_url": _env("DATABASE_URL"),
        "public_backend_url": _env("PUBLIC_BACKEND_URL", "BACKEND_URL"),
        "public_backend_anon_key": _env("PUBLIC_BACKEND_ANON_KEY", "BACKEND_ANON_KEY"),
        "vapid_public_key": _env("VAPID_PUBLIC_KEY"),
        "vapid_private_key": _env("VAPID_PRIVATE_KEY"),
        "vapid_subject": _env("VAPID_SUBJECT"),
        "upload_dir": _env("UPLOAD_DIR"),
        "upload_base_url": _env("UPLOAD_BASE_URL"),
        "chat_poll_interval": _env("CHAT_POLL_INTERVAL"),
        "log_level": _env("LOG_LEVEL"),
    }
    origins = _env("CORS_ORIGINS")
    if origins:
        values["cors_origins"] = [o.strip() for o in origins.split(",") if o.strip()]
    return Settings(**{k: v for k, v in values.items() if v is not None})
