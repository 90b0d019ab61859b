"""Application configuration loaded from config.yaml + environment variables."""

from __future__ import annotations

import yaml
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings

_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///data/trashtrack.db"


def _load_yaml() -> dict:
    if _CONFIG_PATH.exists():
        with open(_CONFIG_PATH) as f:
            return yaml.safe_load(f) or {}
    return {}


_yaml = _load_yaml()


class VerificationConfig(BaseSettings):
    gemini_model: str = "gemini-1.5-flash"
    openai_model: str = "gpt-4o"
    anthropic_model: str = "claude-sonnet-4-20250514"
    max_tokens: int = 1024
    # A confidence of exactly 0 is treated as missing unless this is set
    allow_zero_confidence: bool = False


class ReportsConfig(BaseSettings):
    recent_page_size: int = 10
    placeholder_user_name: str = "Anonymous User"
    max_upload_mb: int = 10  # advisory only, shown next to the file picker


class PageStoreConfig(BaseSettings):
    max_pages: int = 256


class Settings(BaseSettings):
    database_url: str = DEFAULT_DATABASE_URL
    gemini_api_key: str = ""
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    google_maps_api_key: str = ""
    verification: VerificationConfig = Field(default_factory=VerificationConfig)
    reports: ReportsConfig = Field(default_factory=ReportsConfig)
    page_store: PageStoreConfig = Field(default_factory=PageStoreConfig)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


def get_settings() -> Settings:
    """Build Settings by merging YAML defaults with env overrides."""
    y = _yaml
    ver = VerificationConfig(**y.get("verification", {}))
    rep = ReportsConfig(**y.get("reports", {}))
    pages = PageStoreConfig(**y.get("page_store", {}))
    overrides = {"verification": ver, "reports": rep, "page_store": pages}
    db_url = y.get("database", {}).get("url")
    if db_url:
        overrides["database_url"] = db_url
    return Settings(**overrides)
