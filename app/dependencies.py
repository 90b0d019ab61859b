"""FastAPI dependency providers for settings, page lookup and the model client."""

from __future__ import annotations

from functools import lru_cache

from fastapi import HTTPException

from app.agents.llm_provider import LLMProvider
from app.config import Settings, get_settings
from app.services.page_state import PageState
from app.services.page_store import PageNotFound, page_store


@lru_cache
def get_settings_dep() -> Settings:
    return get_settings()


def get_page(page_id: str) -> PageState:
    """Resolve a mounted page by id or 404."""
    try:
        return page_store.get(page_id)
    except PageNotFound:
        raise HTTPException(404, "Page not found")


def get_llm() -> LLMProvider | None:
    """Model client for verification. None lets the agent pick from configured keys."""
    return None
