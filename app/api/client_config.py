"""Settings the browser page needs before it can render the form."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.config import Settings
from app.dependencies import get_settings_dep
from app.schemas import ClientConfig

router = APIRouter(prefix="/api/config", tags=["config"])


@router.get("", response_model=ClientConfig)
async def get_client_config(settings: Settings = Depends(get_settings_dep)):
    # Without a maps key the places search box is simply not rendered
    return ClientConfig(
        maps_enabled=bool(settings.google_maps_api_key),
        google_maps_api_key=settings.google_maps_api_key,
        max_upload_mb=settings.reports.max_upload_mb,
    )
