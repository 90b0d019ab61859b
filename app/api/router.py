"""Central router that includes all sub-routers."""

from fastapi import APIRouter

from app.api.client_config import router as client_config_router
from app.api.report_pages import router as report_pages_router
from app.api.session import router as session_router

api_router = APIRouter()
api_router.include_router(client_config_router)
api_router.include_router(session_router)
api_router.include_router(report_pages_router)
