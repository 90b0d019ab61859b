"""Pydantic request/response schemas."""

from app.schemas.user import UserRead
from app.schemas.report import ReportRead, format_day
from app.schemas.verification import VerificationResult
from app.schemas.page import (
    DraftRead, PageStateRead, LocationSelect, LoginRequest, ClientConfig,
)

__all__ = [
    "UserRead",
    "ReportRead", "format_day",
    "VerificationResult",
    "DraftRead", "PageStateRead", "LocationSelect", "LoginRequest", "ClientConfig",
]
