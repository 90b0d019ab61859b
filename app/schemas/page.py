from __future__ import annotations
from pydantic import BaseModel

from app.schemas.report import ReportRead
from app.schemas.user import UserRead
from app.schemas.verification import VerificationResult


class DraftRead(BaseModel):
    location: str = ""
    waste_type: str = ""
    amount: str = ""
    # True once verification succeeded; the form renders type/amount read-only
    locked: bool = False


class PageStateRead(BaseModel):
    page_id: str
    user: UserRead | None = None
    reports: list[ReportRead] = []
    draft: DraftRead
    filename: str | None = None
    preview: str | None = None
    verification_status: str
    verification_result: VerificationResult | None = None
    is_submitting: bool = False


class LocationSelect(BaseModel):
    formatted_address: str = ""


class LoginRequest(BaseModel):
    email: str


class ClientConfig(BaseModel):
    maps_enabled: bool
    google_maps_api_key: str = ""
    max_upload_mb: int
