"""Report page API: mount, image intake, location, verification, submission."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile, File
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.agents.llm_provider import LLMProvider
from app.db.engine import get_db
from app.dependencies import get_llm, get_page
from app.schemas import LocationSelect, PageStateRead
from app.services.auth import get_cached_email, LOGIN_PATH
from app.services.image_intake import read_upload
from app.services.page_state import ActionRejected, OperationInProgress, PageState
from app.services.places import picker_for
from app.services.report_flow import (
    PersistenceFailed, bootstrap_page, submit_page, verify_page,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/report-pages", tags=["report-pages"])


@router.post("", response_model=PageStateRead, status_code=201)
async def mount_page(request: Request, db: AsyncSession = Depends(get_db)):
    """Session bootstrap. Without a cached email the browser is sent to login."""
    page = await bootstrap_page(db, get_cached_email(request))
    if page is None:
        return RedirectResponse(LOGIN_PATH, status_code=303)
    return page.to_read()


@router.get("/{page_id}", response_model=PageStateRead)
async def get_page_state(page: PageState = Depends(get_page)):
    return page.to_read()


@router.post("/{page_id}/image", response_model=PageStateRead)
async def select_image(
    file: UploadFile = File(...),
    page: PageState = Depends(get_page),
):
    data = await file.read()
    image = await read_upload(data, file.content_type, file.filename)
    try:
        page.select_image(image)
    except OperationInProgress:
        raise HTTPException(409, "Operation already in progress")
    logger.debug(f"Page {page.page_id}: selected {image.filename} ({image.mime_type}, {image.size} bytes)")
    return page.to_read()


@router.post("/{page_id}/location", response_model=PageStateRead)
async def select_location(body: LocationSelect, page: PageState = Depends(get_page)):
    """Places widget callback (or the user typing an address)."""
    picker_for(page).select(body.formatted_address)
    return page.to_read()


@router.post("/{page_id}/verify", response_model=PageStateRead)
async def verify(
    page: PageState = Depends(get_page),
    llm: LLMProvider | None = Depends(get_llm),
):
    """Verification failures come back as verification_status="failure", not as errors."""
    try:
        await verify_page(page, llm)
    except ActionRejected as e:
        raise HTTPException(400, e.notice)
    except OperationInProgress:
        raise HTTPException(409, "Operation already in progress")
    return page.to_read()


@router.post("/{page_id}/submit", response_model=PageStateRead)
async def submit(
    page: PageState = Depends(get_page),
    db: AsyncSession = Depends(get_db),
):
    try:
        await submit_page(page, db)
    except ActionRejected as e:
        raise HTTPException(400, e.notice)
    except OperationInProgress:
        raise HTTPException(409, "Operation already in progress")
    except PersistenceFailed as e:
        raise HTTPException(502, e.notice)
    return page.to_read()
