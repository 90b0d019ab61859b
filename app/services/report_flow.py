"""Report page operations: session bootstrap, waste verification, submission.

Each operation wraps a ``PageState`` transition around its I/O. Failures are
recovered here and turned into page state or a notice; nothing is retried.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.agents.llm_provider import LLMProvider
from app.agents.verification.graph import run_verification
from app.config import get_settings
from app.db import crud
from app.schemas import ReportRead, UserRead
from app.services.page_state import PageState, SUBMIT_FAILED_NOTICE
from app.services.page_store import PageStore, page_store

logger = logging.getLogger(__name__)


class PersistenceFailed(Exception):
    """The report store rejected the write. The draft is kept for another try."""

    def __init__(self, notice: str = SUBMIT_FAILED_NOTICE):
        super().__init__(notice)
        self.notice = notice


async def bootstrap_page(
    db: AsyncSession, email: str | None, store: PageStore = page_store,
) -> PageState | None:
    """Mount a report page for ``email``.

    Returns None when there is no cached email; the caller sends the browser to
    the login flow. Otherwise resolves (or lazily creates) the user and loads
    the recent reports.
    """
    if not email:
        return None

    settings = get_settings()
    user = await crud.get_user_by_email(db, email)
    if user is None:
        user = await crud.create_user(db, email, settings.reports.placeholder_user_name)
        logger.info(f"Created user {user.id} for {email}")

    recent = await crud.get_recent_reports(db, limit=settings.reports.recent_page_size)

    page = store.create()
    page.session_resolved(
        UserRead.model_validate(user),
        [ReportRead.from_model(r) for r in recent],
    )
    return page


async def verify_page(page: PageState, llm: LLMProvider | None = None) -> PageState:
    """Run AI verification on the page's selected image."""
    page.begin_verification()
    image = page.image
    try:
        result = await run_verification(image, llm)
    except Exception:
        logger.exception(f"Verification pipeline crashed for page {page.page_id}")
        result = None

    if result is None:
        page.verification_failed()
    else:
        page.verification_succeeded(result)
    return page


async def submit_page(page: PageState, db: AsyncSession) -> ReportRead:
    """Persist the verified draft, prepend it to the recent list and reset the page."""
    page.begin_submission()
    draft = page.draft
    verification = page.verification_result
    try:
        report = await crud.create_report(
            db,
            page.user.id,
            draft.location,
            draft.waste_type,
            draft.amount,
            image_url=page.image.preview if page.image else None,
            verification_result=verification.model_dump(by_alias=True) if verification else None,
        )
    except Exception as e:
        logger.exception(f"Error submitting report for page {page.page_id}")
        page.submission_failed()
        raise PersistenceFailed() from e

    created = ReportRead.from_model(report)
    page.submission_succeeded(created)
    logger.info(f"Report {created.id} submitted by user {page.user.id}")
    return created
