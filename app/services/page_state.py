"""Report page state: draft, selected image, verification lifecycle, recent reports.

One ``PageState`` exists per mounted page. Every event the page can receive has
a transition method here; I/O (model calls, DB writes) happens in
``app.services.report_flow`` around these transitions.

Verification lifecycle::

    idle ──verify──> verifying ──> success | failure
      ^                 ^                 │
      │                 └──── verify ─────┘
      └────────────── reset (after submit)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from app.schemas import DraftRead, PageStateRead, ReportRead, UserRead, VerificationResult
from app.services.image_intake import ImageSelection

logger = logging.getLogger(__name__)

VERIFY_OR_LOGIN_NOTICE = "Please verify the waste before submitting or log in."
LOCATION_NOTICE = "Please enter a location."
SUBMIT_FAILED_NOTICE = "Failed to submit report. Please try again."
NO_IMAGE_NOTICE = "Please select an image first."


class VerificationStatus(str, Enum):
    IDLE = "idle"
    VERIFYING = "verifying"
    SUCCESS = "success"
    FAILURE = "failure"


class ActionRejected(Exception):
    """A precondition for the requested action is not met. Carries the user notice."""

    def __init__(self, notice: str):
        super().__init__(notice)
        self.notice = notice


class OperationInProgress(Exception):
    """Another operation is already running for this page."""


@dataclass
class ReportDraft:
    location: str = ""
    waste_type: str = ""
    amount: str = ""


@dataclass
class PageState:
    page_id: str
    user: UserRead | None = None
    reports: list[ReportRead] = field(default_factory=list)
    draft: ReportDraft = field(default_factory=ReportDraft)
    image: ImageSelection | None = None
    verification_status: VerificationStatus = VerificationStatus.IDLE
    verification_result: VerificationResult | None = None
    is_submitting: bool = False

    def _ensure_idle(self) -> None:
        """Verification and submission never overlap on one page."""
        if self.verification_status is VerificationStatus.VERIFYING:
            raise OperationInProgress("verification")
        if self.is_submitting:
            raise OperationInProgress("submission")

    # ── Session bootstrap ─────────────────────────────────

    def session_resolved(self, user: UserRead, reports: list[ReportRead]) -> None:
        self.user = user
        self.reports = list(reports)

    # ── Image intake / places picker ──────────────────────

    def select_image(self, image: ImageSelection) -> None:
        """Replace the selected file and preview. Verification state is left as is.

        Refused while a verification or submission is in flight; either would
        otherwise finish against a different image than the one it started with.
        """
        self._ensure_idle()
        self.image = image

    def set_location(self, formatted_address: str) -> None:
        self.draft.location = formatted_address or ""

    # ── Verification ──────────────────────────────────────

    def begin_verification(self) -> None:
        self._ensure_idle()
        if self.image is None:
            raise ActionRejected(NO_IMAGE_NOTICE)
        self.verification_status = VerificationStatus.VERIFYING
        self.verification_result = None

    def verification_succeeded(self, result: VerificationResult) -> None:
        self.verification_result = result
        self.verification_status = VerificationStatus.SUCCESS
        self.draft.waste_type = result.waste_type
        self.draft.amount = result.quantity
        logger.info(f"Page {self.page_id}: verified {result.waste_type} ({result.quantity})")

    def verification_failed(self) -> None:
        self.verification_status = VerificationStatus.FAILURE
        logger.info(f"Page {self.page_id}: verification failed")

    # ── Submission ────────────────────────────────────────

    def can_submit(self) -> bool:
        return self.verification_status is VerificationStatus.SUCCESS and self.user is not None

    def begin_submission(self) -> None:
        self._ensure_idle()
        if not self.can_submit():
            raise ActionRejected(VERIFY_OR_LOGIN_NOTICE)
        if not self.draft.location.strip():
            raise ActionRejected(LOCATION_NOTICE)
        self.is_submitting = True

    def submission_succeeded(self, report: ReportRead) -> None:
        self.reports.insert(0, report)
        self.is_submitting = False
        self.reset()

    def submission_failed(self) -> None:
        self.is_submitting = False

    def reset(self) -> None:
        self.draft = ReportDraft()
        self.image = None
        self.verification_status = VerificationStatus.IDLE
        self.verification_result = None

    # ── Rendering ─────────────────────────────────────────

    def to_read(self) -> PageStateRead:
        return PageStateRead(
            page_id=self.page_id,
            user=self.user,
            reports=self.reports,
            draft=DraftRead(
                location=self.draft.location,
                waste_type=self.draft.waste_type,
                amount=self.draft.amount,
                locked=self.verification_status is VerificationStatus.SUCCESS,
            ),
            filename=self.image.filename if self.image else None,
            preview=self.image.preview if self.image else None,
            verification_status=self.verification_status.value,
            verification_result=self.verification_result,
            is_submitting=self.is_submitting,
        )
