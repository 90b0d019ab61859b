import pytest

from app.schemas import ReportRead, UserRead, VerificationResult
from app.services.image_intake import ImageSelection
from app.services.page_state import (
    LOCATION_NOTICE,
    NO_IMAGE_NOTICE,
    VERIFY_OR_LOGIN_NOTICE,
    ActionRejected,
    OperationInProgress,
    PageState,
    VerificationStatus,
)
from app.services.page_store import PageNotFound, PageStore
from app.services.places import PlacesPicker, picker_for

PLASTIC = VerificationResult(waste_type="plastic", quantity="2kg", confidence=0.87)
USER = UserRead(id="01USER", email="alice@example.com", name="Anonymous User")


@pytest.fixture
def image(png_bytes):
    return ImageSelection.from_upload(png_bytes, "image/png", "bag.png")


@pytest.fixture
def verified_page(image):
    page = PageState(page_id="p1", user=USER)
    page.select_image(image)
    page.set_location("12 Harbour Rd")
    page.begin_verification()
    page.verification_succeeded(PLASTIC)
    return page


def test_initial_state_is_idle_and_empty():
    page = PageState(page_id="p1")
    assert page.verification_status is VerificationStatus.IDLE
    assert page.image is None
    assert page.verification_result is None
    assert (page.draft.location, page.draft.waste_type, page.draft.amount) == ("", "", "")


def test_verify_without_image_is_rejected_and_state_untouched():
    page = PageState(page_id="p1")
    with pytest.raises(ActionRejected) as exc:
        page.begin_verification()
    assert exc.value.notice == NO_IMAGE_NOTICE
    assert page.verification_status is VerificationStatus.IDLE


def test_success_fills_draft_and_locks_it(verified_page):
    assert verified_page.verification_status is VerificationStatus.SUCCESS
    assert verified_page.draft.waste_type == "plastic"
    assert verified_page.draft.amount == "2kg"
    assert verified_page.to_read().draft.locked is True


def test_failure_leaves_draft_unchanged(image):
    page = PageState(page_id="p1")
    page.select_image(image)
    page.set_location("Pier 4")
    page.begin_verification()
    page.verification_failed()
    assert page.verification_status is VerificationStatus.FAILURE
    assert (page.draft.location, page.draft.waste_type, page.draft.amount) == ("Pier 4", "", "")


def test_reverify_from_success_clears_previous_result(verified_page):
    verified_page.begin_verification()
    assert verified_page.verification_status is VerificationStatus.VERIFYING
    assert verified_page.verification_result is None


def test_second_verify_while_verifying_is_refused(image):
    page = PageState(page_id="p1")
    page.select_image(image)
    page.begin_verification()
    with pytest.raises(OperationInProgress):
        page.begin_verification()


@pytest.mark.parametrize("status", [VerificationStatus.IDLE, VerificationStatus.FAILURE])
def test_submission_requires_success(status):
    page = PageState(page_id="p1", user=USER, verification_status=status)
    page.set_location("12 Harbour Rd")
    with pytest.raises(ActionRejected) as exc:
        page.begin_submission()
    assert exc.value.notice == VERIFY_OR_LOGIN_NOTICE
    assert page.is_submitting is False


def test_submission_requires_user(verified_page):
    verified_page.user = None
    with pytest.raises(ActionRejected) as exc:
        verified_page.begin_submission()
    assert exc.value.notice == VERIFY_OR_LOGIN_NOTICE


def test_submission_requires_location(verified_page):
    verified_page.set_location("   ")
    with pytest.raises(ActionRejected) as exc:
        verified_page.begin_submission()
    assert exc.value.notice == LOCATION_NOTICE


def test_double_submission_is_refused(verified_page):
    verified_page.begin_submission()
    with pytest.raises(OperationInProgress):
        verified_page.begin_submission()


def test_submission_while_verifying_is_refused(verified_page):
    verified_page.begin_verification()
    with pytest.raises(OperationInProgress):
        verified_page.begin_submission()
    assert verified_page.is_submitting is False


def test_verify_while_submitting_is_refused(verified_page):
    verified_page.begin_submission()
    with pytest.raises(OperationInProgress):
        verified_page.begin_verification()
    assert verified_page.verification_status is VerificationStatus.SUCCESS
    assert verified_page.verification_result == PLASTIC


def test_image_change_while_verifying_is_refused(image, png_bytes):
    page = PageState(page_id="p1")
    page.select_image(image)
    page.begin_verification()
    other = ImageSelection.from_upload(png_bytes, "image/png", "other.png")
    with pytest.raises(OperationInProgress):
        page.select_image(other)
    assert page.image is image


def test_image_change_while_submitting_is_refused(verified_page, image):
    verified_page.begin_submission()
    with pytest.raises(OperationInProgress):
        verified_page.select_image(image)


def test_submission_success_prepends_and_resets(verified_page):
    older = ReportRead(id="old", location="Old St", waste_type="paper", amount="1kg", created_at="2024-01-01")
    verified_page.reports = [older]
    verified_page.begin_submission()
    new = ReportRead(id="new", location="12 Harbour Rd", waste_type="plastic", amount="2kg", created_at="2024-06-01")
    verified_page.submission_succeeded(new)

    assert [r.id for r in verified_page.reports] == ["new", "old"]
    assert verified_page.verification_status is VerificationStatus.IDLE
    assert verified_page.verification_result is None
    assert verified_page.image is None
    assert verified_page.is_submitting is False
    read = verified_page.to_read()
    assert read.preview is None
    assert (read.draft.location, read.draft.waste_type, read.draft.amount) == ("", "", "")


def test_submission_failure_keeps_draft(verified_page):
    verified_page.begin_submission()
    verified_page.submission_failed()
    assert verified_page.is_submitting is False
    assert verified_page.verification_status is VerificationStatus.SUCCESS
    assert verified_page.draft.waste_type == "plastic"


def test_places_picker_delivers_address_to_every_handler():
    seen = []
    picker = PlacesPicker()
    picker.on_select(lambda a: seen.append(a.formatted_address))
    picker.on_select(lambda a: seen.append(a.formatted_address.upper()))
    picker.select("1 Main St")
    assert seen == ["1 Main St", "1 MAIN ST"]


def test_picker_for_page_writes_draft_location():
    page = PageState(page_id="p1")
    picker_for(page).select("Central Park, New York")
    assert page.draft.location == "Central Park, New York"
    picker_for(page).select(None)
    assert page.draft.location == ""


def test_page_store_evicts_least_recently_used():
    store = PageStore(max_size=2)
    a = store.create()
    b = store.create()
    store.get(a.page_id)  # touch a, b is now oldest
    store.create()
    assert len(store) == 2
    assert store.get(a.page_id) is a
    with pytest.raises(PageNotFound):
        store.get(b.page_id)


def test_each_mount_gets_a_fresh_page():
    store = PageStore()
    assert store.create().page_id != store.create().page_id
