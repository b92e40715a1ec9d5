# =============================================================================
# tests/test_drafts.py - Draft Registry Tests
# =============================================================================
# Run with: pytest tests/test_drafts.py -v
# =============================================================================

import pytest

from app.exceptions import DraftNotFoundError, SubmissionInProgressError
from core.services.draft_service import DraftRegistry
from core.services.submission_service import ActivitySubmission


@pytest.fixture
def submission(records, blobs, admin_identity):
    return ActivitySubmission(records, blobs, admin_identity)


class TestDraftRegistry:
    """Tests for DraftRegistry."""

    def test_create_and_get(self, submission):
        registry = DraftRegistry()

        draft_id = registry.create("user-1", submission)

        assert registry.get(draft_id, "user-1") is submission
        assert len(registry) == 1

    def test_unknown_draft(self):
        registry = DraftRegistry()

        with pytest.raises(DraftNotFoundError) as exc_info:
            registry.get("nope", "user-1")

        assert exc_info.value.status_code == 404

    def test_other_owner_cannot_see_draft(self, submission):
        registry = DraftRegistry()
        draft_id = registry.create("user-1", submission)

        with pytest.raises(DraftNotFoundError):
            registry.get(draft_id, "user-2")

    def test_discard(self, submission):
        registry = DraftRegistry()
        draft_id = registry.create("user-1", submission)

        registry.discard(draft_id, "user-1")

        assert len(registry) == 0
        assert submission.is_open is False

    def test_discard_refused_while_saving(self, submission):
        registry = DraftRegistry()
        draft_id = registry.create("user-1", submission)
        submission.saving = True

        with pytest.raises(SubmissionInProgressError) as exc_info:
            registry.discard(draft_id, "user-1")

        assert exc_info.value.status_code == 409
        assert registry.get(draft_id, "user-1") is submission
        assert submission.is_open is True

    def test_oldest_idle_draft_dropped_at_limit(self, records, blobs, admin_identity):
        registry = DraftRegistry(max_per_owner=2)
        first = ActivitySubmission(records, blobs, admin_identity)
        second = ActivitySubmission(records, blobs, admin_identity)
        first_id = registry.create("user-1", first)
        second_id = registry.create("user-1", second)
        other_id = registry.create("user-2", ActivitySubmission(records, blobs, admin_identity))

        third_id = registry.create("user-1", ActivitySubmission(records, blobs, admin_identity))

        with pytest.raises(DraftNotFoundError):
            registry.get(first_id, "user-1")
        assert first.is_open is False
        assert registry.get(second_id, "user-1") is second
        assert registry.get(third_id, "user-1") is not None
        assert registry.get(other_id, "user-2") is not None
        assert len(registry) == 3

    def test_saving_draft_never_dropped(self, records, blobs, admin_identity):
        registry = DraftRegistry(max_per_owner=1)
        busy = ActivitySubmission(records, blobs, admin_identity)
        busy_id = registry.create("user-1", busy)
        busy.saving = True

        registry.create("user-1", ActivitySubmission(records, blobs, admin_identity))

        assert registry.get(busy_id, "user-1") is busy


class TestSubmissionFormState:
    """Tests for the form lifecycle on ActivitySubmission."""

    def test_open_resets(self, submission):
        submission.update(title="T")
        submission.error = "old"
        submission.close()

        submission.open()

        assert submission.is_open is True
        assert submission.form.title == ""
        assert submission.error is None

    def test_close_refused_while_saving(self, submission):
        submission.saving = True

        assert submission.close() is False
        assert submission.is_open is True

    def test_to_response(self, submission):
        submission.update(title="Loops", level_id="lvl-1")

        response = submission.to_response("d1")

        assert response.draft_id == "d1"
        assert response.form.title == "Loops"
        assert response.taxonomy.categories_loading is True
        assert response.files == []
