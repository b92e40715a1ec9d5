# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the core models to ensure:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Insert payloads carry exactly the columns the database expects
# - Default values work as expected
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

import pytest
from pydantic import ValidationError

from core.backends import RecordStoreError
from core.models import (
    ActivityCreate,
    ActivityForm,
    ActivityResponse,
    AssetCreate,
    TaxonomyItem,
    UploadProgress,
    UploadStatus,
)
from lib.utils import ApplicationError, display_message, normalize_uuid


# =============================================================================
# Activity Model Tests
# =============================================================================

class TestActivityForm:
    """Tests for ActivityForm."""

    def test_defaults_are_blank(self):
        form = ActivityForm()

        assert form.title == ""
        assert form.category_id == ""

    def test_missing_fields_messages(self):
        form = ActivityForm(title="T", description="D", content="C")

        assert form.missing_fields() == {
            "category_id": "Select a category.",
            "level_id": "Select a level.",
        }

    def test_complete_form(self):
        form = ActivityForm(
            title="T", description="D", content="C", category_id="c", level_id="l"
        )

        assert form.missing_fields() == {}

    def test_assignment_is_validated(self):
        form = ActivityForm()

        with pytest.raises(ValidationError):
            form.title = None


class TestActivityCreate:
    """Tests for ActivityCreate."""

    def test_from_form_trims_title_and_description(self):
        form = ActivityForm(
            title="  Loops ", description=" Basics ", content="  <p>x</p>  ",
            category_id="c", level_id="l",
        )

        payload = ActivityCreate.from_form(form, creator_id="u1")

        assert payload.title == "Loops"
        assert payload.description == "Basics"
        # HTML content is stored exactly as typed
        assert payload.content == "  <p>x</p>  "
        assert payload.is_published is True

    def test_blank_corrections_left_out(self):
        form = ActivityForm(
            title="T", description="D", content="C", category_id="c", level_id="l",
            algorithm_correction=" ", code_correction="",
        )

        record = ActivityCreate.from_form(form, creator_id="u1").to_record()

        assert "algorithm_correction" not in record
        assert "code_correction" not in record
        assert record["created_by"] == "u1"

    def test_frozen(self):
        payload = ActivityCreate(
            title="T", description="D", content="C", created_by="u",
            category_id="c", level_id="l",
        )

        with pytest.raises(ValidationError):
            payload.title = "other"

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            ActivityCreate(
                title="", description="D", content="C", created_by="u",
                category_id="c", level_id="l",
            )


class TestAssetCreate:
    """Tests for AssetCreate."""

    def test_to_record(self):
        asset = AssetCreate(
            activity_id="a1", name="x.pdf", file_type="application/pdf",
            file_size=10, file_url="https://x/x.pdf",
        )

        assert asset.to_record() == {
            "activity_id": "a1",
            "name": "x.pdf",
            "file_type": "application/pdf",
            "file_size": 10,
            "file_url": "https://x/x.pdf",
        }

    def test_negative_size_rejected(self):
        with pytest.raises(ValidationError):
            AssetCreate(
                activity_id="a1", name="x", file_type="image/png",
                file_size=-1, file_url="u",
            )


class TestActivityResponse:
    """Tests for ActivityResponse."""

    def test_attachment_count_serialized(self):
        activity = ActivityResponse.from_row({
            "id": "a1",
            "title": "T",
            "content": "<p/>",
            "created_at": "2024-01-15T10:00:00Z",
            "assets": [{"id": "s1", "activity_id": "a1", "name": "x", "file_url": "u"}],
        })

        assert activity.model_dump()["attachment_count"] == 1
        assert activity.created_at.year == 2024


# =============================================================================
# Staging and Taxonomy Model Tests
# =============================================================================

class TestUploadProgress:
    """Tests for UploadProgress."""

    def test_status_serializes_as_string(self):
        update = UploadProgress(staging_id="s", name="a.pdf", status=UploadStatus.UPLOADING)

        assert update.model_dump(mode="json")["status"] == "uploading"


class TestTaxonomyItem:
    """Tests for TaxonomyItem."""

    def test_requires_name(self):
        with pytest.raises(ValidationError):
            TaxonomyItem(id="c1")


# =============================================================================
# Utility Tests
# =============================================================================

class TestDisplayMessage:
    """Tests for display_message."""

    def test_string(self):
        assert display_message("boom") == "boom"

    def test_record_store_error_shows_message_only(self):
        error = RecordStoreError("bad row", code="23502", details="null value", hint="fill it")

        assert display_message(error) == "bad row"

    def test_plain_exception(self):
        assert display_message(ValueError("nope")) == "nope"

    def test_fallback(self):
        assert display_message(object()) == "Unexpected error"
        assert display_message(RuntimeError()) == "Unexpected error"
        assert display_message("") == "Unexpected error"


class TestApplicationError:
    """Tests for ApplicationError."""

    def test_str_includes_code_and_suggestion(self):
        error = ApplicationError("Not authenticated", code="NOT_AUTHENTICATED", suggestion="Sign in")

        assert str(error) == "[NOT_AUTHENTICATED] Not authenticated\n  Suggestion: Sign in"
        assert error.to_dict()["code"] == "NOT_AUTHENTICATED"

    def test_record_store_error_details(self):
        error = RecordStoreError("x", details="d", hint="h", collection="assets")

        assert error.details == {"collection": "assets", "details": "d"}
        assert error.suggestion == "h"


def test_normalize_uuid():
    from uuid import UUID

    value = UUID("550e8400-e29b-41d4-a716-446655440000")

    assert normalize_uuid(value) == "550e8400-e29b-41d4-a716-446655440000"
    assert normalize_uuid("abc") == "abc"
