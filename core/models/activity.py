# =============================================================================
# core/models/activity.py - Activity and Asset Schemas
# =============================================================================
# These models define the contract for learning activities:
# - ActivityForm: The editable state of the "new activity" form
# - ActivityCreate: Immutable insert payload built from a form
# - AssetCreate: Immutable metadata row for one uploaded attachment
# - ActivityResponse / AssetResponse: Rows read back from the database
#
# An activity is created once and never edited by the dashboard. Assets
# always point at an existing activity and are inserted after their bytes
# are in storage.
# =============================================================================

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, computed_field


class ActivityForm(BaseModel):
    """
    Editable state of the new-activity form.

    Fields hold raw user input; trimming and required-field checks happen
    when the form is submitted, not on every keystroke.
    """

    title: str = ""
    description: str = ""
    content: str = ""
    algorithm_correction: str = ""
    code_correction: str = ""
    category_id: str = ""
    level_id: str = ""

    model_config = {"validate_assignment": True}

    def missing_fields(self) -> dict[str, str]:
        """Return a field -> error map for every required value left blank."""
        errors: dict[str, str] = {}
        for name in ("title", "description", "content"):
            if not getattr(self, name).strip():
                errors[name] = "This field is required."
        if not self.category_id:
            errors["category_id"] = "Select a category."
        if not self.level_id:
            errors["level_id"] = "Select a level."
        return errors


class ActivityUpdateRequest(BaseModel):
    """Partial form update; only the fields sent are applied."""

    title: str | None = None
    description: str | None = None
    content: str | None = None
    algorithm_correction: str | None = None
    code_correction: str | None = None
    category_id: str | None = None
    level_id: str | None = None


class ActivityCreate(BaseModel):
    """
    Insert payload for the activities table.

    Optional corrections are None when the form left them blank, and are
    left out of the row entirely so the database default applies.

    Example:
        {
            "title": "Intro to Loops",
            "description": "Basics",
            "content": "<p>x</p>",
            "created_by": "2f0c...",
            "is_published": true,
            "category_id": "c1",
            "level_id": "l1"
        }
    """

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    created_by: str
    is_published: bool = True
    category_id: str = Field(..., min_length=1)
    level_id: str = Field(..., min_length=1)
    algorithm_correction: str | None = None
    code_correction: str | None = None

    model_config = {"frozen": True}

    @classmethod
    def from_form(cls, form: ActivityForm, creator_id: str) -> ActivityCreate:
        """Build the payload from required fields, then merge optional ones."""
        required = {
            "title": form.title.strip(),
            "description": form.description.strip(),
            "content": form.content,
            "created_by": creator_id,
            # New activities are visible in the learner app immediately
            "is_published": True,
            "category_id": form.category_id,
            "level_id": form.level_id,
        }
        optional = {
            name: getattr(form, name)
            for name in ("algorithm_correction", "code_correction")
            if getattr(form, name).strip()
        }
        return cls(**required, **optional)

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class AssetCreate(BaseModel):
    """Metadata row for one uploaded attachment."""

    activity_id: str
    name: str
    file_type: str
    file_size: int = Field(..., ge=0)
    file_url: str

    model_config = {"frozen": True}

    def to_record(self) -> dict[str, Any]:
        return self.model_dump()


class AssetResponse(BaseModel):
    """An asset row as stored."""

    id: str
    activity_id: str
    name: str
    file_type: str | None = None
    file_size: int | None = None
    file_url: str
    created_at: datetime | None = None


class ActivityResponse(BaseModel):
    """An activity row, optionally joined with its assets."""

    id: str
    title: str
    description: str | None = None
    content: str
    algorithm_correction: str | None = None
    code_correction: str | None = None
    category_id: str | None = None
    level_id: str | None = None
    created_by: str | None = None
    is_published: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
    assets: list[AssetResponse] = Field(default_factory=list)

    @computed_field
    @property
    def attachment_count(self) -> int:
        return len(self.assets)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> ActivityResponse:
        # PostgREST returns null rather than [] for an empty embed
        data = dict(row)
        data["assets"] = data.get("assets") or []
        return cls.model_validate(data)


class ActivityListResponse(BaseModel):
    """Listing of activities, most recent first."""

    activities: list[ActivityResponse] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    loaded: bool = Field(
        default=False,
        description="False when the last refresh failed and the list may be stale",
    )
