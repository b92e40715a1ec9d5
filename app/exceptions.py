# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Following the principle: "Errors should tell HOW to fix, not just WHAT failed."
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class ActivityAdminException(Exception):
    """
    Base exception for the Activity Admin API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "ACTIVITY_ADMIN_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Access Exceptions
# =============================================================================

class AdminAccessDeniedError(ActivityAdminException):
    """Raised when an authenticated user is not a dashboard administrator."""

    def __init__(self, user_id: str):
        super().__init__(
            message="Access denied. Only administrators can access this dashboard.",
            code="ACCESS_DENIED",
            status_code=403,
            suggestion="Ask an administrator to set is_admin on your student record",
            details={"user_id": user_id}
        )


# =============================================================================
# Draft Exceptions
# =============================================================================

class DraftNotFoundError(ActivityAdminException):
    """Raised when a draft ID doesn't exist."""

    def __init__(self, draft_id: str):
        super().__init__(
            message=f"Draft not found: {draft_id}",
            code="DRAFT_NOT_FOUND",
            status_code=404,
            suggestion="Open a new draft with POST /activities/drafts",
            details={"draft_id": draft_id}
        )


class SubmissionInProgressError(ActivityAdminException):
    """Raised when a draft is submitted or closed while already saving."""

    def __init__(self, draft_id: str):
        super().__init__(
            message="A submission is already in progress for this draft",
            code="SUBMISSION_IN_PROGRESS",
            status_code=409,
            suggestion="Wait for the current submission to finish",
            details={"draft_id": draft_id}
        )


class DraftClosedError(ActivityAdminException):
    """Raised when a closed draft is edited or submitted."""

    def __init__(self, draft_id: str):
        super().__init__(
            message="This draft is closed",
            code="DRAFT_CLOSED",
            status_code=409,
            suggestion="Reopen the draft with POST /activities/drafts/{id}/reopen",
            details={"draft_id": draft_id}
        )


class StagedFileNotFoundError(ActivityAdminException):
    """Raised when removing a staged file that isn't in the draft."""

    def __init__(self, draft_id: str, staging_id: str):
        super().__init__(
            message=f"Staged file not found: {staging_id}",
            code="STAGED_FILE_NOT_FOUND",
            status_code=404,
            suggestion="Fetch the draft to see the current staging ids",
            details={"draft_id": draft_id, "staging_id": staging_id}
        )


# =============================================================================
# Submission Exceptions
# =============================================================================

class ActivityValidationError(ActivityAdminException):
    """Raised when required activity fields are missing."""

    def __init__(self, message: str, field_errors: dict[str, str]):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=422,
            suggestion="Fill in every required field and try again",
            details={"field_errors": field_errors}
        )


class SubmissionFailedError(ActivityAdminException):
    """
    Raised when a remote step of the submission failed.

    activity_id is set when the activity row was already created.
    """

    def __init__(self, message: str, activity_id: str | None = None):
        details = {"activity_id": activity_id} if activity_id else {}
        super().__init__(
            message=message,
            code="SUBMISSION_FAILED",
            status_code=502,
            suggestion="Try again later or contact support if the issue persists",
            details=details
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class FileTooLargeError(ActivityAdminException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, filename: str, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {filename} is {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"filename": filename, "size_mb": size_mb, "max_mb": max_mb}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def activity_admin_exception_handler(
    request: Request,
    exc: ActivityAdminException
) -> JSONResponse:
    """
    Convert ActivityAdminException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
