# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for authentication-related operations.
#
# Note: Actual signup/login is handled by Supabase Auth client-side.
# These routes are for checking who is signed in and whether they may use
# the dashboard.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import fetch_student_record, get_current_user
from app.auth.models import AuthUser, UserResponse
from app.dependencies import RecordStoreDep
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    records: RecordStoreDep,
    user: AuthUser = Depends(get_current_user),
) -> UserResponse:
    """
    Get the current user and their admin status.

    Works for non-admins too, so a rejected user can see why.

    Raises:
        401: If not authenticated
    """
    student = await fetch_student_record(records, user)

    return UserResponse(
        id=user.id,
        email=user.email,
        is_admin=bool(student and student.get("is_admin")),
        has_student_record=student is not None,
    )


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": normalize_uuid(user.id),
        "email": user.email
    }
