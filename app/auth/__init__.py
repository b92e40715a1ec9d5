# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication using Supabase Auth, plus the
# administrator check used by every dashboard route.
#
# Usage:
#   from app.auth import get_current_admin, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_admin)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import (
    InvalidTokenError,
    decode_access_token,
    get_current_admin,
    get_current_user,
)
from app.auth.models import AuthUser, UserResponse

__all__ = [
    "InvalidTokenError",
    "decode_access_token",
    "get_current_admin",
    "get_current_user",
    "AuthUser",
    "UserResponse",
]
