# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from core.backends import UserIdentity


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying the database.
    """
    id: UUID
    email: Optional[str] = None

    model_config = {"frozen": True}

    def to_identity(self) -> UserIdentity:
        """The same user, as the core services know it."""
        return UserIdentity(id=str(self.id), email=self.email)


class UserResponse(BaseModel):
    """
    Current user as shown on the debug page.

    is_admin comes from the students table; a user with no student
    record is reported with has_student_record=False.
    """
    id: UUID
    email: Optional[str] = None
    is_admin: bool = False
    has_student_record: bool = False


class TokenPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    Supabase tokens include standard JWT claims plus custom claims.
    """
    sub: str  # User ID
    email: Optional[str] = None
    aud: str  # Audience (should be "authenticated")
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp
    role: Optional[str] = None  # User role
