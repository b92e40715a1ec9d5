# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Supports both:
# - ES256 (new Supabase JWT signing keys) via JWKS
# - HS256 (legacy Supabase JWT secret) as fallback
#
# Dashboard routes additionally require an administrator: the user's row
# in the students table must have is_admin set.
#
# Usage:
#   from app.auth import get_current_admin, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_admin)):
#       return {"user_id": user.id}
# =============================================================================

import logging
import time
from typing import Optional
from uuid import UUID

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError

from app.auth.models import AuthUser, TokenPayload
from app.config import settings
from app.dependencies import RecordStoreDep
from app.exceptions import AdminAccessDeniedError
from core.backends import STUDENTS, RecordStore, RecordStoreError
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor
security = HTTPBearer()

# Cache for JWKS keys
_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour


class InvalidTokenError(Exception):
    """Token could not be verified; the message is safe to return to clients."""


def _get_jwks_url() -> str:
    """Get the JWKS URL from the Supabase project URL."""
    supabase_url = settings.SUPABASE_URL.rstrip('/')
    return f"{supabase_url}/auth/v1/.well-known/jwks.json"


def _fetch_jwks() -> dict:
    """Fetch JWKS from Supabase with caching."""
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()

    if _jwks_cache and (current_time - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        jwks_url = _get_jwks_url()
        response = httpx.get(jwks_url, timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = current_time
        logger.debug(f"Fetched JWKS from {jwks_url}")
        return _jwks_cache
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Return cached even if expired, as fallback
        if _jwks_cache:
            return _jwks_cache
        return {"keys": []}


def _hs256_secret() -> tuple[str, str]:
    """The legacy HS256 secret, refused when it isn't configured."""
    if not settings.SUPABASE_JWT_SECRET:
        raise InvalidTokenError("Invalid token: HS256 tokens are not accepted")
    return settings.SUPABASE_JWT_SECRET, "HS256"


def _get_signing_key(token: str) -> tuple[str | dict, str]:
    """
    Get the appropriate signing key for a token.

    Returns:
        Tuple of (key, algorithm) to use for verification

    Raises:
        InvalidTokenError: If no key can verify this token
    """
    try:
        unverified_header = jwt.get_unverified_header(token)
    except JWTError:
        raise InvalidTokenError("Invalid token: malformed header")

    alg = unverified_header.get("alg", "HS256")
    kid = unverified_header.get("kid")

    if alg == "HS256":
        return _hs256_secret()

    # For ES256 or other algorithms, use JWKS
    if kid:
        for key in _fetch_jwks().get("keys", []):
            if key.get("kid") == kid:
                return key, alg

    logger.warning(f"Could not find key for alg={alg}, kid={kid}")
    raise InvalidTokenError("Invalid token: unknown signing key")


def decode_access_token(token: str) -> AuthUser:
    """
    Verify a Supabase access token and return its user.

    Shared by the HTTP dependencies and the websocket endpoint.

    Raises:
        InvalidTokenError: If the token is expired, badly signed or malformed
    """
    try:
        signing_key, algorithm = _get_signing_key(token)
        payload = jwt.decode(
            token,
            signing_key,
            algorithms=[algorithm],
            audience="authenticated"
        )
    except ExpiredSignatureError:
        raise InvalidTokenError("Token has expired")
    except JWTError as e:
        raise InvalidTokenError(f"Invalid token: {e}")

    try:
        claims = TokenPayload.model_validate(payload)
    except ValidationError:
        raise InvalidTokenError("Invalid token: missing required claims")

    try:
        user_id = UUID(claims.sub)
    except ValueError:
        raise InvalidTokenError("Invalid token: malformed user ID")

    return AuthUser(id=user_id, email=claims.email)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> AuthUser:
    """
    Extract and validate the user from a Supabase JWT bearer token.

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    try:
        user = decode_access_token(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.debug(f"Authenticated user: {user.id}")
    return user


async def fetch_student_record(records: RecordStore, user: AuthUser) -> Optional[dict]:
    """Look up the user's student row; None if missing or unreadable."""
    try:
        return await records.select_by_id(STUDENTS, normalize_uuid(user.id), columns="id, email, is_admin")
    except RecordStoreError as e:
        logger.warning(f"Could not fetch student record for {user.id}: {e.message}")
        return None


async def get_current_admin(
    records: RecordStoreDep,
    user: AuthUser = Depends(get_current_user),
) -> AuthUser:
    """
    Require an authenticated dashboard administrator.

    Raises:
        AdminAccessDeniedError: 403 if the user has no student record or is not an admin
    """
    if not settings.REQUIRE_ADMIN:
        return user

    student = await fetch_student_record(records, user)
    if not student or not student.get("is_admin"):
        logger.warning(f"Dashboard access denied for user {user.id}")
        raise AdminAccessDeniedError(normalize_uuid(user.id))

    return user
