# =============================================================================
# core/backends.py - External Collaborator Contracts
# =============================================================================
# The dashboard delegates identity, structured data and binary storage to a
# managed backend. Services in core/ only ever talk to these protocols;
# concrete Supabase adapters live in lib/supabase_client.py and tests use
# in-memory fakes.
#
# Every operation is a coroutine so that independent reads (taxonomy,
# dashboard counts) can be awaited together on one event loop.
# =============================================================================

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

from lib.utils import ApplicationError


# =============================================================================
# Collections
# =============================================================================

STUDENTS = "students"
ACTIVITIES = "activities"
CATEGORIES = "categories"
LEVELS = "levels"
ASSETS = "assets"


# =============================================================================
# Errors
# =============================================================================

class RecordStoreError(ApplicationError):
    """
    Structured failure from the record store.

    Mirrors the PostgREST error shape: code, message, and optional
    details/hint. Only the message is ever shown to users.
    """

    def __init__(
        self,
        message: str,
        code: str = "RECORD_STORE_ERROR",
        details: str | None = None,
        hint: str | None = None,
        collection: str | None = None,
    ):
        super().__init__(
            message,
            code=code,
            suggestion=hint,
            details={
                key: value
                for key, value in (("collection", collection), ("details", details))
                if value
            },
        )
        self.hint = hint
        self.collection = collection


class BlobStoreError(ApplicationError):
    """Failure while storing bytes in the blob store."""

    def __init__(self, message: str, bucket: str, path: str, status: str | None = None):
        super().__init__(
            message,
            code="BLOB_STORE_ERROR",
            suggestion="Check that the bucket exists and its policies allow uploads",
            details={"bucket": bucket, "path": path, "status": status},
        )
        self.bucket = bucket
        self.path = path


# =============================================================================
# Identity
# =============================================================================

class UserIdentity(BaseModel):
    """The acting staff member, as known to the identity provider."""
    id: str
    email: str | None = None

    model_config = {"frozen": True}


@runtime_checkable
class IdentityProvider(Protocol):
    async def current_user(self) -> UserIdentity | None: ...


class StaticIdentity:
    """Identity provider for a user resolved up front (e.g. from a request token)."""

    def __init__(self, user: UserIdentity | None):
        self._user = user

    async def current_user(self) -> UserIdentity | None:
        return self._user


# =============================================================================
# Record Store
# =============================================================================

@runtime_checkable
class RecordStore(Protocol):
    """Typed create/read access to the named collections."""

    async def select_all(
        self,
        collection: str,
        columns: str = "*",
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]: ...

    async def select_by_id(
        self,
        collection: str,
        record_id: str,
        columns: str = "*",
    ) -> dict[str, Any] | None: ...

    async def insert_one(self, collection: str, row: dict[str, Any]) -> dict[str, Any]: ...

    async def insert_many(
        self, collection: str, rows: list[dict[str, Any]]
    ) -> list[dict[str, Any]]: ...

    async def count(self, collection: str) -> int: ...


# =============================================================================
# Blob Store
# =============================================================================

@runtime_checkable
class BlobStore(Protocol):
    """Binary object storage addressed by bucket and path."""

    async def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str | None = None,
    ) -> None: ...

    async def public_url(self, bucket: str, path: str) -> str: ...
