# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module owns the process-wide Supabase client and adapts it to the
# collaborator protocols in core/backends.py:
# - SupabaseRecordStore: PostgREST tables (activities, assets, taxonomy...)
# - SupabaseBlobStore: Storage buckets (activity attachments)
#
# Services never reach for the client themselves. Routes build adapters
# through app/dependencies.py and pass them in, so tests can swap in fakes.
#
# Usage:
#   client = await SupabaseClient.get_async_client()
#   records = SupabaseRecordStore(client)
#   rows = await records.select_all("levels", order_by="name")
# =============================================================================

from __future__ import annotations

import inspect
import logging
from typing import Any

from postgrest.exceptions import APIError
from supabase import AsyncClient, acreate_client

from app.config import settings
from core.backends import BlobStoreError, RecordStoreError

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST code returned by .single() when no row matches
NO_ROWS_CODE = "PGRST116"


class SupabaseClientError(Exception):
    """
    Error while creating the Supabase client.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Holder for the shared async Supabase client.

    The client is created lazily on first use and reused for the life of the
    process. It uses the service_role key, which bypasses Row Level
    Security; admin checks happen in the API instead.
    """

    _async_instance: AsyncClient | None = None

    @classmethod
    async def get_async_client(cls) -> AsyncClient:
        """
        Get or create the singleton async Supabase client.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._async_instance is None:
            try:
                cls._async_instance = await acreate_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Async Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create async Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._async_instance


def _record_error(error: Exception, collection: str, action: str) -> RecordStoreError:
    """Translate a PostgREST (or transport) failure into a RecordStoreError."""
    if isinstance(error, APIError):
        return RecordStoreError(
            message=error.message or f"Failed to {action} {collection}",
            code=error.code or "RECORD_STORE_ERROR",
            details=error.details,
            hint=error.hint,
            collection=collection,
        )
    return RecordStoreError(
        message=str(error) or f"Failed to {action} {collection}",
        code="RECORD_STORE_UNAVAILABLE",
        collection=collection,
    )


class SupabaseRecordStore:
    """RecordStore backed by Supabase tables."""

    def __init__(self, client: AsyncClient):
        self._client = client

    async def select_all(
        self,
        collection: str,
        columns: str = "*",
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        query = self._client.table(collection).select(columns)
        if order_by:
            query = query.order(order_by, desc=descending)

        try:
            response = await query.execute()
        except Exception as e:
            raise _record_error(e, collection, "read")

        rows = response.data or []
        logger.debug(f"Fetched {len(rows)} rows from {collection}")
        return rows

    async def select_by_id(
        self,
        collection: str,
        record_id: str,
        columns: str = "*",
    ) -> dict[str, Any] | None:
        try:
            response = await (
                self._client.table(collection)
                .select(columns)
                .eq("id", record_id)
                .single()
                .execute()
            )
        except APIError as e:
            if e.code == NO_ROWS_CODE:
                return None
            raise _record_error(e, collection, "read")
        except Exception as e:
            raise _record_error(e, collection, "read")

        return response.data

    async def insert_one(self, collection: str, row: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._client.table(collection).insert(row).execute()
        except Exception as e:
            raise _record_error(e, collection, "insert into")

        if not response.data:
            raise RecordStoreError(
                message="Insert failed",
                code="INSERT_RETURNED_NO_DATA",
                collection=collection,
            )

        created = response.data[0]
        logger.info(f"Inserted row into {collection}: {created.get('id')}")
        return created

    async def insert_many(
        self, collection: str, rows: list[dict[str, Any]]
    ) -> list[dict[str, Any]]:
        try:
            response = await self._client.table(collection).insert(rows).execute()
        except Exception as e:
            raise _record_error(e, collection, "insert into")

        created = response.data or []
        logger.info(f"Inserted {len(created)} rows into {collection}")
        return created

    async def count(self, collection: str) -> int:
        try:
            response = await (
                self._client.table(collection)
                .select("id", count="exact")
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise _record_error(e, collection, "count")

        return response.count or 0


class SupabaseBlobStore:
    """BlobStore backed by Supabase Storage buckets."""

    def __init__(self, client: AsyncClient):
        self._client = client

    async def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str | None = None,
    ) -> None:
        file_options = {"content-type": content_type} if content_type else {}

        try:
            await self._client.storage.from_(bucket).upload(
                path=path,
                file=data,
                file_options=file_options,
            )
        except Exception as e:
            logger.error(f"Storage upload failed for {bucket}/{path}: {e}")
            raise BlobStoreError(
                getattr(e, "message", None) or str(e) or "Upload failed",
                bucket=bucket,
                path=path,
                status=str(getattr(e, "status", "") or "") or None,
            )

        logger.info(f"Uploaded file to storage: {bucket}/{path}")

    async def public_url(self, bucket: str, path: str) -> str:
        url = self._client.storage.from_(bucket).get_public_url(path)
        # The async storage client returns a coroutine here, the sync one a str
        if inspect.isawaitable(url):
            url = await url
        return url
