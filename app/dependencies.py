# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends() and can be
# replaced in tests through app.dependency_overrides.
# =============================================================================

from typing import Annotated

from fastapi import Depends

from core.backends import BlobStore, RecordStore
from core.services.draft_service import DraftRegistry, draft_registry
from lib.supabase_client import SupabaseBlobStore, SupabaseClient, SupabaseRecordStore


async def get_record_store() -> RecordStore:
    """Record store on top of the shared async Supabase client."""
    client = await SupabaseClient.get_async_client()
    return SupabaseRecordStore(client)


async def get_blob_store() -> BlobStore:
    """Blob store on top of the shared async Supabase client."""
    client = await SupabaseClient.get_async_client()
    return SupabaseBlobStore(client)


def get_draft_registry() -> DraftRegistry:
    """Registry of open new-activity forms."""
    return draft_registry


# Type aliases for dependency injection
RecordStoreDep = Annotated[RecordStore, Depends(get_record_store)]
BlobStoreDep = Annotated[BlobStore, Depends(get_blob_store)]
DraftRegistryDep = Annotated[DraftRegistry, Depends(get_draft_registry)]
