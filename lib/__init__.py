# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Shared Supabase clients and the record/blob store
#   adapters built on them (import it directly; it depends on core/)
# - utils.py: Shared utilities (error handling, UUID normalization,
#   user-facing error messages)
# =============================================================================

from lib.utils import ApplicationError, display_message, normalize_uuid

__all__ = [
    "ApplicationError",
    "display_message",
    "normalize_uuid",
]
