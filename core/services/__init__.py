# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .activity_service import ActivityListing
from .draft_service import DraftRegistry, draft_registry
from .staging_service import FileStaging, is_accepted_type
from .stats_service import get_dashboard_stats
from .submission_service import ActivitySubmission, build_storage_path
from .taxonomy_service import TaxonomyLoader

__all__ = [
    "ActivityListing",
    "ActivitySubmission",
    "DraftRegistry",
    "FileStaging",
    "TaxonomyLoader",
    "build_storage_path",
    "draft_registry",
    "get_dashboard_stats",
    "is_accepted_type",
]
