# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains schemas and value types:
# - activity.py: Activity form, insert payloads, and stored rows
# - taxonomy.py: Category/level options
# - staging.py: Staged attachments and per-file upload progress
# - submission.py: Submission outcome and draft (form) state
# - dashboard.py: Headline counts
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Activity Models
# -----------------------------------------------------------------------------
from .activity import (
    ActivityCreate,
    ActivityForm,
    ActivityListResponse,
    ActivityResponse,
    ActivityUpdateRequest,
    AssetCreate,
    AssetResponse,
)

# -----------------------------------------------------------------------------
# Taxonomy Models
# -----------------------------------------------------------------------------
from .taxonomy import TaxonomyItem, TaxonomyResponse

# -----------------------------------------------------------------------------
# Staging Models - Attachments before and during upload
# -----------------------------------------------------------------------------
from .staging import (
    StagedFile,
    StagedFileView,
    StagingResponse,
    UploadProgress,
    UploadStatus,
)

# -----------------------------------------------------------------------------
# Submission Models
# -----------------------------------------------------------------------------
from .submission import (
    DraftResponse,
    SubmissionResponse,
    SubmissionResult,
    SubmissionStatus,
)

# -----------------------------------------------------------------------------
# Dashboard Models
# -----------------------------------------------------------------------------
from .dashboard import DashboardStats

__all__ = [
    # Activity
    "ActivityCreate",
    "ActivityForm",
    "ActivityListResponse",
    "ActivityResponse",
    "ActivityUpdateRequest",
    "AssetCreate",
    "AssetResponse",
    # Taxonomy
    "TaxonomyItem",
    "TaxonomyResponse",
    # Staging
    "StagedFile",
    "StagedFileView",
    "StagingResponse",
    "UploadProgress",
    "UploadStatus",
    # Submission
    "DraftResponse",
    "SubmissionResponse",
    "SubmissionResult",
    "SubmissionStatus",
    # Dashboard
    "DashboardStats",
]
