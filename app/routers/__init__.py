# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - dashboard.py: Overview counts for the dashboard home page
# - taxonomy.py: Category and level options
# - activities.py: Activity listing and one-shot creation
# - drafts.py: Server-side new-activity forms and submission
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import dashboard
from . import taxonomy
from . import activities
from . import drafts

__all__ = [
    "health",
    "dashboard",
    "taxonomy",
    "activities",
    "drafts",
]
