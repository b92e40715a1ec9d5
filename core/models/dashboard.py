# =============================================================================
# core/models/dashboard.py - Dashboard Schemas
# =============================================================================

from pydantic import BaseModel, Field


class DashboardStats(BaseModel):
    """
    Headline counts for the dashboard home page.

    Example:
        {"students": 120, "activities": 34, "assets": 88}
    """

    students: int = Field(default=0, ge=0, description="Registered learners")
    activities: int = Field(default=0, ge=0, description="Learning items")
    assets: int = Field(default=0, ge=0, description="Uploaded files")
