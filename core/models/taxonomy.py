# =============================================================================
# core/models/taxonomy.py - Taxonomy Schemas
# =============================================================================
# Categories and levels classify every activity. Both are read-only lists
# maintained directly in the database; the dashboard only selects from them.
# =============================================================================

from pydantic import BaseModel, Field


class TaxonomyItem(BaseModel):
    """
    A single category or level option.

    Example:
        {"id": "5b1c...", "name": "Beginner"}
    """

    id: str = Field(..., description="Category or level identifier")
    name: str = Field(..., description="Display name")

    model_config = {"frozen": True}


class TaxonomyResponse(BaseModel):
    """
    Options for the category and level selectors.

    An empty list means the options never arrived; the selector keeps
    showing its loading placeholder rather than failing the form.
    """

    categories: list[TaxonomyItem] = Field(default_factory=list)
    levels: list[TaxonomyItem] = Field(default_factory=list)
    categories_loading: bool = True
    levels_loading: bool = True
    category_placeholder: str = "Loading..."
    level_placeholder: str = "Loading..."
