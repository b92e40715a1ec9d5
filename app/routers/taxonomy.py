# =============================================================================
# app/routers/taxonomy.py - Category and Level Options
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import AuthUser, get_current_admin
from app.dependencies import RecordStoreDep
from core.models.taxonomy import TaxonomyResponse
from core.services.taxonomy_service import TaxonomyLoader

router = APIRouter()


@router.get("/taxonomy", response_model=TaxonomyResponse)
async def get_taxonomy(
    records: RecordStoreDep,
    user: AuthUser = Depends(get_current_admin),
):
    """
    Get the category and level options, each ordered by name.

    A list that fails to load is returned empty with its *_loading flag
    still set; this endpoint does not fail because of it.
    """
    loader = TaxonomyLoader(records)
    await loader.load()
    return loader.to_response()
