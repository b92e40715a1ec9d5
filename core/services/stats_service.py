# =============================================================================
# core/services/stats_service.py - Dashboard Counts
# =============================================================================

import asyncio
import logging

from core.backends import ACTIVITIES, ASSETS, STUDENTS, RecordStore, RecordStoreError
from core.models.dashboard import DashboardStats

logger = logging.getLogger(__name__)


async def _safe_count(records: RecordStore, collection: str) -> int:
    try:
        return await records.count(collection)
    except RecordStoreError as e:
        logger.warning(f"Could not count {collection}: {e.message} (code={e.code})")
        return 0


async def get_dashboard_stats(records: RecordStore) -> DashboardStats:
    """
    Count students, activities and assets in parallel.

    A count that fails is reported as 0 so the page still renders.
    """
    students, activities, assets = await asyncio.gather(
        _safe_count(records, STUDENTS),
        _safe_count(records, ACTIVITIES),
        _safe_count(records, ASSETS),
    )
    return DashboardStats(students=students, activities=activities, assets=assets)
