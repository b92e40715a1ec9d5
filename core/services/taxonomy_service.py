# =============================================================================
# core/services/taxonomy_service.py - Category/Level Loading
# =============================================================================
# Loads the category and level options for the new-activity form.
# Both lists are fetched together, once per loader. A failed fetch is not
# fatal: it is logged and the list stays empty, which the form shows as a
# selector that is still loading.
# =============================================================================

import asyncio
import logging

from pydantic import ValidationError

from core.backends import CATEGORIES, LEVELS, RecordStore, RecordStoreError
from core.models.taxonomy import TaxonomyItem, TaxonomyResponse

logger = logging.getLogger(__name__)


class TaxonomyLoader:
    """
    Read-only category and level options, ordered by name.

    Example:
        loader = TaxonomyLoader(records)
        await loader.load()
        loader.categories  # (TaxonomyItem(id="c1", name="Algorithms"), ...)
    """

    def __init__(self, records: RecordStore):
        self._records = records
        self._categories: tuple[TaxonomyItem, ...] = ()
        self._levels: tuple[TaxonomyItem, ...] = ()
        self._loaded = False

    @property
    def categories(self) -> tuple[TaxonomyItem, ...]:
        return self._categories

    @property
    def levels(self) -> tuple[TaxonomyItem, ...]:
        return self._levels

    @property
    def categories_loading(self) -> bool:
        return not self._categories

    @property
    def levels_loading(self) -> bool:
        return not self._levels

    async def load(self) -> None:
        """Fetch both lists concurrently. Later calls are no-ops."""
        if self._loaded:
            return
        self._loaded = True

        categories, levels = await asyncio.gather(
            self._fetch(CATEGORIES),
            self._fetch(LEVELS),
        )
        self._categories = categories
        self._levels = levels

        logger.info(
            f"Loaded taxonomy: {len(categories)} categories, {len(levels)} levels"
        )

    async def _fetch(self, collection: str) -> tuple[TaxonomyItem, ...]:
        try:
            rows = await self._records.select_all(
                collection, columns="id, name", order_by="name"
            )
        except RecordStoreError as e:
            logger.error(
                f"{collection.capitalize()} load error: {e.message} "
                f"(code={e.code}, details={e.details}, hint={e.hint})"
            )
            return ()

        items: list[TaxonomyItem] = []
        for row in rows:
            try:
                items.append(TaxonomyItem(id=str(row["id"]), name=row["name"]))
            except (KeyError, ValidationError) as e:
                logger.warning(f"Skipping malformed {collection} row {row.get('id')}: {e}")
        return tuple(items)

    def to_response(self) -> TaxonomyResponse:
        return TaxonomyResponse(
            categories=list(self._categories),
            levels=list(self._levels),
            categories_loading=self.categories_loading,
            levels_loading=self.levels_loading,
            category_placeholder="Loading..." if self.categories_loading else "Select category",
            level_placeholder="Loading..." if self.levels_loading else "Select level",
        )
