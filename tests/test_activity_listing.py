# =============================================================================
# tests/test_activity_listing.py - Activity Listing and Dashboard Stats Tests
# =============================================================================
# Run with: pytest tests/test_activity_listing.py -v
# =============================================================================

import asyncio

from core.backends import ACTIVITIES, ASSETS, STUDENTS
from core.services.activity_service import ActivityListing
from core.services.stats_service import get_dashboard_stats


def seed_activities(records):
    records.tables[ACTIVITIES] = [
        {
            "id": "act-old",
            "title": "Variables",
            "content": "<p>x = 1</p>",
            "created_at": "2024-01-01T09:00:00+00:00",
        },
        {
            "id": "act-new",
            "title": "Loops",
            "content": "<p>for</p>",
            "created_at": "2024-03-01T09:00:00+00:00",
        },
    ]
    records.tables[ASSETS] = [
        {"id": "as-1", "activity_id": "act-new", "name": "a.pdf", "file_url": "https://x/a.pdf"},
        {"id": "as-2", "activity_id": "act-new", "name": "b.png", "file_url": "https://x/b.png"},
    ]


class TestActivityListing:
    """Tests for ActivityListing."""

    def test_refresh_most_recent_first(self, records):
        seed_activities(records)
        listing = ActivityListing(records)

        activities = asyncio.run(listing.refresh())

        assert [a.id for a in activities] == ["act-new", "act-old"]
        assert listing.loaded is True
        assert listing.loading is False

    def test_attachment_counts(self, records):
        seed_activities(records)
        listing = ActivityListing(records)

        asyncio.run(listing.refresh())

        counts = {a.id: a.attachment_count for a in listing.activities}
        assert counts == {"act-new": 2, "act-old": 0}

    def test_null_asset_embed_counts_as_zero(self, records):
        listing = ActivityListing(records)

        async def select_all(*args, **kwargs):
            return [{"id": "a1", "title": "T", "content": "<p/>", "assets": None}]

        records.select_all = select_all
        asyncio.run(listing.refresh())

        assert listing.activities[0].attachment_count == 0

    def test_failed_refresh_keeps_previous_list(self, records, record_store_error):
        seed_activities(records)
        listing = ActivityListing(records)
        asyncio.run(listing.refresh())

        records.failures[("select_all", ACTIVITIES)] = record_store_error
        activities = asyncio.run(listing.refresh())

        assert len(activities) == 2
        assert listing.loaded is False
        assert listing.loading is False

    def test_to_response(self, records):
        seed_activities(records)
        listing = ActivityListing(records)
        asyncio.run(listing.refresh())

        response = listing.to_response()

        assert response.total == 2
        assert response.loaded is True
        assert response.model_dump()["activities"][0]["attachment_count"] == 2


class TestDashboardStats:
    """Tests for get_dashboard_stats."""

    def test_counts(self, records):
        seed_activities(records)

        stats = asyncio.run(get_dashboard_stats(records))

        assert stats.students == 1
        assert stats.activities == 2
        assert stats.assets == 2

    def test_failed_count_is_zero(self, records, record_store_error):
        seed_activities(records)
        records.failures[("count", STUDENTS)] = record_store_error

        stats = asyncio.run(get_dashboard_stats(records))

        assert stats.students == 0
        assert stats.activities == 2


class TestMalformedRows:
    """Rows that don't parse are skipped, not raised."""

    def test_bad_asset_row_skips_activity(self, records):
        seed_activities(records)
        records.tables[ASSETS].append(
            {"id": "as-3", "activity_id": "act-old", "name": "broken", "file_url": None}
        )
        listing = ActivityListing(records)

        activities = asyncio.run(listing.refresh())

        assert [a.id for a in activities] == ["act-new"]
        assert listing.loaded is True
