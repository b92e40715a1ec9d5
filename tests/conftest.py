# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - In-memory record and blob stores that share one call log, so tests can
#   assert on the exact order of remote calls
# - Failure injection per (operation, collection) and per upload
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length-for-hs256")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import asyncio
import uuid
from typing import Any

import pytest

from core.backends import (
    ACTIVITIES,
    ASSETS,
    CATEGORIES,
    LEVELS,
    STUDENTS,
    BlobStoreError,
    RecordStoreError,
    StaticIdentity,
    UserIdentity,
)
from core.models.staging import StagedFile

ADMIN_ID = "6f1c1f7e-3a51-4d5e-9a57-5a8b2c1d9e01"


# =============================================================================
# In-memory collaborators
# =============================================================================

class FakeRecordStore:
    """
    RecordStore kept in dicts.

    Every call is appended to `calls` before it runs. Set
    `failures[(operation, collection)]` to an exception to make that call
    raise it. Set `insert_gate` to an asyncio.Event to hold insert_one
    until the event is set; `insert_started` is set when it is reached.
    """

    def __init__(self, calls: list, tables: dict[str, list[dict]] | None = None):
        self.calls = calls
        self.tables: dict[str, list[dict[str, Any]]] = {
            name: [dict(row) for row in rows] for name, rows in (tables or {}).items()
        }
        self.failures: dict[tuple[str, str], Exception] = {}
        self.insert_gate: asyncio.Event | None = None
        self.insert_started: asyncio.Event | None = None
        self._clock = 0

    def _check(self, operation: str, collection: str) -> None:
        error = self.failures.get((operation, collection))
        if error is not None:
            raise error

    def _stamp(self, row: dict[str, Any]) -> dict[str, Any]:
        self._clock += 1
        stored = {"id": str(uuid.uuid4()), **row}
        stored.setdefault("created_at", f"2024-06-01T10:{self._clock // 60:02d}:{self._clock % 60:02d}+00:00")
        return stored

    async def select_all(self, collection, columns="*", order_by=None, descending=False):
        self.calls.append(("select_all", collection))
        self._check("select_all", collection)

        rows = [dict(row) for row in self.tables.get(collection, [])]
        if order_by:
            rows.sort(key=lambda row: row.get(order_by) or "", reverse=descending)
        if "assets(*)" in columns:
            for row in rows:
                row["assets"] = [
                    dict(asset) for asset in self.tables.get(ASSETS, [])
                    if asset["activity_id"] == row["id"]
                ]
        return rows

    async def select_by_id(self, collection, record_id, columns="*"):
        self.calls.append(("select_by_id", collection))
        self._check("select_by_id", collection)
        for row in self.tables.get(collection, []):
            if row["id"] == record_id:
                return dict(row)
        return None

    async def insert_one(self, collection, row):
        self.calls.append(("insert_one", collection))
        if self.insert_started is not None:
            self.insert_started.set()
        if self.insert_gate is not None:
            await self.insert_gate.wait()
        self._check("insert_one", collection)

        stored = self._stamp(row)
        self.tables.setdefault(collection, []).append(stored)
        return dict(stored)

    async def insert_many(self, collection, rows):
        self.calls.append(("insert_many", collection, len(rows)))
        self._check("insert_many", collection)

        stored = [self._stamp(row) for row in rows]
        self.tables.setdefault(collection, []).extend(stored)
        return [dict(row) for row in stored]

    async def count(self, collection):
        self.calls.append(("count", collection))
        self._check("count", collection)
        return len(self.tables.get(collection, []))


class FakeBlobStore:
    """
    BlobStore kept in a dict of path -> (bytes, content type).

    Set `fail_at` to the 0-based upload number that should fail.
    """

    def __init__(self, calls: list):
        self.calls = calls
        self.objects: dict[str, tuple[bytes, str | None]] = {}
        self.fail_at: int | None = None
        self._uploads = 0

    async def upload(self, bucket, path, data, content_type=None):
        self.calls.append(("upload", path))
        attempt = self._uploads
        self._uploads += 1
        if self.fail_at is not None and attempt == self.fail_at:
            raise BlobStoreError("The resource already exists", bucket=bucket, path=path, status="409")
        self.objects[f"{bucket}/{path}"] = (data, content_type)

    async def public_url(self, bucket, path):
        return f"https://test-project.supabase.co/storage/v1/object/public/{bucket}/{path}"


def make_file(name: str = "notes.pdf", content_type: str = "application/pdf", data: bytes = b"%PDF-1.4 test") -> StagedFile:
    """A staged attachment with some bytes."""
    return StagedFile(name=name, content_type=content_type, data=data)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def call_log():
    """Remote calls, in the order they were made, across both stores."""
    return []


@pytest.fixture
def taxonomy_rows():
    """Categories and levels, deliberately not sorted by name."""
    return {
        CATEGORIES: [
            {"id": "cat-2", "name": "Data Structures"},
            {"id": "cat-1", "name": "Algorithms"},
        ],
        LEVELS: [
            {"id": "lvl-2", "name": "Intermediate"},
            {"id": "lvl-1", "name": "Beginner"},
        ],
    }


@pytest.fixture
def records(call_log, taxonomy_rows):
    """Record store with taxonomy and one admin student."""
    return FakeRecordStore(
        call_log,
        tables={
            **taxonomy_rows,
            STUDENTS: [{"id": ADMIN_ID, "email": "admin@example.com", "is_admin": True}],
            ACTIVITIES: [],
            ASSETS: [],
        },
    )


@pytest.fixture
def blobs(call_log):
    return FakeBlobStore(call_log)


@pytest.fixture
def admin_identity():
    """Identity provider that always returns the admin."""
    return StaticIdentity(UserIdentity(id=ADMIN_ID, email="admin@example.com"))


@pytest.fixture
def valid_form():
    """Form fields that pass validation."""
    return {
        "title": "  Intro to Loops  ",
        "description": " Iterating over lists ",
        "content": "<h1>Loops</h1><p>for x in xs</p>",
        "category_id": "cat-1",
        "level_id": "lvl-1",
    }


@pytest.fixture
def record_store_error():
    """A PostgREST-shaped failure."""
    return RecordStoreError(
        "duplicate key value violates unique constraint",
        code="23505",
        details="Key (title)=(Intro) already exists.",
        hint="Use a different title",
        collection=ACTIVITIES,
    )
