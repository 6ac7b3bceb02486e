"""
Shared test fixtures
====================
In-memory stand-ins for the Supabase-backed stores, plus a TestClient
wired to them through ``app.dependency_overrides``.

The fakes implement the same methods as ``app.db.store`` and the same
semantics the PostgREST queries express (case-insensitive OR search,
ordering, column projection), so router tests exercise real handler and
guard logic end to end.
"""

from __future__ import annotations

import uuid
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from app.auth.security import issue_session_token
from app.config import get_settings
from app.db.supabase import get_contact_store, get_exercise_store, get_user_store
from app.models.auth import SessionIdentity
from app.models.exercise import SEARCH_COLUMNS, ExerciseQuery


class InMemoryExerciseStore:
    def __init__(self, rows: Optional[list[dict]] = None) -> None:
        self.rows: dict[str, dict] = {}
        self.get_calls = 0
        # Drop each row right after it is read, as a concurrent delete would.
        self.vanish_after_get = False
        for row in rows or []:
            self.insert(row)

    def find(self, query: ExerciseQuery) -> list[dict]:
        rows = list(self.rows.values())
        if query.search:
            needle = query.search.lower()
            rows = [
                r for r in rows
                if any(needle in str(r.get(col) or "").lower() for col in SEARCH_COLUMNS)
            ]
        if query.sort_column:
            rows.sort(
                key=lambda r: (r.get(query.sort_column) is None, r.get(query.sort_column)),
                reverse=query.sort_desc,
            )
        if query.columns:
            rows = [{c: r.get(c) for c in query.columns} for r in rows]
        return [dict(r) for r in rows]

    def get(self, exercise_id: str) -> Optional[dict]:
        self.get_calls += 1
        row = self.rows.get(exercise_id)
        if self.vanish_after_get:
            self.rows.pop(exercise_id, None)
        return dict(row) if row else None

    def insert(self, row: dict) -> dict:
        stored = {"id": str(uuid.uuid4()), **row}
        self.rows[stored["id"]] = stored
        return dict(stored)

    def insert_many(self, rows: list[dict]) -> list[dict]:
        return [self.insert(r) for r in rows]

    def update(self, exercise_id: str, values: dict) -> Optional[dict]:
        if exercise_id not in self.rows:
            return None
        self.rows[exercise_id].update(values)
        return dict(self.rows[exercise_id])

    def delete(self, exercise_id: str) -> bool:
        return self.rows.pop(exercise_id, None) is not None

    def count(self) -> int:
        return len(self.rows)


class InMemoryUserStore:
    def __init__(self) -> None:
        self.rows: list[dict] = []

    def get_by_username(self, username: str) -> Optional[dict]:
        for row in self.rows:
            if row["username"] == username:
                return dict(row)
        return None

    def insert(self, row: dict) -> dict:
        stored = {"id": str(uuid.uuid4()), **row}
        self.rows.append(stored)
        return dict(stored)

    def list_all(self) -> list[dict]:
        return [
            {k: r.get(k) for k in ("id", "username", "role", "created_at")}
            for r in self.rows
        ]


class InMemoryContactStore:
    def __init__(self) -> None:
        self.rows: list[dict] = []

    def insert(self, row: dict) -> dict:
        self.rows.append(row)
        return row

    def count(self) -> int:
        return len(self.rows)


# ---------------------------------------------------------------------------
# Identity helpers
# ---------------------------------------------------------------------------

ALICE = SessionIdentity(id=str(uuid.uuid4()), username="alice", role="user")
BOB = SessionIdentity(id=str(uuid.uuid4()), username="bob", role="user")
ADMIN = SessionIdentity(id=str(uuid.uuid4()), username="admin", role="admin")


def login_as(client: TestClient, identity: Optional[SessionIdentity]) -> None:
    """Set (or clear) the session cookie on *client*."""
    settings = get_settings()
    client.cookies.clear()
    if identity is None:
        return
    token = issue_session_token(identity, settings)
    client.cookies.set(settings.session_cookie_name, token)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def exercise_store() -> InMemoryExerciseStore:
    return InMemoryExerciseStore()


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def contact_store() -> InMemoryContactStore:
    return InMemoryContactStore()


@pytest.fixture
def client(exercise_store, user_store, contact_store):
    from app.main import app

    app.dependency_overrides[get_exercise_store] = lambda: exercise_store
    app.dependency_overrides[get_user_store] = lambda: user_store
    app.dependency_overrides[get_contact_store] = lambda: contact_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
