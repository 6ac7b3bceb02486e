"""
Store Adapters
==============
Thin, table-scoped wrappers over the Supabase client.

Each adapter owns exactly one table and exposes plain dict rows. Every
PostgREST / transport failure is logged here and re-raised as
``StoreError`` so callers never see driver exceptions. Single-row
operations rely on the database for atomicity; nothing here spans
more than one row.
"""

from __future__ import annotations

import logging
from typing import Optional

from supabase import Client

from app.errors import StoreError
from app.models.exercise import SEARCH_COLUMNS, ExerciseQuery

logger = logging.getLogger(__name__)


def _ilike_term(term: str) -> str:
    """Quote a search term for use inside a PostgREST ``or`` filter.

    ``\\``, ``%`` and ``_`` are escaped first so Postgres matches them
    literally. The result is then wrapped in PostgREST double quotes, which
    keep commas and parentheses from being read as filter syntax and need
    their own escaping of ``\\`` and ``"``. ``*`` is PostgREST's URL-safe
    wildcard.
    """
    literal = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    quoted = literal.replace("\\", "\\\\").replace('"', '\\"')
    return f'"*{quoted}*"'


def search_filter(term: str) -> str:
    """Case-insensitive substring match on any of the search columns."""
    quoted = _ilike_term(term)
    return ",".join(f"{column}.ilike.{quoted}" for column in SEARCH_COLUMNS)


class ExerciseStore:
    """The exercises table."""

    def __init__(self, client: Client, table: str = "exercises") -> None:
        self._db = client
        self._table = table

    def find(self, query: ExerciseQuery) -> list[dict]:
        columns = query.columns
        try:
            builder = self._db.table(self._table).select(",".join(columns) if columns else "*")
            if query.search:
                builder = builder.or_(search_filter(query.search))
            if query.sort_column:
                builder = builder.order(query.sort_column, desc=query.sort_desc)
            result = builder.execute()
        except Exception as exc:
            logger.error("Exercise query failed on %s: %s", self._table, exc)
            raise StoreError() from exc
        return result.data or []

    def get(self, exercise_id: str) -> Optional[dict]:
        try:
            result = (
                self._db.table(self._table)
                .select("*")
                .eq("id", exercise_id)
                .maybe_single()
                .execute()
            )
        except Exception as exc:
            logger.error("Exercise lookup %s failed: %s", exercise_id, exc)
            raise StoreError() from exc
        # Newer postgrest clients return None instead of an empty response.
        if result is None or not result.data:
            return None
        return result.data

    def insert(self, row: dict) -> dict:
        rows = self.insert_many([row])
        return rows[0]

    def insert_many(self, rows: list[dict]) -> list[dict]:
        try:
            result = self._db.table(self._table).insert(rows).execute()
        except Exception as exc:
            logger.error("Exercise insert failed on %s: %s", self._table, exc)
            raise StoreError() from exc
        if not result.data:
            logger.error("Exercise insert on %s returned no rows", self._table)
            raise StoreError()
        return result.data

    def update(self, exercise_id: str, values: dict) -> Optional[dict]:
        """Apply *values* to one row. Returns None if the row does not exist."""
        try:
            result = (
                self._db.table(self._table)
                .update(values)
                .eq("id", exercise_id)
                .execute()
            )
        except Exception as exc:
            logger.error("Exercise update %s failed: %s", exercise_id, exc)
            raise StoreError() from exc
        return result.data[0] if result.data else None

    def delete(self, exercise_id: str) -> bool:
        """Delete one row. Returns False if nothing was deleted."""
        try:
            result = self._db.table(self._table).delete().eq("id", exercise_id).execute()
        except Exception as exc:
            logger.error("Exercise delete %s failed: %s", exercise_id, exc)
            raise StoreError() from exc
        return bool(result.data)

    def count(self) -> int:
        return _count_rows(self._db, self._table)


class UserStore:
    """The users table. Rows carry the password hash; never return them raw."""

    def __init__(self, client: Client, table: str = "users") -> None:
        self._db = client
        self._table = table

    def get_by_username(self, username: str) -> Optional[dict]:
        try:
            result = (
                self._db.table(self._table)
                .select("*")
                .eq("username", username)
                .maybe_single()
                .execute()
            )
        except Exception as exc:
            logger.error("User lookup failed: %s", exc)
            raise StoreError() from exc
        if result is None or not result.data:
            return None
        return result.data

    def insert(self, row: dict) -> dict:
        try:
            result = self._db.table(self._table).insert(row).execute()
        except Exception as exc:
            logger.error("User insert failed: %s", exc)
            raise StoreError() from exc
        if not result.data:
            logger.error("User insert returned no rows")
            raise StoreError()
        return result.data[0]

    def list_all(self) -> list[dict]:
        try:
            result = (
                self._db.table(self._table)
                .select("id,username,role,created_at")
                .order("created_at")
                .execute()
            )
        except Exception as exc:
            logger.error("User listing failed: %s", exc)
            raise StoreError() from exc
        return result.data or []


class ContactStore:
    """Messages from the contact form."""

    def __init__(self, client: Client, table: str = "contacts") -> None:
        self._db = client
        self._table = table

    def insert(self, row: dict) -> dict:
        try:
            result = self._db.table(self._table).insert(row).execute()
        except Exception as exc:
            logger.error("Contact insert failed: %s", exc)
            raise StoreError() from exc
        return result.data[0] if result.data else row

    def count(self) -> int:
        return _count_rows(self._db, self._table)


def _count_rows(db: Client, table: str) -> int:
    try:
        result = db.table(table).select("id", count="exact").execute()
    except Exception as exc:
        logger.error("Row count on %s failed: %s", table, exc)
        raise StoreError() from exc
    return int(result.count or 0)
