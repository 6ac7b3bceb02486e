"""
Exercise Service
================
List / get / create / update / delete over the exercises table.

Authorization is not checked here: routes run the guards first and pass
the resulting identity (and, for owner checks, the already-loaded record)
in explicitly. Input checks are limited to what the catalog needs:

    - title and description must be non-empty
    - durationMinutes must be numeric when supplied (empty means null)

Store failures arrive as ``StoreError`` from the adapter and are left to
propagate.
"""

from __future__ import annotations

import logging
import math
import uuid
from datetime import datetime, timezone
from typing import Any, Optional, Union

from app.db.store import ExerciseStore
from app.errors import InvalidArgument, NotFound
from app.models.auth import SessionIdentity
from app.models.exercise import ExercisePublic, ExerciseQuery, ExerciseWrite, to_public

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Input checks
# ---------------------------------------------------------------------------

def parse_exercise_id(raw: str) -> str:
    """Return the canonical id or raise InvalidArgument.

    Ids are UUIDs generated by the database; anything else can never match
    a row, so it is rejected before touching the store.
    """
    try:
        return str(uuid.UUID(str(raw)))
    except (ValueError, TypeError, AttributeError):
        raise InvalidArgument("Invalid id", code="invalid_id")


def coerce_duration(value: Any) -> Optional[Union[int, float]]:
    """Normalise ``durationMinutes``: empty -> None, numeric -> number."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise InvalidArgument("durationMinutes must be a number", code="invalid_duration")
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise InvalidArgument("durationMinutes must be a number", code="invalid_duration")
        if number.is_integer():
            number = int(number)
    else:
        raise InvalidArgument("durationMinutes must be a number", code="invalid_duration")

    if isinstance(number, float) and not math.isfinite(number):
        raise InvalidArgument("durationMinutes must be a number", code="invalid_duration")
    return number


def _optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_exercise(body: ExerciseWrite) -> dict:
    """Return the column values for an insert / update of *body*."""
    title = (body.title or "").strip()
    description = (body.description or "").strip()
    if not title or not description:
        raise InvalidArgument("Missing fields: title, description", code="missing_fields")

    return {
        "title": title,
        "description": description,
        "muscle": _optional_text(body.muscle),
        "difficulty": _optional_text(body.difficulty),
        "duration_minutes": coerce_duration(body.duration_minutes),
    }


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class ExerciseService:
    """Resource handlers for exercises, bound to one store."""

    def __init__(self, store: ExerciseStore) -> None:
        self._store = store

    def list_all(self, query: ExerciseQuery) -> list[ExercisePublic]:
        rows = self._store.find(query)
        return [to_public(row, query.fields) for row in rows]

    def get(self, exercise_id: str) -> ExercisePublic:
        exercise_id = parse_exercise_id(exercise_id)
        row = self._store.get(exercise_id)
        if row is None:
            raise NotFound()
        return to_public(row)

    def create(self, identity: SessionIdentity, body: ExerciseWrite) -> ExercisePublic:
        values = validate_exercise(body)
        values["created_by"] = identity.username
        values["created_at"] = _utcnow_iso()

        row = self._store.insert(values)
        logger.info("Exercise %s created by %s", row.get("id"), identity.username)
        return to_public(row)

    def update(
        self,
        identity: SessionIdentity,
        exercise_id: str,
        body: ExerciseWrite,
        existing: Optional[dict] = None,
    ) -> ExercisePublic:
        """Replace the editable fields of one exercise.

        ``existing`` is the row the owner check already loaded, if any.
        id and created_by are never part of the update.
        """
        exercise_id = parse_exercise_id(exercise_id)
        values = validate_exercise(body)
        values["updated_at"] = _utcnow_iso()

        row = self._store.update(exercise_id, values)
        if row is None:
            if existing is not None:
                logger.info("Exercise %s disappeared before update", exercise_id)
            raise NotFound()

        logger.info("Exercise %s updated by %s", exercise_id, identity.username)
        return to_public(row)

    def delete(
        self,
        identity: SessionIdentity,
        exercise_id: str,
        existing: Optional[dict] = None,
    ) -> None:
        exercise_id = parse_exercise_id(exercise_id)
        if not self._store.delete(exercise_id):
            if existing is not None:
                logger.info("Exercise %s disappeared before delete", exercise_id)
            raise NotFound()

        title = existing.get("title") if existing else None
        logger.info("Exercise %s (%s) deleted by %s", exercise_id, title, identity.username)
