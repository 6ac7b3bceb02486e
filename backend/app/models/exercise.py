"""
Exercise Schemas
================
Pydantic models for the exercise catalog API.

The database uses snake_case columns; the JSON contract uses camelCase
(``durationMinutes``, ``createdBy``). The alias generator keeps both in
sync so routers never hand-map field names.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Field maps
# ---------------------------------------------------------------------------

# Public (JSON) name -> column, in response order.
PUBLIC_FIELDS: dict[str, str] = {
    "id": "id",
    "title": "title",
    "description": "description",
    "muscle": "muscle",
    "difficulty": "difficulty",
    "durationMinutes": "duration_minutes",
    "createdBy": "created_by",
}

SORTABLE_FIELDS: dict[str, str] = {
    **PUBLIC_FIELDS,
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}

# Columns matched by the free-text ``q`` search.
SEARCH_COLUMNS = ("title", "description", "muscle")


def resolve_column(name: str, allowed: dict[str, str]) -> Optional[str]:
    """Map a public field name (or its column name) to a column."""
    if name in allowed:
        return allowed[name]
    if name in allowed.values():
        return name
    return None


# ---------------------------------------------------------------------------
# Query descriptor
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ExerciseQuery:
    """Store-level description of a list request."""

    search: Optional[str] = None
    sort_column: Optional[str] = None
    sort_desc: bool = False
    # Public field names to return; None means every public field.
    fields: Optional[tuple[str, ...]] = None

    @property
    def columns(self) -> Optional[tuple[str, ...]]:
        if self.fields is None:
            return None
        return tuple(PUBLIC_FIELDS[f] for f in self.fields)


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

class ExerciseWrite(BaseModel):
    """Body of POST / PUT.

    Everything is optional at the schema level: presence and type checks
    happen in the service so failures come back as 400 with a readable
    message rather than a Pydantic 422.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    muscle: Optional[str] = None
    difficulty: Optional[str] = None
    duration_minutes: Any = None


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------

class ExercisePublic(BaseModel):
    """Public shape of an exercise record."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    muscle: Optional[str] = None
    difficulty: Optional[str] = None
    duration_minutes: Optional[Union[int, float]] = None
    created_by: Optional[str] = None


def to_public(row: dict, fields: Optional[tuple[str, ...]] = None) -> ExercisePublic:
    """Build the public shape from a raw row.

    Missing columns become explicit ``None`` so they serialise as ``null``.
    With a ``fields`` projection only those fields (plus ``id``) are set.
    """
    names = fields or tuple(PUBLIC_FIELDS)
    values = {PUBLIC_FIELDS[name]: row.get(PUBLIC_FIELDS[name]) for name in names}
    values["id"] = str(row["id"])
    return ExercisePublic(**values)
