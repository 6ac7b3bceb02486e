"""
Exercise Query Builder
======================
Turns the list endpoint's query parameters into an ``ExerciseQuery``:

    q       free-text, case-insensitive substring over title / description / muscle
    sortBy  ``field:direction``; descending only when direction is exactly ``desc``
    fields  comma-separated public field names to return

The builder is deliberately permissive. Unknown field names are dropped
and a ``sortBy`` whose key is empty or unknown means "no sort" rather
than a 400.
"""

from __future__ import annotations

import logging
from typing import Optional

from app.models.exercise import PUBLIC_FIELDS, SORTABLE_FIELDS, ExerciseQuery, resolve_column

logger = logging.getLogger(__name__)


def parse_sort(sort_by: Optional[str]) -> tuple[Optional[str], bool]:
    """Return ``(column, descending)`` for a ``field:direction`` string."""
    if not sort_by:
        return None, False

    parts = sort_by.split(":")
    key = parts[0].strip()
    direction = parts[1].strip() if len(parts) > 1 else ""
    descending = direction == "desc"

    if not key:
        return None, descending

    column = resolve_column(key, SORTABLE_FIELDS)
    if column is None:
        logger.debug("Ignoring sort on unknown field %r", key)
    return column, descending


def parse_fields(fields: Optional[str]) -> Optional[tuple[str, ...]]:
    """Return the public field names to project, always including ``id``.

    None means "all public fields", which is also what an entirely
    unrecognised list falls back to.
    """
    if not fields:
        return None

    columns_to_public = {column: name for name, column in PUBLIC_FIELDS.items()}
    selected: list[str] = []
    for raw in fields.split(","):
        name = raw.strip()
        if not name:
            continue
        if name not in PUBLIC_FIELDS:
            name = columns_to_public.get(name, "")
        if name and name not in selected:
            selected.append(name)

    if not selected:
        return None
    if "id" not in selected:
        selected.insert(0, "id")
    return tuple(selected)


def build_query(
    q: Optional[str] = None,
    sort_by: Optional[str] = None,
    fields: Optional[str] = None,
) -> ExerciseQuery:
    sort_column, sort_desc = parse_sort(sort_by)
    return ExerciseQuery(
        search=q or None,
        sort_column=sort_column,
        sort_desc=sort_desc,
        fields=parse_fields(fields),
    )
