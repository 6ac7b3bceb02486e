"""
Exercise Catalog Router
=======================
CRUD over the exercises table. Mounted twice by ``app.main``, under
``/api/items`` and ``/api/exercises``, so both URL styles used by the
frontend keep working.

    GET    ""                list (q / sortBy / fields)
    GET    "/{exercise_id}"  fetch one
    POST   ""                create            login required
    PUT    "/{exercise_id}"  replace fields    owner or admin
    DELETE "/{exercise_id}"  remove            owner or admin

Reads are public. Guards run as dependencies, so an anonymous or
non-owning caller is refused before the body is looked at.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.auth.guards import OwnerAccess, auth_dependency, owner_or_admin_dependency
from app.db.store import ExerciseStore
from app.db.supabase import get_exercise_store
from app.models.auth import SessionIdentity
from app.models.exercise import ExercisePublic, ExerciseWrite
from app.services.exercises import ExerciseService
from app.services.query_builder import build_query

logger = logging.getLogger(__name__)

router = APIRouter(tags=["exercises"])


_ERROR_RESPONSES = {
    400: {"description": "Invalid id or invalid fields"},
    401: {"description": "Login required"},
    403: {"description": "Not the owner and not an admin"},
    404: {"description": "Exercise not found"},
}


def get_exercise_service(store: ExerciseStore = Depends(get_exercise_store)) -> ExerciseService:
    return ExerciseService(store)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=list[ExercisePublic],
    response_model_exclude_unset=True,
    summary="List exercises",
    description=(
        "Optional case-insensitive search over title, description and muscle (q), "
        "sorting as field:asc|desc (sortBy) and a comma-separated projection (fields)."
    ),
)
async def list_exercises(
    q: Optional[str] = Query(None, description="Substring to search for"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="field:asc or field:desc"),
    fields: Optional[str] = Query(None, description="Comma-separated field names"),
    service: ExerciseService = Depends(get_exercise_service),
) -> list[ExercisePublic]:
    query = build_query(q=q, sort_by=sort_by, fields=fields)
    return service.list_all(query)


@router.get(
    "/{exercise_id}",
    response_model=ExercisePublic,
    summary="Get one exercise",
    responses={400: _ERROR_RESPONSES[400], 404: _ERROR_RESPONSES[404]},
)
async def get_exercise(
    exercise_id: str,
    service: ExerciseService = Depends(get_exercise_service),
) -> ExercisePublic:
    return service.get(exercise_id)


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

@router.post(
    "",
    response_model=ExercisePublic,
    status_code=status.HTTP_201_CREATED,
    summary="Create an exercise",
    description="The caller becomes the exercise's owner (createdBy).",
    responses={400: _ERROR_RESPONSES[400], 401: _ERROR_RESPONSES[401]},
)
async def create_exercise(
    body: ExerciseWrite,
    identity: SessionIdentity = Depends(auth_dependency),
    service: ExerciseService = Depends(get_exercise_service),
) -> ExercisePublic:
    return service.create(identity, body)


@router.put(
    "/{exercise_id}",
    response_model=ExercisePublic,
    summary="Update an exercise",
    description="Replaces title, description, muscle, difficulty and durationMinutes.",
    responses=_ERROR_RESPONSES,
)
async def update_exercise(
    exercise_id: str,
    body: ExerciseWrite,
    access: OwnerAccess = Depends(owner_or_admin_dependency),
    service: ExerciseService = Depends(get_exercise_service),
) -> ExercisePublic:
    return service.update(access.identity, exercise_id, body, existing=access.record)


@router.delete(
    "/{exercise_id}",
    summary="Delete an exercise",
    responses=_ERROR_RESPONSES,
)
async def delete_exercise(
    exercise_id: str,
    access: OwnerAccess = Depends(owner_or_admin_dependency),
    service: ExerciseService = Depends(get_exercise_service),
) -> dict:
    service.delete(access.identity, exercise_id, existing=access.record)
    return {"success": True}
