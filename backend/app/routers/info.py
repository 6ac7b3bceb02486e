"""
Info Router
===========
GET /api/info   project summary (database, routes, counts, uptime)
GET /api/stats  counts and uptime only
"""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends

from app.config import Settings, get_settings
from app.db.store import ContactStore, ExerciseStore
from app.db.supabase import get_contact_store, get_exercise_store

router = APIRouter(prefix="/api", tags=["info"])

_STARTED_AT = time.monotonic()

ROUTES = [
    "GET /api/items (or /api/exercises)",
    "GET /api/items/:id",
    "POST /api/items (login required)",
    "PUT /api/items/:id (owner or admin)",
    "DELETE /api/items/:id (owner or admin)",
    "POST /auth/register",
    "POST /auth/login",
    "POST /auth/logout",
    "GET /auth/me",
    "POST /contact",
]


def uptime_seconds() -> int:
    return int(time.monotonic() - _STARTED_AT)


@router.get("/info", summary="Project summary")
async def info(
    exercises: ExerciseStore = Depends(get_exercise_store),
    contacts: ContactStore = Depends(get_contact_store),
    settings: Settings = Depends(get_settings),
) -> dict:
    return {
        "project": settings.project_name,
        "database": {"type": "supabase", "table": settings.exercises_table},
        "routes": ROUTES,
        "exercisesCount": exercises.count(),
        "contactsCount": contacts.count(),
        "uptimeSeconds": uptime_seconds(),
    }


@router.get("/stats", summary="Counts and uptime")
async def stats(
    exercises: ExerciseStore = Depends(get_exercise_store),
    contacts: ContactStore = Depends(get_contact_store),
) -> dict:
    return {
        "exercisesCount": exercises.count(),
        "contactsCount": contacts.count(),
        "uptimeSeconds": uptime_seconds(),
    }
