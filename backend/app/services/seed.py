"""
Startup Seeding
===============
Gives a fresh database something to show: three starter exercises when
the exercises table is empty, and an admin account when none exists.

Seeding is best-effort. A store failure is logged and the app still
starts; the next restart tries again.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from app.config import Settings
from app.db.store import ExerciseStore, UserStore
from app.errors import StoreError
from app.services.accounts import AccountService

logger = logging.getLogger(__name__)

DEFAULT_EXERCISES: list[dict] = [
    {
        "title": "Push Up",
        "description": "Basic upper-body pushing exercise.",
        "muscle": "chest",
        "difficulty": "beginner",
        "duration_minutes": 5,
    },
    {
        "title": "Squat",
        "description": "Compound lower-body exercise.",
        "muscle": "legs",
        "difficulty": "beginner",
        "duration_minutes": 8,
    },
    {
        "title": "Plank",
        "description": "Core stability exercise.",
        "muscle": "core",
        "difficulty": "beginner",
        "duration_minutes": 5,
    },
]


def seed_exercises(store: ExerciseStore) -> int:
    """Insert the starter exercises into an empty table. Returns rows added."""
    if store.count() > 0:
        return 0
    now = datetime.now(timezone.utc).isoformat()
    rows = store.insert_many([{**row, "created_at": now} for row in DEFAULT_EXERCISES])
    logger.info("Seeded %d exercises", len(rows))
    return len(rows)


def seed_admin(accounts: AccountService, settings: Settings) -> bool:
    created = accounts.ensure_admin(settings.bootstrap_admin_username, settings.bootstrap_admin_password)
    if created:
        logger.info("Seeded admin user: %s", settings.bootstrap_admin_username)
    return created


def run_startup_seed(
    settings: Settings,
    exercise_store: Callable[[], ExerciseStore],
    user_store: Callable[[], UserStore],
) -> None:
    """Seed through the given store factories.

    The factories are called inside the guarded block so a client that
    cannot be built is reported like any other store failure.
    """
    if not settings.seed_on_startup:
        return
    try:
        seed_exercises(exercise_store())
        seed_admin(AccountService(user_store()), settings)
    except StoreError:
        logger.warning("Startup seeding skipped: store unavailable")
