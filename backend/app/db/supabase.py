"""
Supabase Client
===============
Provides the configured Supabase client and the table-scoped stores for
dependency injection into FastAPI routes.

Uses the service_role key (not the anon key): authorization is enforced
by the API's own guards, not by row-level security. The client is built
once and shared; routes receive stores through ``Depends`` so tests can
swap them via ``app.dependency_overrides``.

A client that cannot be built (missing key, bad URL) is reported as
``StoreError``, the same as any other database failure. Failures are not
cached, so the next call tries again.
"""

import logging
from functools import lru_cache

from supabase import Client, create_client

from app.config import get_settings
from app.db.store import ContactStore, ExerciseStore, UserStore
from app.errors import StoreError

logger = logging.getLogger(__name__)


@lru_cache
def get_supabase_client() -> Client:
    settings = get_settings()
    try:
        return create_client(settings.supabase_url, settings.supabase_service_key)
    except Exception as exc:
        logger.error("Supabase client for %s could not be created: %s", settings.supabase_url, exc)
        raise StoreError() from exc


def get_exercise_store() -> ExerciseStore:
    return ExerciseStore(get_supabase_client(), table=get_settings().exercises_table)


def get_user_store() -> UserStore:
    return UserStore(get_supabase_client(), table=get_settings().users_table)


def get_contact_store() -> ContactStore:
    return ContactStore(get_supabase_client(), table=get_settings().contacts_table)
