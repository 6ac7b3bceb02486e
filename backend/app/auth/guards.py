"""
Authorization Guards
====================
Three checks that run before a route body:

    require_auth            any session identity
    require_admin           identity with role "admin"
    require_owner_or_admin  admin, or the user whose username is the
                            record's ``created_by``

The plain functions take the identity explicitly so they can be called
and tested without a request. The ``*_dependency`` wrappers plug them into
FastAPI's ``Depends``.

The owner check reads the record once and hands it to the handler. A
concurrent delete between that read and the handler's write surfaces as
NotFound from the write; the request still fails safely.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends

from app.auth.session import get_session_identity
from app.db.store import ExerciseStore
from app.db.supabase import get_exercise_store
from app.errors import Forbidden, NotFound, Unauthorized
from app.models.auth import SessionIdentity
from app.services.exercises import parse_exercise_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OwnerAccess:
    """Result of a passed owner-or-admin check.

    ``record`` is the row loaded for the ownership comparison; it is None
    when an admin passed without a lookup.
    """

    identity: SessionIdentity
    exercise_id: str
    record: Optional[dict] = None


# ---------------------------------------------------------------------------
# Guards
# ---------------------------------------------------------------------------

def require_auth(identity: Optional[SessionIdentity]) -> SessionIdentity:
    if identity is None:
        raise Unauthorized()
    return identity


def require_admin(identity: Optional[SessionIdentity]) -> SessionIdentity:
    identity = require_auth(identity)
    if not identity.is_admin:
        logger.info("Admin route refused for user %s", identity.username)
        raise Forbidden()
    return identity


def require_owner_or_admin(
    identity: Optional[SessionIdentity],
    store: ExerciseStore,
    exercise_id: str,
) -> OwnerAccess:
    identity = require_auth(identity)
    if identity.is_admin:
        return OwnerAccess(identity=identity, exercise_id=exercise_id)

    exercise_id = parse_exercise_id(exercise_id)
    record = store.get(exercise_id)
    if record is None:
        raise NotFound()

    if record.get("created_by") != identity.username:
        logger.info(
            "User %s refused on exercise %s owned by %s",
            identity.username, exercise_id, record.get("created_by"),
        )
        raise Forbidden()

    return OwnerAccess(identity=identity, exercise_id=exercise_id, record=record)


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------

def auth_dependency(
    identity: Optional[SessionIdentity] = Depends(get_session_identity),
) -> SessionIdentity:
    return require_auth(identity)


def admin_dependency(
    identity: Optional[SessionIdentity] = Depends(get_session_identity),
) -> SessionIdentity:
    return require_admin(identity)


def owner_or_admin_dependency(
    exercise_id: str,
    identity: Optional[SessionIdentity] = Depends(get_session_identity),
    store: ExerciseStore = Depends(get_exercise_store),
) -> OwnerAccess:
    return require_owner_or_admin(identity, store, exercise_id)
