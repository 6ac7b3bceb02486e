"""
Account Service
===============
Registration, credential checks and the bootstrap admin account.

Usernames are unique and stored with surrounding whitespace stripped.
Passwords are hashed with passlib before they reach the users table.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from app.auth.security import hash_password, verify_password
from app.db.store import UserStore
from app.errors import Conflict, InvalidArgument
from app.models.auth import VALID_ROLES, SessionIdentity, UserPublic

logger = logging.getLogger(__name__)


def normalize_username(username: Optional[str]) -> str:
    return (username or "").strip()


def _identity_for(row: dict) -> SessionIdentity:
    return SessionIdentity(id=str(row["id"]), username=row["username"], role=row.get("role") or "user")


class AccountService:
    def __init__(self, users: UserStore) -> None:
        self._users = users

    def register(self, username: Optional[str], password: Optional[str], role: str = "user") -> SessionIdentity:
        username = normalize_username(username)
        if not username or not password:
            raise InvalidArgument("Missing fields: username, password", code="missing_fields")
        if role not in VALID_ROLES:
            raise InvalidArgument("Invalid role", code="invalid_role")

        if self._users.get_by_username(username) is not None:
            raise Conflict("User already exists", code="user_exists")

        row = self._users.insert({
            "username": username,
            "password_hash": hash_password(password),
            "role": role,
            "created_at": datetime.now(timezone.utc).isoformat(),
        })
        logger.info("Registered user %s (role=%s)", username, role)
        return _identity_for(row)

    def authenticate(self, username: Optional[str], password: Optional[str]) -> SessionIdentity:
        username = normalize_username(username)
        if not username or not password:
            raise InvalidArgument("Missing fields: username, password", code="missing_fields")

        row = self._users.get_by_username(username)
        if row is None or not verify_password(password, str(row.get("password_hash") or "")):
            logger.info("Failed login for %s", username)
            raise InvalidArgument("Invalid credentials", code="invalid_credentials")

        return _identity_for(row)

    def ensure_admin(self, username: str, password: str) -> bool:
        """Create the admin account if it does not exist yet.

        Returns True when a user was created.
        """
        username = normalize_username(username)
        if not username or not password:
            return False
        if self._users.get_by_username(username) is not None:
            return False
        self.register(username, password, role="admin")
        return True

    def list_users(self) -> list[UserPublic]:
        return [UserPublic(**row) for row in self._users.list_all()]
