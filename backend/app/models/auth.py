"""
Auth Schemas
============
Session identity plus the request / response bodies of the /auth routes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


VALID_ROLES = frozenset({"user", "admin"})


class SessionIdentity(BaseModel):
    """Who is calling. Absent (None) for anonymous requests."""

    model_config = ConfigDict(frozen=True)

    id: str
    username: str
    role: Literal["user", "admin"] = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class Credentials(BaseModel):
    """Body of /auth/register and /auth/login."""

    username: Optional[str] = None
    password: Optional[str] = None


class MeResponse(BaseModel):
    user: Optional[SessionIdentity] = None


class UserPublic(BaseModel):
    """User row without the password hash, as listed by admins."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    username: str
    role: str = "user"
    created_at: Optional[datetime] = None
