"""
Passwords and Session Tokens
============================
Password hashes (passlib, pbkdf2_sha256) and the signed token stored in
the session cookie (PyJWT, HS256).

A session token carries the whole identity:

    {"sub": <user id>, "username": ..., "role": "user" | "admin", "iat": ..., "exp": ...}

so no lookup is needed to authorise a request. Signing key and lifetime
come from ``Settings`` (``session_secret``, ``session_max_age_seconds``).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from app.config import Settings
from app.models.auth import SessionIdentity


_pwd = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
_JWT_ALG = "HS256"


class InvalidSessionPayload(ValueError):
    """Signature is valid but the claims do not describe an identity."""


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------

def hash_password(password: str) -> str:
    if not password:
        raise ValueError("password_blank")
    return _pwd.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """False for a wrong password and for a hash passlib can't read."""
    if not password or not password_hash:
        return False
    try:
        return _pwd.verify(password, password_hash)
    except (ValueError, TypeError):
        return False


# ---------------------------------------------------------------------------
# Session tokens
# ---------------------------------------------------------------------------

def _signing_key(settings: Settings) -> str:
    if not settings.session_secret:
        raise ValueError("session_secret_blank")
    return settings.session_secret


def issue_session_token(identity: SessionIdentity, settings: Settings) -> str:
    now = datetime.now(timezone.utc)
    lifetime = timedelta(seconds=max(1, int(settings.session_max_age_seconds)))

    claims: Dict[str, Any] = {
        "sub": identity.id,
        "username": identity.username,
        "role": identity.role,
        "iat": int(now.timestamp()),
        "exp": int((now + lifetime).timestamp()),
    }
    return jwt.encode(claims, _signing_key(settings), algorithm=_JWT_ALG)


def read_session_token(token: str, settings: Settings) -> SessionIdentity:
    """Verify *token* and return the identity it carries.

    Raises ``jwt.InvalidTokenError`` (``ExpiredSignatureError`` included) for
    a bad signature or expiry, and ``InvalidSessionPayload`` when the claims
    are missing a subject or username or name an unknown role.
    """
    if not token:
        raise InvalidSessionPayload("token_blank")

    claims = jwt.decode(token, _signing_key(settings), algorithms=[_JWT_ALG])
    if not claims.get("sub") or not claims.get("username"):
        raise InvalidSessionPayload("missing_sub_or_username")

    try:
        return SessionIdentity(
            id=str(claims["sub"]),
            username=str(claims["username"]),
            role=claims.get("role") or "user",
        )
    except ValidationError as exc:
        raise InvalidSessionPayload("invalid_role") from exc
