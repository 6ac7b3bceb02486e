"""
Session Cookies
===============
The session identity travels in a signed, httpOnly cookie. Nothing is
stored server-side: the cookie carries ``{sub, username, role}`` and an
expiry, and the API trusts it as long as the signature checks out.

Requests with no cookie, an expired cookie or a tampered cookie are
treated as anonymous; the guards decide whether that is acceptable.
"""

from __future__ import annotations

import logging
from typing import Optional

import jwt
from fastapi import Depends, Request, Response

from app.auth.security import InvalidSessionPayload, issue_session_token, read_session_token
from app.config import Settings, get_settings
from app.models.auth import SessionIdentity

logger = logging.getLogger(__name__)


def get_session_identity(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> Optional[SessionIdentity]:
    """Resolve the caller's identity from the session cookie, or None."""
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        return None

    try:
        return read_session_token(token, settings)
    except jwt.ExpiredSignatureError:
        logger.info("Expired session cookie on %s", request.url.path)
    except jwt.InvalidTokenError as exc:
        logger.warning("Rejected session cookie on %s: %s", request.url.path, exc)
    except InvalidSessionPayload as exc:
        logger.warning("Session cookie on %s has unusable claims: %s", request.url.path, exc)
    return None


def start_session(response: Response, identity: SessionIdentity, settings: Settings) -> None:
    """Attach a fresh session cookie for *identity* to *response*."""
    token = issue_session_token(identity, settings)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
        max_age=settings.session_max_age_seconds,
        path="/",
    )


def end_session(response: Response, settings: Settings) -> None:
    response.delete_cookie(key=settings.session_cookie_name, path="/")
