"""
Auth Router
===========
Session endpoints for the browser frontend.

    POST /auth/register  create a user account and log it in
    POST /auth/login     check credentials and start a session
    POST /auth/logout    clear the session cookie
    GET  /auth/me        current session identity, or null

Sessions live entirely in a signed httpOnly cookie (see
``app.auth.session``). Logging out removes the cookie from the browser.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response

from app.auth.session import end_session, get_session_identity, start_session
from app.config import Settings, get_settings
from app.db.store import UserStore
from app.db.supabase import get_user_store
from app.models.auth import Credentials, MeResponse, SessionIdentity
from app.services.accounts import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def get_account_service(users: UserStore = Depends(get_user_store)) -> AccountService:
    return AccountService(users)


@router.get("/me", response_model=MeResponse, summary="Who is logged in?")
async def who_am_i(
    identity: Optional[SessionIdentity] = Depends(get_session_identity),
) -> MeResponse:
    return MeResponse(user=identity)


@router.post(
    "/register",
    summary="Register a new user",
    responses={400: {"description": "Missing fields or user already exists"}},
)
async def register(
    body: Credentials,
    response: Response,
    accounts: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings),
) -> dict:
    identity = accounts.register(body.username, body.password)
    start_session(response, identity, settings)
    return {"success": True}


@router.post(
    "/login",
    summary="Log in",
    responses={400: {"description": "Missing fields or invalid credentials"}},
)
async def login(
    body: Credentials,
    response: Response,
    accounts: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings),
) -> dict:
    identity = accounts.authenticate(body.username, body.password)
    start_session(response, identity, settings)
    logger.info("User %s logged in", identity.username)
    return {"success": True}


@router.post("/logout", summary="Log out")
async def logout(response: Response, settings: Settings = Depends(get_settings)) -> dict:
    end_session(response, settings)
    return {"success": True}
