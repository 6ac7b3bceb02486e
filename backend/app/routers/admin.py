"""
Admin Router
============
GET /admin/users: list accounts (no password hashes). Admin role only.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.auth.guards import admin_dependency
from app.models.auth import SessionIdentity, UserPublic
from app.routers.auth import get_account_service
from app.services.accounts import AccountService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get(
    "/users",
    response_model=list[UserPublic],
    summary="List user accounts",
    responses={401: {"description": "Login required"}, 403: {"description": "Admin role required"}},
)
async def list_users(
    _admin: SessionIdentity = Depends(admin_dependency),
    accounts: AccountService = Depends(get_account_service),
) -> list[UserPublic]:
    return accounts.list_users()
