"""
Contact Router
==============
POST /contact: store a message from the public contact form.

No login required. name, email and message must be present; phone is
optional and stored as an empty string when missing.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.db.store import ContactStore
from app.db.supabase import get_contact_store
from app.errors import InvalidArgument
from app.models.contact import ContactCreate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["contact"])


@router.post(
    "/contact",
    summary="Send a contact message",
    responses={400: {"description": "Missing name, email or message"}},
)
async def submit_contact(
    body: ContactCreate,
    contacts: ContactStore = Depends(get_contact_store),
) -> dict:
    name = (body.name or "").strip()
    email = (body.email or "").strip()
    message = (body.message or "").strip()
    if not name or not email or not message:
        raise InvalidArgument("Missing fields: name, email, message", code="missing_fields")

    contacts.insert({
        "name": name,
        "email": email,
        "phone": (body.phone or "").strip(),
        "message": message,
        "created_at": datetime.now(timezone.utc).isoformat(),
    })
    logger.info("Contact message stored from %s", email)
    return {"success": True}
