"""
Contact Schemas
===============
Messages submitted through the public contact form.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class ContactCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None
