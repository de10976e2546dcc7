"""
Module: user.py
Description: User record, created on the first authenticated request.
"""

from typing import Optional

from pydantic import Field

from kefir_tracker.models.base import TableRecord


class User(TableRecord):
    """User profile row (``PK = SK = USER#<userId>``)."""

    user_id: str = Field(..., description="Identity provider subject")
    email: str = Field(..., description="Email claim at first sign-in")
    name: Optional[str] = Field(default=None, description="Display name")
    created_at: str = Field(..., description="Creation timestamp")
    updated_at: str = Field(..., description="Last write timestamp")
