"""
@file: auth.py
@description:
Pydantic schemas for the authentication endpoints.

Schemas:
- Credentials: email/password body of register and login
- UserOut: public projection of a user (never includes the password hash)
- AuthResponse: token plus public user, returned by register and login
- MessageResponse: one-line acknowledgement
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from nerdytips.db.models import DEFAULT_PREDICTIONS_QUOTA, Tier, User
from nerdytips.schemas.predictions import CamelModel


class Credentials(BaseModel):
    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1)


class UserOut(CamelModel):
    id: str
    email: str
    tier: Tier = Tier.FREE
    predictions_remaining: int = DEFAULT_PREDICTIONS_QUOTA
    subscription_end: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: User) -> "UserOut":
        return cls(
            id=row.id,
            email=row.email,
            tier=row.tier,
            predictions_remaining=row.predictions_remaining,
            subscription_end=row.subscription_end,
        )


class AuthResponse(BaseModel):
    token: str
    user: UserOut


class MessageResponse(BaseModel):
    message: str
