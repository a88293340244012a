"""User-related Pydantic schemas."""

import uuid
from datetime import datetime

from pydantic import Field

from .base import ApiModel


class UserRegister(ApiModel):
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    name: str | None = Field(None, max_length=255)
    image: str | None = Field(None, max_length=1024)


class UserRead(ApiModel):
    id: uuid.UUID
    email: str
    name: str | None = None
    image: str | None = None
    email_verified: datetime | None = None
    created_at: datetime
    updated_at: datetime
