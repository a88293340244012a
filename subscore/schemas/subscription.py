"""Subscription-related Pydantic schemas."""

import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import Field

from .base import ApiModel
from .category import CategoryRead

BillingCycle = Literal["monthly", "yearly"]


class SubscriptionCreate(ApiModel):
    """Registration payload. Server-owned fields sent by the client are ignored."""

    category_id: uuid.UUID
    name: str = Field(min_length=1, max_length=255)
    price: int = Field(ge=0)
    billing_cycle: BillingCycle
    payment_date: int = Field(ge=1, le=31)
    status: str = Field("active", max_length=32)
    notification_enabled: bool = False


class SubscriptionUpdate(ApiModel):
    """Full replacement of the client-editable fields.

    next_payment_date is stored as sent; it is not recalculated.
    """

    category_id: uuid.UUID
    name: str = Field(min_length=1, max_length=255)
    price: int = Field(ge=0)
    billing_cycle: BillingCycle
    payment_date: int = Field(ge=1, le=31)
    next_payment_date: date
    status: str = Field(max_length=32)
    notification_enabled: bool


class SubscriptionRead(ApiModel):
    id: uuid.UUID
    user_id: uuid.UUID
    category_id: uuid.UUID
    name: str
    price: int
    billing_cycle: str
    payment_date: int
    next_payment_date: date
    status: str
    notification_enabled: bool
    created_at: datetime
    updated_at: datetime


class SubscriptionView(ApiModel):
    """Subscription joined with its category's id and name."""

    id: uuid.UUID
    user_id: uuid.UUID
    category: CategoryRead | None = None
    name: str
    price: int
    billing_cycle: str
    payment_date: int
    next_payment_date: date
    status: str
    notification_enabled: bool
    created_at: datetime
    updated_at: datetime
