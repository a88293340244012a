"""Subscription routes — CRUD plus per-user category-joined listing."""

import uuid

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from subscore.db.session import get_db
from subscore.schemas.auth import Identity
from subscore.schemas.subscription import (
    SubscriptionCreate,
    SubscriptionRead,
    SubscriptionUpdate,
    SubscriptionView,
)
from subscore.services.auth_service import get_current_identity
from subscore.services.subscription_service import (
    delete_subscription,
    get_subscription_views_for_identity,
    get_subscription_views_for_user,
    list_subscriptions,
    register_subscription,
    update_subscription,
)

router = APIRouter(prefix="/api/subscriptions", tags=["subscriptions"])


@router.get(
    "",
    response_model=list[SubscriptionRead],
    responses={204: {"description": "No subscriptions exist"}},
)
async def get_all(db: AsyncSession = Depends(get_db)):
    subscriptions = await list_subscriptions(db)
    if not subscriptions:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return subscriptions


@router.post("", response_model=SubscriptionRead)
async def add_subscription(
    payload: SubscriptionCreate,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    return await register_subscription(db, identity, payload)


@router.put("/{subscription_id}", response_model=SubscriptionRead)
async def update_subscription_by_id(
    subscription_id: uuid.UUID,
    payload: SubscriptionUpdate,
    db: AsyncSession = Depends(get_db),
):
    return await update_subscription(db, subscription_id, payload)


@router.delete("/{subscription_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_subscription_by_id(
    subscription_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    await delete_subscription(db, subscription_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/user", response_model=list[SubscriptionView])
async def get_my_subscriptions(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """Subscriptions of the caller, resolved from the token's email."""
    return await get_subscription_views_for_identity(db, identity)


@router.get("/user/{user_id}", response_model=list[SubscriptionView])
async def get_subscriptions_by_user_id(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    return await get_subscription_views_for_user(db, user_id)
