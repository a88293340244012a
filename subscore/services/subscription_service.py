"""Subscription CRUD and the category-joined views served to the frontend."""

import logging
import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from subscore.errors import SubscriptionNotFound
from subscore.models.subscription import Subscription
from subscore.schemas.auth import Identity
from subscore.schemas.category import CategoryRead
from subscore.schemas.subscription import SubscriptionCreate, SubscriptionUpdate, SubscriptionView
from subscore.services.billing import calculate_next_payment_date
from subscore.services.category_service import get_categories_by_ids
from subscore.services.user_service import get_user_id_by_email
from subscore.utils import now_utc

logger = logging.getLogger(__name__)

# Fields a client may overwrite on update; everything else is server-owned.
_UPDATABLE_FIELDS = (
    "name",
    "price",
    "category_id",
    "billing_cycle",
    "payment_date",
    "next_payment_date",
    "status",
    "notification_enabled",
)


async def list_subscriptions(db: AsyncSession) -> list[Subscription]:
    result = await db.execute(select(Subscription).order_by(Subscription.created_at))
    return list(result.scalars().all())


async def get_subscription(db: AsyncSession, subscription_id: uuid.UUID) -> Subscription | None:
    return await db.get(Subscription, subscription_id)


async def list_subscriptions_for_user(db: AsyncSession, user_id: uuid.UUID) -> list[Subscription]:
    result = await db.execute(
        select(Subscription)
        .where(Subscription.user_id == user_id)
        .order_by(Subscription.next_payment_date)
    )
    return list(result.scalars().all())


async def register_subscription(
    db: AsyncSession,
    identity: Identity,
    payload: SubscriptionCreate,
    today: date | None = None,
) -> Subscription:
    """Persist a new subscription owned by the caller.

    Raises UserNotFound if the caller's email has no registered user.
    """
    user_id = await get_user_id_by_email(db, identity.email)
    now = now_utc()

    sub = Subscription(
        id=uuid.uuid4(),
        user_id=user_id,
        category_id=payload.category_id,
        name=payload.name,
        price=payload.price,
        billing_cycle=payload.billing_cycle,
        payment_date=payload.payment_date,
        next_payment_date=calculate_next_payment_date(
            payload.payment_date, payload.billing_cycle, today=today
        ),
        status=payload.status,
        notification_enabled=payload.notification_enabled,
        created_at=now,
        updated_at=now,
    )
    db.add(sub)
    await db.commit()
    await db.refresh(sub)

    logger.info(f"Created subscription {sub.id} for user {user_id}")
    return sub


async def update_subscription(
    db: AsyncSession, subscription_id: uuid.UUID, payload: SubscriptionUpdate
) -> Subscription:
    """Overwrite the client-editable fields of an existing subscription.

    The row is locked for the read-modify-write so concurrent updates to the
    same id are applied one after the other (last write wins).
    """
    result = await db.execute(
        select(Subscription).where(Subscription.id == subscription_id).with_for_update()
    )
    sub = result.scalar_one_or_none()
    if not sub:
        raise SubscriptionNotFound(f"Subscription {subscription_id} not found")

    update_data = payload.model_dump(include=set(_UPDATABLE_FIELDS))
    for key, value in update_data.items():
        setattr(sub, key, value)

    await db.commit()
    await db.refresh(sub)

    logger.info(f"Updated subscription {sub.id}")
    return sub


async def delete_subscription(db: AsyncSession, subscription_id: uuid.UUID) -> None:
    sub = await get_subscription(db, subscription_id)
    if not sub:
        raise SubscriptionNotFound(f"Subscription {subscription_id} not found")

    await db.delete(sub)
    await db.commit()
    logger.info(f"Deleted subscription {subscription_id}")


async def get_subscription_views_for_user(
    db: AsyncSession, user_id: uuid.UUID
) -> list[SubscriptionView]:
    """Subscriptions of a user joined to their categories. Empty list if none."""
    subscriptions = await list_subscriptions_for_user(db, user_id)
    if not subscriptions:
        return []

    categories = await get_categories_by_ids(db, (s.category_id for s in subscriptions))

    views = []
    for sub in subscriptions:
        category = categories.get(sub.category_id)
        if category is None:
            logger.warning(f"Subscription {sub.id} references missing category {sub.category_id}")
        views.append(
            SubscriptionView(
                id=sub.id,
                user_id=sub.user_id,
                category=CategoryRead.model_validate(category) if category else None,
                name=sub.name,
                price=sub.price,
                billing_cycle=sub.billing_cycle,
                payment_date=sub.payment_date,
                next_payment_date=sub.next_payment_date,
                status=sub.status,
                notification_enabled=sub.notification_enabled,
                created_at=sub.created_at,
                updated_at=sub.updated_at,
            )
        )
    return views


async def get_subscription_views_for_identity(
    db: AsyncSession, identity: Identity
) -> list[SubscriptionView]:
    user_id = await get_user_id_by_email(db, identity.email)
    return await get_subscription_views_for_user(db, user_id)
