"""User directory — register (upsert by email) and email → id lookup."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from subscore.errors import UserNotFound
from subscore.models.user import User
from subscore.schemas.user import UserRegister
from subscore.utils import now_utc

logger = logging.getLogger(__name__)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


def _refresh_profile(user: User, payload: UserRegister) -> None:
    user.name = payload.name
    user.image = payload.image
    user.updated_at = now_utc()


async def register_user(db: AsyncSession, payload: UserRegister) -> User:
    """Create the user, or refresh name/image of the existing one with that email."""
    user = await get_user_by_email(db, payload.email)

    if user:
        _refresh_profile(user, payload)
        await db.commit()
        logger.info(f"Updated user {user.id}")
    else:
        now = now_utc()
        user = User(
            id=uuid.uuid4(),
            email=payload.email,
            name=payload.name,
            image=payload.image,
            email_verified=now,
            created_at=now,
            updated_at=now,
        )
        db.add(user)
        try:
            await db.commit()
            logger.info(f"Registered user {user.id}")
        except IntegrityError:
            # A concurrent first registration inserted this email before us
            await db.rollback()
            user = await get_user_by_email(db, payload.email)
            if user is None:
                raise
            _refresh_profile(user, payload)
            await db.commit()
            logger.info(f"Updated user {user.id} after concurrent registration")

    await db.refresh(user)
    return user


async def get_user_id_by_email(db: AsyncSession, email: str) -> uuid.UUID:
    result = await db.execute(select(User.id).where(User.email == email))
    user_id = result.scalar_one_or_none()
    if user_id is None:
        raise UserNotFound(f"No user registered for {email or 'empty email'}")
    return user_id
