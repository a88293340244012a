"""User routes — public registration called by the frontend after sign-in."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from subscore.db.session import get_db
from subscore.schemas.user import UserRead, UserRegister
from subscore.services.user_service import register_user

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register(payload: UserRegister, db: AsyncSession = Depends(get_db)):
    """Create the user, or update name/image if the email is already registered."""
    return await register_user(db, payload)
