"""SQLAlchemy models for the API."""

from .base import Base
from .user import User
from .category import Category
from .subscription import Subscription

__all__ = [
    "Base",
    "User",
    "Category",
    "Subscription",
]
