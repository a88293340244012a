"""Category-related Pydantic schemas."""

import uuid

from .base import ApiModel


class CategoryRead(ApiModel):
    id: uuid.UUID
    name: str
