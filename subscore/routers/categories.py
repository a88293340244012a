"""Category routes — read-only."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from subscore.db.session import get_db
from subscore.schemas.category import CategoryRead
from subscore.services.category_service import list_categories

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get(
    "",
    response_model=list[CategoryRead],
    responses={204: {"description": "No categories exist"}},
)
async def get_all_categories(db: AsyncSession = Depends(get_db)):
    categories = await list_categories(db)
    if not categories:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return categories
