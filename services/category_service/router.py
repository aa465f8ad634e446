from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.security.dependencies import get_admin_user
from .schemas import CategoryCreate, CategoryResponse
from .service import CategoryService

router = APIRouter(tags=["categories"])


@router.get("/categories.list", response_model=list[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    return await CategoryService.list_categories(db)


@router.get("/categories.getById", response_model=Optional[CategoryResponse])
async def get_category(id: int = Query(...), db: AsyncSession = Depends(get_db)):
    # Unknown ids resolve to null rather than NOT_FOUND
    return await CategoryService.get_category_by_id(db, id)


@router.post(
    "/categories.create",
    response_model=CategoryResponse,
    dependencies=[Depends(get_admin_user)],
)
async def create_category(category: CategoryCreate, db: AsyncSession = Depends(get_db)):
    return await CategoryService.create_category(db, category)
