from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.security.dependencies import get_admin_user
from .schemas import DashboardStats
from .service import DashboardService

router = APIRouter(tags=["dashboard"], dependencies=[Depends(get_admin_user)])


@router.get("/dashboard.stats", response_model=DashboardStats)
async def stats(db: AsyncSession = Depends(get_db)):
    return await DashboardService.get_stats(db)
