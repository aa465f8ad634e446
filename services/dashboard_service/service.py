from sqlalchemy.ext.asyncio import AsyncSession

from .repository import DashboardRepository
from .schemas import DashboardStats


class DashboardService:

    @staticmethod
    async def get_stats(db: AsyncSession) -> DashboardStats:
        return DashboardStats(
            total_products=await DashboardRepository.count_products(db),
            total_orders=await DashboardRepository.count_orders(db),
            total_revenue=await DashboardRepository.sum_revenue(db),
            pending_orders=await DashboardRepository.count_pending_orders(db),
        )
