from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import func, select

from services.order_service.models import REVENUE_STATUSES, Order, OrderStatus
from services.product_service.models import Product


class DashboardRepository:

    @staticmethod
    async def count_products(db: AsyncSession) -> int:
        result = await db.execute(select(func.count()).select_from(Product))
        return result.scalar_one() or 0

    @staticmethod
    async def count_orders(db: AsyncSession) -> int:
        result = await db.execute(select(func.count()).select_from(Order))
        return result.scalar_one() or 0

    @staticmethod
    async def sum_revenue(db: AsyncSession) -> int:
        result = await db.execute(
            select(func.coalesce(func.sum(Order.total), 0)).where(Order.status.in_(REVENUE_STATUSES))
        )
        return int(result.scalar_one() or 0)

    @staticmethod
    async def count_pending_orders(db: AsyncSession) -> int:
        result = await db.execute(
            select(func.count()).select_from(Order).where(Order.status == OrderStatus.PENDING.value)
        )
        return result.scalar_one() or 0
