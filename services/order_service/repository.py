from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from .models import Order, OrderItem


class OrderRepository:

    @staticmethod
    async def add_order(db: AsyncSession, order: Order) -> Order:
        """Insert the header and flush so its generated id is available. Not committed."""
        db.add(order)
        await db.flush()
        return order

    @staticmethod
    async def add_order_items(db: AsyncSession, items: list[OrderItem]) -> list[OrderItem]:
        db.add_all(items)
        await db.flush()
        return items

    @staticmethod
    async def get_order(db: AsyncSession, order_id: int):
        result = await db.execute(select(Order).where(Order.id == order_id))
        return result.scalars().first()

    @staticmethod
    async def get_user_orders(db: AsyncSession, user_id: int):
        result = await db.execute(
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
        )
        return result.scalars().all()

    @staticmethod
    async def get_all_orders(db: AsyncSession):
        result = await db.execute(select(Order).order_by(Order.created_at.desc(), Order.id.desc()))
        return result.scalars().all()

    @staticmethod
    async def get_order_items(db: AsyncSession, order_id: int):
        result = await db.execute(
            select(OrderItem).where(OrderItem.order_id == order_id).order_by(OrderItem.id)
        )
        return result.scalars().all()

    @staticmethod
    async def update_status(db: AsyncSession, order_id: int, status: str):
        result = await db.execute(select(Order).where(Order.id == order_id))
        order = result.scalars().first()

        if not order:
            return None

        order.status = status

        await db.commit()
        await db.refresh(order)
        return order
