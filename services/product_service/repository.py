from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete, or_, select, update
from .models import Product


class ProductRepository:

    @staticmethod
    async def create_product(db: AsyncSession, product: Product):
        db.add(product)
        await db.commit()
        await db.refresh(product)
        return product

    @staticmethod
    async def get_all_products(
        db: AsyncSession,
        category_id: Optional[int] = None,
        search: Optional[str] = None,
        active_only: bool = False,
    ):
        stmt = select(Product)
        if active_only:
            stmt = stmt.where(Product.active.is_(True))
        if category_id is not None:
            stmt = stmt.where(Product.category_id == category_id)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(Product.name.ilike(pattern), Product.description.ilike(pattern)))
        stmt = stmt.order_by(Product.created_at.desc(), Product.id.desc())
        result = await db.execute(stmt)
        return result.scalars().all()

    @staticmethod
    async def get_product_by_id(db: AsyncSession, product_id: int):
        result = await db.execute(select(Product).where(Product.id == product_id))
        return result.scalars().first()

    @staticmethod
    async def get_product_by_slug(db: AsyncSession, slug: str):
        result = await db.execute(select(Product).where(Product.slug == slug))
        return result.scalars().first()

    @staticmethod
    async def update_product(db: AsyncSession, product: Product):
        db.add(product)
        await db.commit()
        await db.refresh(product)
        return product

    @staticmethod
    async def delete_product(db: AsyncSession, product_id: int) -> bool:
        result = await db.execute(delete(Product).where(Product.id == product_id))
        await db.commit()
        return result.rowcount > 0

    @staticmethod
    async def decrement_stock(db: AsyncSession, product_id: int, quantity: int) -> bool:
        """
        Conditional decrement, left uncommitted for the caller's transaction.
        Returns False when the row no longer holds `quantity` units.
        """
        result = await db.execute(
            update(Product)
            .where(Product.id == product_id, Product.stock >= quantity)
            .values(stock=Product.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
