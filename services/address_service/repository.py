from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete, select, update
from .models import Address


class AddressRepository:

    @staticmethod
    async def get_user_addresses(db: AsyncSession, user_id: int):
        result = await db.execute(
            select(Address)
            .where(Address.user_id == user_id)
            .order_by(Address.is_default.desc(), Address.id)
        )
        return result.scalars().all()

    @staticmethod
    async def get_address_by_id(db: AsyncSession, address_id: int):
        result = await db.execute(select(Address).where(Address.id == address_id))
        return result.scalars().first()

    @staticmethod
    async def clear_default(db: AsyncSession, user_id: int, except_id: Optional[int] = None):
        """Unset is_default on the user's addresses. Not committed."""
        stmt = update(Address).where(Address.user_id == user_id).values(is_default=False)
        if except_id is not None:
            stmt = stmt.where(Address.id != except_id)
        await db.execute(stmt.execution_options(synchronize_session=False))

    @staticmethod
    async def create_address(db: AsyncSession, address: Address):
        if address.is_default:
            await AddressRepository.clear_default(db, address.user_id)
        db.add(address)
        await db.commit()
        await db.refresh(address)
        return address

    @staticmethod
    async def update_address(db: AsyncSession, address: Address, changes: dict):
        if changes.get("is_default"):
            await AddressRepository.clear_default(db, address.user_id, except_id=address.id)
        for field, value in changes.items():
            setattr(address, field, value)
        await db.commit()
        await db.refresh(address)
        return address

    @staticmethod
    async def delete_address(db: AsyncSession, address_id: int):
        await db.execute(delete(Address).where(Address.id == address_id))
        await db.commit()
