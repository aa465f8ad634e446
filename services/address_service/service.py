import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import not_found
from .models import Address
from .repository import AddressRepository
from .schemas import AddressCreate, AddressUpdate

logger = structlog.get_logger(__name__)


class AddressService:

    @staticmethod
    async def list_addresses(db: AsyncSession, user_id: int):
        return await AddressRepository.get_user_addresses(db, user_id)

    @staticmethod
    async def get_owned_address(db: AsyncSession, user_id: int, address_id: int) -> Address:
        """Another user's address is reported exactly like a missing one."""
        address = await AddressRepository.get_address_by_id(db, address_id)
        if not address or address.user_id != user_id:
            raise not_found("Address not found")
        return address

    @staticmethod
    async def create_address(db: AsyncSession, user_id: int, data: AddressCreate):
        address = Address(user_id=user_id, **data.model_dump())
        address = await AddressRepository.create_address(db, address)
        logger.info("address_created", address_id=address.id, user_id=user_id, is_default=address.is_default)
        return address

    @staticmethod
    async def update_address(db: AsyncSession, user_id: int, data: AddressUpdate):
        address = await AddressService.get_owned_address(db, user_id, data.id)
        changes = data.model_dump(exclude_unset=True, exclude={"id"})
        changes = {
            field: value for field, value in changes.items()
            if value is not None or field == "complement"
        }
        return await AddressRepository.update_address(db, address, changes)

    @staticmethod
    async def delete_address(db: AsyncSession, user_id: int, address_id: int):
        await AddressService.get_owned_address(db, user_id, address_id)
        await AddressRepository.delete_address(db, address_id)
        logger.info("address_deleted", address_id=address_id, user_id=user_id)
