from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.schemas import SuccessResponse
from shared.security.dependencies import get_current_user
from services.auth_service.models import User
from .schemas import AddressCreate, AddressId, AddressResponse, AddressUpdate
from .service import AddressService

router = APIRouter(tags=["addresses"])


@router.get("/addresses.list", response_model=list[AddressResponse])
async def list_addresses(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await AddressService.list_addresses(db, user.id)


@router.get("/addresses.getById", response_model=AddressResponse)
async def get_address(
    id: int = Query(...),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await AddressService.get_owned_address(db, user.id, id)


@router.post("/addresses.create", response_model=AddressResponse)
async def create_address(
    address: AddressCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await AddressService.create_address(db, user.id, address)


@router.post("/addresses.update", response_model=AddressResponse)
async def update_address(
    address: AddressUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await AddressService.update_address(db, user.id, address)


@router.post("/addresses.delete", response_model=SuccessResponse)
async def delete_address(
    payload: AddressId,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await AddressService.delete_address(db, user.id, payload.id)
    return SuccessResponse()
