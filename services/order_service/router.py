from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.config.settings import CHECKOUT_RATE_LIMIT
from shared.security import get_admin_user, get_current_user, limiter
from services.auth_service.models import User
from .schemas import (
    OrderCreate,
    OrderCreated,
    OrderDetailResponse,
    OrderResponse,
    OrderStatusUpdate,
)
from .service import OrderService

router = APIRouter(tags=["orders"])


@router.get("/orders.list", response_model=list[OrderResponse])
async def list_orders(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await OrderService.list_orders(db, user)


@router.get("/orders.getById", response_model=OrderDetailResponse)
async def get_order(
    id: int = Query(...),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await OrderService.get_order(db, user, id)


@router.post("/orders.create", response_model=OrderCreated)
@limiter.limit(CHECKOUT_RATE_LIMIT)  # slowapi needs the raw request to build the key
async def create_order(
    request: Request,
    payload: OrderCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await OrderService.create_order(db, user, payload)


@router.post(
    "/orders.updateStatus",
    response_model=OrderResponse,
    dependencies=[Depends(get_admin_user)],
)
async def update_status(payload: OrderStatusUpdate, db: AsyncSession = Depends(get_db)):
    return await OrderService.update_status(db, payload)
