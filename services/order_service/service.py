import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import not_found
from shared.observability.metrics import bakery_order_status_changes_total
from shared.security.access import is_admin
from services.address_service.repository import AddressRepository
from services.address_service.schemas import AddressResponse
from services.auth_service.models import User
from .checkout import CheckoutWorkflow
from .repository import OrderRepository
from .schemas import (
    OrderCreate,
    OrderCreated,
    OrderDetailResponse,
    OrderItemResponse,
    OrderStatusUpdate,
)

logger = structlog.get_logger(__name__)


class OrderService:
    workflow = CheckoutWorkflow()

    @staticmethod
    async def create_order(db: AsyncSession, user: User, data: OrderCreate) -> OrderCreated:
        order = await OrderService.workflow.create_order(db, user.id, data)
        return OrderCreated(order_id=order.id, total=order.total)

    @staticmethod
    async def list_orders(db: AsyncSession, user: User):
        if is_admin(user):
            return await OrderRepository.get_all_orders(db)
        return await OrderRepository.get_user_orders(db, user.id)

    @staticmethod
    async def get_order(db: AsyncSession, user: User, order_id: int) -> OrderDetailResponse:
        order = await OrderRepository.get_order(db, order_id)
        # Other customers' orders are indistinguishable from missing ones
        if not order or (not is_admin(user) and order.user_id != user.id):
            raise not_found("Order not found")

        items = await OrderRepository.get_order_items(db, order.id)
        address = await AddressRepository.get_address_by_id(db, order.address_id)

        detail = OrderDetailResponse.model_validate(order)
        detail.items = [OrderItemResponse.model_validate(item) for item in items]
        detail.address = AddressResponse.model_validate(address) if address else None
        return detail

    @staticmethod
    async def update_status(db: AsyncSession, data: OrderStatusUpdate):
        order = await OrderRepository.update_status(db, data.id, data.status.value)
        if not order:
            raise not_found("Order not found")
        bakery_order_status_changes_total.labels(status=order.status).inc()
        logger.info("order_status_changed", order_id=order.id, status=order.status)
        return order
