"""
Order creation: address check, per-line stock check, totals, then the order
header, its line items and the stock decrements in one transaction.

Stock is checked when each line is priced and decremented again with a
conditional UPDATE (stock >= quantity) right before commit. A concurrent
checkout that drained the product in between makes the UPDATE match no row;
the whole order is then rolled back with INSUFFICIENT_STOCK instead of
driving stock negative.
"""
import time
from dataclasses import dataclass

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.settings import SHIPPING_FEE
from shared.errors import BAD_REQUEST, ProcedureError
from shared.observability.metrics import (
    bakery_checkout_duration_seconds,
    bakery_checkout_total,
    bakery_stock_units_sold_total,
)
from services.address_service.repository import AddressRepository
from services.product_service.models import Product
from services.product_service.repository import ProductRepository
from .models import Order, OrderItem, OrderStatus
from .repository import OrderRepository
from .schemas import OrderCreate

logger = structlog.get_logger(__name__)

NOT_AUTHORIZED = "NOT_AUTHORIZED"
INVALID_ITEM = "INVALID_ITEM"
INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"


class CheckoutError(ProcedureError):
    """Rejected order. Surfaced as BAD_REQUEST with the rejection reason attached."""

    def __init__(self, reason: str, message: str):
        super().__init__(BAD_REQUEST, message, reason=reason)


@dataclass(frozen=True)
class LineSnapshot:
    product_id: int
    product_name: str
    product_price: int
    quantity: int

    @classmethod
    def of(cls, product: Product, quantity: int) -> "LineSnapshot":
        return cls(
            product_id=product.id,
            product_name=product.name,
            product_price=product.price,
            quantity=quantity,
        )

    @property
    def subtotal(self) -> int:
        return self.product_price * self.quantity

    def to_item(self, order_id: int) -> OrderItem:
        return OrderItem(
            order_id=order_id,
            product_id=self.product_id,
            product_name=self.product_name,
            product_price=self.product_price,
            quantity=self.quantity,
            subtotal=self.subtotal,
        )


@dataclass(frozen=True)
class OrderTotals:
    subtotal: int
    shipping_fee: int

    @property
    def total(self) -> int:
        return self.subtotal + self.shipping_fee


def compute_totals(lines: list[LineSnapshot], shipping_fee: int = SHIPPING_FEE) -> OrderTotals:
    return OrderTotals(subtotal=sum(line.subtotal for line in lines), shipping_fee=shipping_fee)


class CheckoutWorkflow:

    def __init__(self, shipping_fee: int = SHIPPING_FEE):
        self.shipping_fee = shipping_fee

    async def _price_lines(self, db: AsyncSession, data: OrderCreate) -> list[LineSnapshot]:
        lines = []
        for item in data.items:
            product = await ProductRepository.get_product_by_id(db, item.product_id)
            if not product or not product.active:
                raise CheckoutError(INVALID_ITEM, f"Product {item.product_id} is not available")
            if product.stock < item.quantity:
                raise CheckoutError(INSUFFICIENT_STOCK, f"Insufficient stock for {product.name}")
            lines.append(LineSnapshot.of(product, item.quantity))
        return lines

    async def _persist(self, db: AsyncSession, user_id: int, data: OrderCreate,
                       lines: list[LineSnapshot], totals: OrderTotals) -> Order:
        order = await OrderRepository.add_order(db, Order(
            user_id=user_id,
            address_id=data.address_id,
            payment_method=data.payment_method.value,
            subtotal=totals.subtotal,
            shipping_fee=totals.shipping_fee,
            total=totals.total,
            notes=data.notes,
            status=OrderStatus.PENDING.value,
        ))
        await OrderRepository.add_order_items(db, [line.to_item(order.id) for line in lines])

        for line in lines:
            if not await ProductRepository.decrement_stock(db, line.product_id, line.quantity):
                logger.warning(
                    "stock_race_detected",
                    product_id=line.product_id,
                    requested=line.quantity,
                    user_id=user_id,
                )
                raise CheckoutError(INSUFFICIENT_STOCK, f"Insufficient stock for {line.product_name}")
        return order

    async def create_order(self, db: AsyncSession, user_id: int, data: OrderCreate) -> Order:
        started = time.perf_counter()
        try:
            address = await AddressRepository.get_address_by_id(db, data.address_id)
            if not address or address.user_id != user_id:
                raise CheckoutError(NOT_AUTHORIZED, "Invalid address")

            lines = await self._price_lines(db, data)
            totals = compute_totals(lines, self.shipping_fee)
            order = await self._persist(db, user_id, data, lines, totals)
            await db.commit()
        except CheckoutError as e:
            await db.rollback()
            bakery_checkout_total.labels(status="rejected").inc()
            logger.info("order_rejected", user_id=user_id, reason=e.reason, message=e.message)
            raise
        except Exception:
            await db.rollback()
            bakery_checkout_total.labels(status="failed").inc()
            logger.exception("order_creation_failed", user_id=user_id)
            raise
        finally:
            bakery_checkout_duration_seconds.observe(time.perf_counter() - started)

        bakery_checkout_total.labels(status="success").inc()
        bakery_stock_units_sold_total.inc(sum(line.quantity for line in lines))
        logger.info(
            "order_created",
            order_id=order.id,
            user_id=user_id,
            lines=len(lines),
            subtotal=totals.subtotal,
            total=totals.total,
        )
        return order
