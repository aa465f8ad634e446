from datetime import datetime
from typing import Optional

from pydantic import Field

from shared.schemas import MAX_INT, CamelModel
from services.address_service.schemas import AddressResponse
from .models import OrderStatus, PaymentMethod


class OrderLineInput(CamelModel):
    product_id: int
    quantity: int = Field(ge=1, le=MAX_INT)


class OrderCreate(CamelModel):
    address_id: int
    payment_method: PaymentMethod
    items: list[OrderLineInput] = Field(min_length=1)
    notes: Optional[str] = None


class OrderCreated(CamelModel):
    order_id: int
    total: int


class OrderStatusUpdate(CamelModel):
    id: int
    status: OrderStatus


class OrderItemResponse(CamelModel):
    id: int
    order_id: int
    product_id: int
    product_name: str
    product_price: int
    quantity: int
    subtotal: int


class OrderResponse(CamelModel):
    id: int
    user_id: int
    address_id: int
    payment_method: str
    subtotal: int
    shipping_fee: int
    total: int
    notes: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderDetailResponse(OrderResponse):
    items: list[OrderItemResponse] = []
    address: Optional[AddressResponse] = None
