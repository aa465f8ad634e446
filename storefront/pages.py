"""
Page-level view models for the storefront and the admin panel.

Each function reads from or writes through the procedure client and returns
plain data for rendering. Failures never raise to the page: they come back as
an error Notification, and the cart and form the user filled in are left as
they were.
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

import structlog

from shared.config.settings import SHIPPING_FEE
from .cart import Cart, CartItem
from .client import StorefrontClient, StorefrontError

logger = structlog.get_logger(__name__)

STATUS_LABELS = {
    "pending": "Awaiting payment",
    "confirmed": "Confirmed",
    "preparing": "Being prepared",
    "shipped": "Shipped",
    "delivered": "Delivered",
    "cancelled": "Cancelled",
}

ADDRESS_FIELDS = ("recipient_name", "street", "number", "neighborhood", "city", "state", "zip_code")


def format_price(cents: int) -> str:
    """1234 -> 'R$ 12,34' (BRL, pt-BR separators)."""
    sign = "-" if cents < 0 else ""
    reais, centavos = divmod(abs(int(cents)), 100)
    return f"{sign}R$ {reais:,}".replace(",", ".") + f",{centavos:02d}"


def format_date(value: str | datetime) -> str:
    if isinstance(value, str):
        # fromisoformat only accepts a trailing "Z" from 3.11 on
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        value = datetime.fromisoformat(value)
    return value.strftime("%d/%m/%Y %H:%M")


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def parse_price(text: str) -> int:
    """Admin form input in reais ('12,50' or '12.50') to minor units."""
    try:
        amount = Decimal(text.strip().replace(",", "."))
    except InvalidOperation:
        raise ValueError(f"Invalid price: {text!r}")
    return int((amount * 100).quantize(Decimal("1")))


@dataclass(frozen=True)
class Notification:
    kind: str  # success | error
    message: str

    @classmethod
    def success(cls, message: str) -> "Notification":
        return cls("success", message)

    @classmethod
    def error(cls, message: str) -> "Notification":
        return cls("error", message)


# --- catalog ---

@dataclass
class CatalogView:
    products: list[dict]
    categories: list[dict]
    search: Optional[str] = None
    category_id: Optional[int] = None


def load_catalog(client: StorefrontClient, search: Optional[str] = None,
                 category_id: Optional[int] = None) -> CatalogView:
    return CatalogView(
        products=client.list_products(category_id=category_id, search=search, active_only=True),
        categories=client.list_categories(),
        search=search,
        category_id=category_id,
    )


def add_to_cart(cart: Cart, product: dict, quantity: int = 1) -> Notification:
    cart.add_item(
        CartItem(
            product_id=product["id"],
            name=product["name"],
            price=product["price"],
            image_url=product.get("imageUrl"),
        ),
        quantity,
    )
    return Notification.success(f"{product['name']} added to cart!")


# --- cart ---

@dataclass
class CartLine:
    product_id: int
    name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass
class CartSummary:
    lines: list[CartLine]
    item_count: int
    subtotal: int
    shipping_fee: int
    total: int

    @property
    def formatted_total(self) -> str:
        return format_price(self.total)


def summarize_cart(cart: Cart, shipping_fee: int = SHIPPING_FEE) -> CartSummary:
    lines = [
        CartLine(
            product_id=item.product_id,
            name=item.name,
            quantity=item.quantity,
            unit_price=format_price(item.price),
            line_total=format_price(item.subtotal),
        )
        for item in cart.items
    ]
    return CartSummary(
        lines=lines,
        item_count=cart.item_count,
        subtotal=cart.subtotal,
        shipping_fee=shipping_fee,
        total=cart.subtotal + shipping_fee,
    )


# --- checkout ---

@dataclass
class CheckoutForm:
    recipient_name: str = ""
    street: str = ""
    number: str = ""
    complement: str = ""
    neighborhood: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    payment_method: str = "pix"
    notes: str = ""

    def missing_fields(self) -> list[str]:
        return [name for name in ADDRESS_FIELDS if not getattr(self, name).strip()]

    def address_payload(self) -> dict:
        return {
            "recipientName": self.recipient_name,
            "street": self.street,
            "number": self.number,
            "complement": self.complement or None,
            "neighborhood": self.neighborhood,
            "city": self.city,
            "state": self.state,
            "zipCode": self.zip_code,
            "isDefault": False,
        }


@dataclass
class CheckoutResult:
    notification: Notification
    order_id: Optional[int] = None
    total: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.order_id is not None


def submit_checkout(client: StorefrontClient, cart: Cart, form: CheckoutForm) -> CheckoutResult:
    """Create the delivery address, then the order. The cart is cleared only on success."""
    if cart.is_empty():
        return CheckoutResult(Notification.error("Your cart is empty"))
    if form.missing_fields():
        return CheckoutResult(Notification.error("Please fill in all required fields"))

    try:
        address = client.create_address(**form.address_payload())
        created = client.create_order(
            address_id=address["id"],
            payment_method=form.payment_method,
            items=[{"productId": item.product_id, "quantity": item.quantity} for item in cart.items],
            notes=form.notes or None,
        )
    except StorefrontError as e:
        logger.info("checkout_failed", code=e.code, reason=e.reason, message=e.message)
        return CheckoutResult(Notification.error(e.message or "Could not place the order"))

    cart.clear()
    return CheckoutResult(
        Notification.success("Order placed successfully!"),
        order_id=created["orderId"],
        total=created["total"],
    )


# --- order confirmation ---

@dataclass
class OrderConfirmationView:
    order: Optional[dict] = None
    status: Optional[str] = None
    placed_at: Optional[str] = None
    notification: Optional[Notification] = None

    @property
    def found(self) -> bool:
        return self.order is not None


def load_order_confirmation(client: StorefrontClient, order_id: Optional[int]) -> OrderConfirmationView:
    if not order_id:
        return OrderConfirmationView(notification=Notification.error("Order not found"))
    try:
        order = client.get_order(order_id)
    except StorefrontError as e:
        return OrderConfirmationView(notification=Notification.error(e.message))
    placed_at = format_date(order["createdAt"]) if order.get("createdAt") else None
    return OrderConfirmationView(order=order, status=status_label(order["status"]), placed_at=placed_at)


# --- admin ---

@dataclass
class DashboardCard:
    title: str
    value: str


def load_dashboard(client: StorefrontClient) -> list[DashboardCard]:
    stats = client.dashboard_stats()
    return [
        DashboardCard("Total revenue", format_price(stats["totalRevenue"])),
        DashboardCard("Orders", str(stats["totalOrders"])),
        DashboardCard("Pending orders", str(stats["pendingOrders"])),
        DashboardCard("Products", str(stats["totalProducts"])),
    ]


@dataclass
class ProductForm:
    name: str = ""
    slug: str = ""
    description: str = ""
    price: str = ""  # reais, as typed
    category_id: str = ""
    stock: str = "0"
    image_url: str = ""
    active: bool = True

    def payload(self) -> dict:
        return {
            "name": self.name,
            "slug": self.slug,
            "description": self.description or None,
            "price": parse_price(self.price),
            "categoryId": int(self.category_id),
            "stock": int(self.stock),
            "imageUrl": self.image_url or None,
            "active": self.active,
        }


def save_product(client: StorefrontClient, form: ProductForm,
                 editing_id: Optional[int] = None) -> Notification:
    try:
        payload = form.payload()
    except ValueError as e:
        return Notification.error(str(e))
    try:
        if editing_id is None:
            client.create_product(**payload)
            return Notification.success("Product created successfully!")
        client.update_product(editing_id, **payload)
        return Notification.success("Product updated successfully!")
    except StorefrontError as e:
        return Notification.error(e.message)


def remove_product(client: StorefrontClient, product_id: int) -> Notification:
    try:
        client.delete_product(product_id)
    except StorefrontError as e:
        return Notification.error(e.message)
    return Notification.success("Product deleted successfully!")


@dataclass
class AdminOrderRow:
    id: int
    total: str
    status: str
    status_label: str
    placed_at: Optional[str] = None
    payment_method: str = ""


@dataclass
class AdminOrdersView:
    rows: list[AdminOrderRow] = field(default_factory=list)


def load_admin_orders(client: StorefrontClient) -> AdminOrdersView:
    rows = [
        AdminOrderRow(
            id=order["id"],
            total=format_price(order["total"]),
            status=order["status"],
            status_label=status_label(order["status"]),
            placed_at=format_date(order["createdAt"]) if order.get("createdAt") else None,
            payment_method=order["paymentMethod"],
        )
        for order in client.list_orders()
    ]
    return AdminOrdersView(rows=rows)


def change_order_status(client: StorefrontClient, order_id: int, status: str) -> Notification:
    try:
        client.update_order_status(order_id, status)
    except StorefrontError as e:
        return Notification.error(e.message)
    return Notification.success("Status updated successfully!")
