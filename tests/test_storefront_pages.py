import pytest

from conftest import OWNER_EMAIL, PASSWORD, count_rows, create_product, login
from services.order_service.models import Order
from storefront import pages
from storefront.cart import Cart, MemoryCartStorage
from storefront.client import StorefrontClient, StorefrontError


@pytest.mark.parametrize("cents, text", [
    (0, "R$ 0,00"),
    (5, "R$ 0,05"),
    (1234, "R$ 12,34"),
    (123456789, "R$ 1.234.567,89"),
    (-1500, "-R$ 15,00"),
])
def test_format_price(cents, text):
    assert pages.format_price(cents) == text


def test_parse_price():
    assert pages.parse_price("12,50") == 1250
    assert pages.parse_price(" 9.9 ") == 990
    with pytest.raises(ValueError):
        pages.parse_price("doze")


def test_format_date_accepts_utc_suffix():
    assert pages.format_date("2026-01-02T03:04:00Z") == "02/01/2026 03:04"
    assert pages.format_date("2026-01-02T03:04:00+00:00") == "02/01/2026 03:04"


def test_status_label_falls_back_to_raw_value():
    assert pages.status_label("pending") == "Awaiting payment"
    assert pages.status_label("weird") == "weird"


def _form(**overrides):
    values = dict(recipient_name="Ana Souza", street="Rua das Flores", number="123",
                  neighborhood="Centro", city="São Paulo", state="SP", zip_code="01310-100")
    values.update(overrides)
    return pages.CheckoutForm(**values)


@pytest.fixture
def shop(client):
    return StorefrontClient(http=client)


@pytest.fixture
def customer_shop(shop):
    shop.register("ana@lamore.com.br", PASSWORD, "Ana")
    shop.login("ana@lamore.com.br", PASSWORD)
    shop.http.cookies.clear()
    return shop


def test_client_surfaces_error_envelope(shop):
    with pytest.raises(StorefrontError) as exc_info:
        shop.get_product(404)

    assert exc_info.value.code == "NOT_FOUND"
    assert exc_info.value.status_code == 404


def test_checkout_with_empty_cart(customer_shop):
    result = pages.submit_checkout(customer_shop, Cart(MemoryCartStorage()), _form())

    assert not result.ok
    assert result.notification == pages.Notification.error("Your cart is empty")


def test_checkout_with_missing_fields_keeps_cart(customer_shop):
    cart = Cart(MemoryCartStorage())
    pages.add_to_cart(cart, {"id": 1, "name": "Cupcake", "price": 1200})

    result = pages.submit_checkout(customer_shop, cart, _form(city="  "))

    assert result.notification.kind == "error"
    assert cart.item_count == 1


def test_successful_checkout_clears_cart(client, admin_headers, customer_shop):
    product = create_product(client, admin_headers)
    cart = Cart(MemoryCartStorage())
    notification = pages.add_to_cart(cart, product, 2)
    assert notification.message == "Cupcake de Morango added to cart!"
    assert pages.summarize_cart(cart).formatted_total == "R$ 39,00"

    result = pages.submit_checkout(customer_shop, cart, _form(payment_method="credit_card"))

    assert result.ok
    assert result.total == 3900
    assert cart.is_empty()

    view = pages.load_order_confirmation(customer_shop, result.order_id)
    assert view.found
    assert view.status == "Awaiting payment"
    assert view.order["items"][0]["quantity"] == 2


def test_failed_checkout_keeps_cart(client, admin_headers, customer_shop):
    product = create_product(client, admin_headers, stock=1)
    cart = Cart(MemoryCartStorage())
    pages.add_to_cart(cart, product, 5)

    result = pages.submit_checkout(customer_shop, cart, _form())

    assert not result.ok
    assert result.notification.kind == "error"
    assert "Insufficient stock" in result.notification.message
    assert cart.item_count == 5
    assert count_rows(Order) == 0


def test_order_confirmation_without_id(shop):
    view = pages.load_order_confirmation(shop, None)

    assert not view.found
    assert view.notification.kind == "error"


def test_catalog_shows_only_active_products(client, admin_headers, shop):
    create_product(client, admin_headers, slug="visible")
    create_product(client, admin_headers, slug="hidden", active=False)

    view = pages.load_catalog(shop)

    assert [p["slug"] for p in view.products] == ["visible"]


def test_admin_pages(client, shop):
    login(client, OWNER_EMAIL, name="Owner")
    shop.login(OWNER_EMAIL, PASSWORD)
    shop.http.cookies.clear()

    created = pages.save_product(shop, pages.ProductForm(
        name="Cupcake de Limão", slug="limao", price="11,90", category_id="1", stock="4",
    ))
    assert created == pages.Notification.success("Product created successfully!")
    product = shop.get_product_by_slug("limao")
    assert product["price"] == 1190

    assert pages.save_product(shop, pages.ProductForm(name="X", slug="x", price="abc", category_id="1")).kind == "error"

    cards = {card.title: card.value for card in pages.load_dashboard(shop)}
    assert cards == {"Total revenue": "R$ 0,00", "Orders": "0", "Pending orders": "0", "Products": "1"}

    assert pages.remove_product(shop, product["id"]).kind == "success"
    assert pages.remove_product(shop, product["id"]).kind == "error"
    assert pages.load_admin_orders(shop).rows == []


def test_change_order_status_reports_failure(client, shop):
    login(client, OWNER_EMAIL, name="Owner")
    shop.login(OWNER_EMAIL, PASSWORD)
    shop.http.cookies.clear()

    notification = pages.change_order_status(shop, 999, "shipped")

    assert notification == pages.Notification.error("Order not found")
