from types import SimpleNamespace

from services.order_service.checkout import LineSnapshot, OrderTotals, compute_totals


def test_line_snapshot_copies_product_fields():
    product = SimpleNamespace(id=3, name="Cupcake Red Velvet", price=1450)

    line = LineSnapshot.of(product, 3)

    assert line == LineSnapshot(product_id=3, product_name="Cupcake Red Velvet", product_price=1450, quantity=3)
    assert line.subtotal == 4350


def test_line_snapshot_builds_order_item():
    item = LineSnapshot(product_id=1, product_name="Brigadeiro", product_price=800, quantity=2).to_item(order_id=9)

    assert item.order_id == 9
    assert item.product_name == "Brigadeiro"
    assert item.subtotal == 1600


def test_totals_add_flat_shipping_fee():
    lines = [
        LineSnapshot(product_id=1, product_name="A", product_price=1200, quantity=2),
        LineSnapshot(product_id=2, product_name="B", product_price=990, quantity=1),
    ]

    totals = compute_totals(lines, shipping_fee=1500)

    assert totals == OrderTotals(subtotal=3390, shipping_fee=1500)
    assert totals.total == 4890


def test_shipping_fee_defaults_to_configured_value():
    assert compute_totals([]).shipping_fee == 1500
