import json

from storefront.cart import (
    Cart,
    CartItem,
    FileCartStorage,
    MemoryCartStorage,
    add_item,
    item_count,
    subtotal,
    update_quantity,
)

KEY = "cupcake-lamore-cart"

MORANGO = CartItem(product_id=1, name="Cupcake de Morango", price=1200)
BELGA = CartItem(product_id=2, name="Chocolate Belga", price=1500, image_url="/uploads/belga.png")


def test_add_merges_same_product():
    items = add_item((), MORANGO, 2)
    items = add_item(items, BELGA)
    items = add_item(items, MORANGO, 3)

    assert [(i.product_id, i.quantity) for i in items] == [(1, 5), (2, 1)]
    assert item_count(items) == 6
    assert subtotal(items) == 5 * 1200 + 1500


def test_add_does_not_mutate_input():
    before = add_item((), MORANGO)
    after = add_item(before, MORANGO)

    assert before[0].quantity == 1
    assert after[0].quantity == 2


def test_update_to_zero_or_less_removes_line():
    items = add_item(add_item((), MORANGO), BELGA)

    assert [i.product_id for i in update_quantity(items, 1, 0)] == [2]
    assert [i.product_id for i in update_quantity(items, 2, -1)] == [1]
    assert update_quantity(items, 1, 4)[0].quantity == 4


def test_every_change_is_persisted_with_camel_case_keys():
    storage = MemoryCartStorage()
    cart = Cart(storage)

    cart.add_item(BELGA, 2)

    stored = json.loads(storage.get(KEY))
    assert stored == [{"productId": 2, "name": "Chocolate Belga", "price": 1500, "quantity": 2,
                       "imageUrl": "/uploads/belga.png"}]

    cart.remove_item(2)
    assert json.loads(storage.get(KEY)) == []


def test_cart_reloads_from_storage():
    storage = MemoryCartStorage()
    Cart(storage).add_item(MORANGO, 3)

    reloaded = Cart(storage)

    assert reloaded.item_count == 3
    assert reloaded.subtotal == 3600


def test_corrupt_storage_yields_empty_cart():
    cart = Cart(MemoryCartStorage({KEY: "{not json"}))

    assert cart.is_empty()
    assert cart.subtotal == 0


def test_clear_empties_cart():
    cart = Cart(MemoryCartStorage())
    cart.add_item(MORANGO)

    cart.clear()

    assert cart.is_empty()
    assert Cart(cart.storage).is_empty()


def test_file_storage_round_trip(tmp_path):
    storage = FileCartStorage(str(tmp_path / "carts"))
    assert Cart(storage).is_empty()

    Cart(storage).add_item(MORANGO, 2)

    assert (tmp_path / "carts" / f"{KEY}.json").exists()
    assert Cart(storage).items[0].quantity == 2
