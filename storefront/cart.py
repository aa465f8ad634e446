"""
Client-side cart.

The item list is never mutated in place: the module-level functions take the
current items and return a new tuple. Cart wraps them, loads the persisted
list once when it is built and writes it back after every change through a
CartStorage port (browser local storage in the web front end, a dict or
a JSON file here).
"""
import json
from pathlib import Path
from typing import Iterable, Optional, Protocol

import structlog
from pydantic import TypeAdapter, ValidationError

from shared.config.settings import CART_STORAGE_KEY
from shared.schemas import CamelModel

logger = structlog.get_logger(__name__)


class CartItem(CamelModel):
    product_id: int
    name: str
    price: int  # minor currency units
    quantity: int = 1
    image_url: Optional[str] = None

    @property
    def subtotal(self) -> int:
        return self.price * self.quantity


_ITEMS_ADAPTER = TypeAdapter(list[CartItem])

Items = tuple[CartItem, ...]


def add_item(items: Iterable[CartItem], product: CartItem, quantity: int = 1) -> Items:
    """Merge into the line for the same product, or append a new line."""
    items = tuple(items)
    if any(item.product_id == product.product_id for item in items):
        return tuple(
            item.model_copy(update={"quantity": item.quantity + quantity})
            if item.product_id == product.product_id else item
            for item in items
        )
    return items + (product.model_copy(update={"quantity": quantity}),)


def remove_item(items: Iterable[CartItem], product_id: int) -> Items:
    return tuple(item for item in items if item.product_id != product_id)


def update_quantity(items: Iterable[CartItem], product_id: int, quantity: int) -> Items:
    if quantity <= 0:
        return remove_item(items, product_id)
    return tuple(
        item.model_copy(update={"quantity": quantity}) if item.product_id == product_id else item
        for item in items
    )


def subtotal(items: Iterable[CartItem]) -> int:
    return sum(item.subtotal for item in items)


def item_count(items: Iterable[CartItem]) -> int:
    return sum(item.quantity for item in items)


def dump_items(items: Iterable[CartItem]) -> str:
    return json.dumps([item.model_dump(by_alias=True) for item in items])


def load_items(raw: str) -> Items:
    return tuple(_ITEMS_ADAPTER.validate_json(raw))


class CartStorage(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryCartStorage:

    def __init__(self, initial: Optional[dict] = None) -> None:
        self.values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


class FileCartStorage:
    """One JSON file per key under `directory`."""

    def __init__(self, directory: str) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")


class Cart:

    def __init__(self, storage: CartStorage, key: str = CART_STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key
        self._items: Items = self._load()

    def _load(self) -> Items:
        raw = self.storage.get(self.key)
        if not raw:
            return ()
        try:
            return load_items(raw)
        except ValidationError as e:
            logger.error("cart_load_failed", key=self.key, error=str(e))
            return ()

    def _commit(self, items: Items) -> None:
        self._items = items
        self.storage.set(self.key, dump_items(items))

    @property
    def items(self) -> Items:
        return self._items

    @property
    def item_count(self) -> int:
        return item_count(self._items)

    @property
    def subtotal(self) -> int:
        return subtotal(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def add_item(self, product: CartItem, quantity: int = 1) -> None:
        self._commit(add_item(self._items, product, quantity))

    def remove_item(self, product_id: int) -> None:
        self._commit(remove_item(self._items, product_id))

    def update_quantity(self, product_id: int, quantity: int) -> None:
        self._commit(update_quantity(self._items, product_id, quantity))

    def clear(self) -> None:
        self._commit(())
