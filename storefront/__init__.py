from .cart import Cart, CartItem, CartStorage, FileCartStorage, MemoryCartStorage
from .client import StorefrontClient, StorefrontError

__all__ = [
    "Cart",
    "CartItem",
    "CartStorage",
    "FileCartStorage",
    "MemoryCartStorage",
    "StorefrontClient",
    "StorefrontError",
]
