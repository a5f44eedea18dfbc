"""Shopfront 服務模組入口。"""

from .product_repository import ProductRepository
from .user_repository import InMemoryUserRepository, JsonFileUserRepository, LocalUser

__all__ = [
    "ProductRepository",
    "InMemoryUserRepository",
    "JsonFileUserRepository",
    "LocalUser",
]
