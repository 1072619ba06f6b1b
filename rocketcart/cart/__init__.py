"""Cart package: models, repository, storage, and engine."""
from .models import CartItem, Cart
from .repository import CartRepository
from .storage import PersistenceAdapter, MemoryStorage, FileStorage, RedisStorage, get_storage
from .service import CartEngine, build_cart_engine

__all__ = [
    "CartItem",
    "Cart",
    "CartRepository",
    "PersistenceAdapter",
    "MemoryStorage",
    "FileStorage",
    "RedisStorage",
    "get_storage",
    "CartEngine",
    "build_cart_engine",
]
