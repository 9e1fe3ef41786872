"""Cart package: models, snapshot storage, and the cart store."""
from .models import CartLine, CartTotals
from .service import CartStore
from .storage import MemoryStorage, RedisStorage, StorageBackend, snapshot_key

__all__ = [
    "CartLine",
    "CartTotals",
    "CartStore",
    "MemoryStorage",
    "RedisStorage",
    "StorageBackend",
    "snapshot_key",
]
