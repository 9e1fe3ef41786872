"""
Storefront Core Module

Client-side cart, pricing and user partitioning for the marketplace:
- pricing: line subtotals and checkout preview
- cart: per-user cart store with persisted snapshots
- identity: wires auth session changes into the cart store
- catalog / orders: storefront API collaborators

Note: Imports are lazy so `storefront.config` and `storefront.logging`
can be loaded without pulling in the HTTP or Redis clients.
"""

__version__ = "0.1.0"

__all__ = [
    "CartStore",
    "MemoryStorage",
    "RedisStorage",
    "create_cart_store",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name in ("CartStore", "MemoryStorage", "RedisStorage"):
        from storefront import cart
        return getattr(cart, name)
    if name == "create_cart_store":
        from storefront.identity import create_cart_store
        return create_cart_store
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
