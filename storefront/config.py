"""
Storefront configuration.

All settings come from environment variables, read once at import.
"""
import os
from decimal import Decimal

from storefront.services.money import to_decimal


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


# Storefront REST API (catalog + orders)
STOREFRONT_API_URL = os.environ.get("STOREFRONT_API_URL", "http://localhost:5000/api").rstrip("/")
HTTP_TIMEOUT_SECONDS = float(os.environ.get("STOREFRONT_HTTP_TIMEOUT", "10") or 10)

# Pricing
PLATFORM_FEE_RATE: Decimal = to_decimal(os.environ.get("PLATFORM_FEE_RATE", "0.10"))
TAX_RATE: Decimal = to_decimal(os.environ.get("TAX_RATE", "0.11"))  # PPN

# Cart snapshots
CART_KEY_PREFIX = os.environ.get("CART_KEY_PREFIX", "devstore-cart-storage:")
CART_ANONYMOUS_KEY = "anonymous"
CART_SNAPSHOT_VERSION = _env_int("CART_SNAPSHOT_VERSION", 1)
CART_SNAPSHOT_TTL = _env_int("CART_SNAPSHOT_TTL", 30 * 24 * 3600)  # 0 disables expiry

# Local mirror of the auth provider session
AUTH_SESSION_KEY = os.environ.get("AUTH_SESSION_KEY", "devstore_user")

# Upstash Redis
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")
