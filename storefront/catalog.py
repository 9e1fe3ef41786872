"""
Catalog client.

Products are normalized into ``Product`` snapshots here, once, as they
enter the system; nothing downstream looks at raw backend field names.
"""
from typing import List, Optional, Sequence

from storefront.api import APIClient
from storefront.errors import ERROR_PRODUCT_NOT_FOUND, StorefrontAPIError
from storefront.logging import get_logger
from storefront.models import Product

logger = get_logger(__name__)


def normalize_products(payload) -> List[Product]:
    """Accept either a bare list or ``{"products": [...]}``."""
    raw_products = payload.get("products", []) if isinstance(payload, dict) else payload
    if not isinstance(raw_products, list):
        return []
    products = []
    for raw in raw_products:
        if not isinstance(raw, dict) or not raw.get("id"):
            logger.warning("Skipping catalog entry without id")
            continue
        products.append(Product.from_api(raw))
    return products


class CatalogClient:
    """Read-only access to the product catalog."""

    def __init__(self, api: Optional[APIClient] = None):
        self.api = api or APIClient()

    async def get_products(
        self,
        q: Optional[str] = None,
        category: Optional[str] = None,
        stack: Optional[Sequence[str]] = None,
    ) -> List[Product]:
        params = {}
        if q:
            params["q"] = q
        if category:
            params["category"] = category
        if stack:
            params["stack"] = ",".join(stack)

        payload = await self.api.get("/products", params=params or None)
        return normalize_products(payload)

    async def get_product_by_slug(self, slug: str) -> Product:
        payload = await self.api.get(f"/products/{slug}")
        raw = payload.get("product", payload) if isinstance(payload, dict) else None
        if not raw or not raw.get("id"):
            raise StorefrontAPIError(ERROR_PRODUCT_NOT_FOUND, status_code=404)
        return Product.from_api(raw)
