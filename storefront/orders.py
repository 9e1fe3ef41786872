"""
Order client and checkout hand-off.

The core only builds the request and clears the cart on success; order
creation, payment and fulfilment happen server-side.
"""
from typing import List, Optional

from storefront.api import APIClient
from storefront.cart import CartStore
from storefront.errors import (
    ERROR_CART_EMPTY,
    ERROR_CHECKOUT_FAILED,
    ERROR_ORDER_NOT_FOUND,
    StorefrontAPIError,
)
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.models import CheckoutResult, Order

logger = get_logger(__name__)


class OrderClient:
    """Buyer-side order endpoints."""

    def __init__(self, api: Optional[APIClient] = None):
        self.api = api or APIClient()

    async def checkout(self, items: List[dict], token: Optional[str]) -> CheckoutResult:
        """Submit ``[{product_id, quantity, brief?}]``. API errors become ``ok=False``."""
        try:
            data = await self.api.post("/orders/checkout", items, token=token)
        except StorefrontAPIError as e:
            return CheckoutResult(ok=False, message=str(e) or ERROR_CHECKOUT_FAILED)

        order_id = data.get("order_id") if isinstance(data, dict) else None
        if not order_id:
            return CheckoutResult(ok=False, message=ERROR_CHECKOUT_FAILED)
        return CheckoutResult(
            ok=True,
            order_id=str(order_id),
            requires_brief=bool(data.get("requires_brief", False)),
        )

    async def get_my_orders(self, token: Optional[str]) -> List[Order]:
        data = await self.api.get("/orders/mine", token=token)
        raw_orders = data if isinstance(data, list) else (data or {}).get("orders", [])
        return [Order.from_api(raw) for raw in raw_orders if isinstance(raw, dict)]

    async def get_order_detail(self, order_id: str, token: Optional[str]) -> Order:
        data = await self.api.get(f"/orders/{order_id}", token=token)
        raw = data.get("order", data) if isinstance(data, dict) else None
        if not raw:
            raise StorefrontAPIError(ERROR_ORDER_NOT_FOUND, status_code=404)
        return Order.from_api(raw)


async def checkout_cart(cart: CartStore, client: OrderClient, token: Optional[str]) -> CheckoutResult:
    """Hand the cart to the order service; the cart is cleared only when an order was created."""
    items = cart.checkout_items()
    if not items:
        return CheckoutResult(ok=False, message=ERROR_CART_EMPTY)

    result = await client.checkout(items, token)
    if result.ok:
        logger.info(
            "Order %s created for user %s",
            sanitize_id_for_logging(result.order_id),
            sanitize_id_for_logging(cart.user_id),
        )
        cart.clear()
    return result
