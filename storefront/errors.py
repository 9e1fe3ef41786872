"""
Common Error Constants

Centralized error messages shared by the catalog and order clients.
"""

# Catalog errors
ERROR_PRODUCT_NOT_FOUND = "Product not found"

# Order errors
ERROR_CHECKOUT_FAILED = "Checkout failed"
ERROR_CART_EMPTY = "Cart is empty"
ERROR_ORDER_NOT_FOUND = "Order not found"

# Generic errors
ERROR_UNAUTHORIZED = "Unauthorized"
ERROR_API_UNREACHABLE = "Storefront API unreachable"


class StorefrontAPIError(ValueError):
    """Transport-level failure talking to the storefront API."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
