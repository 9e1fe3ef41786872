"""
Pydantic Models - Data Schemas for catalog, pricing and orders

Contains the typed records the storefront core works with:
- Catalog entities (Product, AddOn) normalized once at the API boundary
- Pricing results (LineSubtotal, CheckoutPreview)
- Order records returned by the storefront API
"""

from typing import Any, Optional, List
from enum import Enum
from pydantic import BaseModel, Field

from storefront.services.money import to_amount


def _first(raw: dict, *names: str, default: Any = None) -> Any:
    """Return the first field present (and not None) among legacy aliases."""
    for name in names:
        value = raw.get(name)
        if value is not None:
            return value
    return default


def _to_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


# ============================================================
# Enums
# ============================================================

class DeliveryType(str, Enum):
    """How a product is fulfilled."""
    INSTANT = "instant"  # Downloadable asset, no lead time
    CUSTOM = "custom"  # Built to order, has an SLA


# ============================================================
# Catalog
# ============================================================

class AddOn(BaseModel):
    """Optional paid extra attached to a single product."""
    id: str
    name: str = ""
    price: int = 0
    extra_sla_days: int = 0
    description: Optional[str] = None

    @classmethod
    def from_api(cls, raw: dict) -> "AddOn":
        return cls(
            id=str(raw.get("id", "")),
            name=raw.get("name") or "",
            price=to_amount(raw.get("price")),
            extra_sla_days=_to_int(_first(raw, "extra_sla_days", "extraSlaDays", default=0)),
            description=raw.get("description"),
        )


class Product(BaseModel):
    """
    Immutable product snapshot.

    Cart lines embed products by value, so everything needed to price and
    render a line lives here.
    """
    id: str
    slug: str = ""
    title: str = ""
    description: str = ""
    category: Optional[str] = None
    stack: List[str] = Field(default_factory=list)
    base_price: int = 0
    delivery: DeliveryType = DeliveryType.INSTANT
    requires_brief: bool = False
    custom_eta_days: Optional[int] = None
    base_sla_days: Optional[int] = None
    add_ons: List[AddOn] = Field(default_factory=list)
    seller_id: Optional[str] = None
    cover_url: Optional[str] = None

    model_config = {"frozen": True}

    def find_add_on(self, add_on_id: str) -> Optional[AddOn]:
        return next((a for a in self.add_ons if a.id == add_on_id), None)

    @classmethod
    def from_api(cls, raw: dict) -> "Product":
        """
        Normalize a backend (or legacy persisted) product payload.

        This is the only place that knows about alternate field names:
        base_price/basePrice, addons/product_addons/addOns/add_ons,
        base_sla_days/baseSlaDays, custom_eta_days/customEtaDays.
        """
        delivery_raw = _first(raw, "delivery", default=DeliveryType.INSTANT.value)
        try:
            delivery = DeliveryType(delivery_raw)
        except ValueError:
            delivery = DeliveryType.INSTANT

        raw_add_ons = _first(raw, "add_ons", "addons", "product_addons", "addOns", default=[])
        add_ons = [
            a if isinstance(a, AddOn) else AddOn.from_api(a)
            for a in raw_add_ons
            if isinstance(a, (dict, AddOn))
        ]

        custom_eta = _first(raw, "custom_eta_days", "customEtaDays")
        stack = raw.get("stack") or []
        if isinstance(stack, str):
            stack = [s.strip() for s in stack.split(",") if s.strip()]

        return cls(
            id=str(raw.get("id", "")),
            slug=raw.get("slug") or "",
            title=raw.get("title") or "",
            description=raw.get("description") or "",
            category=raw.get("category"),
            stack=list(stack),
            base_price=to_amount(_first(raw, "base_price", "basePrice", default=0)),
            delivery=delivery,
            requires_brief=bool(_first(raw, "requires_brief", "requiresBrief", default=False)),
            custom_eta_days=_to_int(custom_eta) if custom_eta is not None else None,
            base_sla_days=_to_int(_first(raw, "base_sla_days", "baseSlaDays", default=7), 7),
            add_ons=add_ons,
            seller_id=raw.get("seller_id"),
            cover_url=_first(raw, "cover_url", "cover"),
        )


# ============================================================
# Pricing
# ============================================================

class LineSubtotal(BaseModel):
    """Unit price breakdown for one cart line (before quantity)."""
    base: int
    add_on_total: int
    total: int
    extra_sla: int = 0


class CheckoutPreview(BaseModel):
    """Derived monetary breakdown shown before order submission. Never persisted."""
    subtotal: int = 0
    platform_fee: int = 0
    tax: int = 0
    grand_total: int = 0
    eta_days: Optional[int] = None


# ============================================================
# Orders
# ============================================================

class OrderLine(BaseModel):
    product_id: str
    product_title: str = ""
    quantity: int = 1
    price: int = 0
    add_ons: List[str] = Field(default_factory=list)


class OrderMilestone(BaseModel):
    id: str
    title: str = ""
    amount: int = 0
    status: str = ""
    created_at: Optional[str] = None


class Order(BaseModel):
    """Buyer-facing order record."""
    id: str
    status: str
    total: int = 0
    platform_fee: int = 0
    tax: int = 0
    grand_total: int = 0
    notes: Optional[str] = None
    created_at: Optional[str] = None
    eta_days: Optional[int] = None
    lines: List[OrderLine] = Field(default_factory=list)
    milestones: List[OrderMilestone] = Field(default_factory=list)

    @classmethod
    def from_api(cls, raw: dict) -> "Order":
        """Normalize an order payload (snake_case or camelCase backend fields)."""
        lines = [
            OrderLine(
                product_id=str(_first(item, "product_id", "productId", default="")),
                product_title=_first(item, "product_title", "productTitle", default=""),
                quantity=_to_int(_first(item, "quantity", default=1), 1),
                price=to_amount(_first(item, "unit_price", "price", default=0)),
                add_ons=[
                    str(_first(addon, "addon_id", "addonId", default=""))
                    for addon in item.get("order_item_addons") or []
                ],
            )
            for item in raw.get("order_items") or []
        ]
        milestones = [
            OrderMilestone(
                id=str(m.get("id", "")),
                title=m.get("title") or "",
                amount=to_amount(m.get("amount")),
                status=m.get("status") or "",
                created_at=_first(m, "created_at", "createdAt"),
            )
            for m in raw.get("order_milestones") or []
        ]
        eta = _first(raw, "eta_days", "etaDays")
        return cls(
            id=str(raw.get("id", "")),
            status=raw.get("status") or "",
            total=to_amount(_first(raw, "total", "subtotal", default=0)),
            platform_fee=to_amount(_first(raw, "platform_fee", "platformFee", default=0)),
            tax=to_amount(raw.get("tax")),
            grand_total=to_amount(_first(raw, "grand_total", "grandTotal", default=0)),
            notes=raw.get("notes"),
            created_at=_first(raw, "created_at", "createdAt"),
            eta_days=_to_int(eta) if eta is not None else None,
            lines=lines,
            milestones=milestones,
        )


class CheckoutResult(BaseModel):
    """Outcome of handing the cart to the order service."""
    ok: bool
    order_id: Optional[str] = None
    requires_brief: bool = False
    message: Optional[str] = None
