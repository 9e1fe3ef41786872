"""Cart line models and their persisted form."""
from dataclasses import dataclass, field
from typing import List

from storefront.models import Product


def clamp_quantity(quantity) -> int:
    """Quantities below 1 (or unparseable) become 1."""
    try:
        return max(1, int(quantity))
    except (TypeError, ValueError):
        return 1


@dataclass
class CartLine:
    """One product in the cart with its add-on selection, quantity and brief."""
    product: Product
    selected_add_on_ids: List[str] = field(default_factory=list)
    quantity: int = 1
    brief: str = ""

    def __post_init__(self):
        self.quantity = clamp_quantity(self.quantity)
        # Selection is a set; keep first-seen order for display
        self.selected_add_on_ids = list(dict.fromkeys(str(i) for i in self.selected_add_on_ids))
        self.brief = self.brief or ""

    @property
    def product_id(self) -> str:
        return self.product.id

    def to_dict(self) -> dict:
        """Convert to the persisted snapshot shape."""
        return {
            "product": self.product.model_dump(mode="json"),
            "selectedAddOnIds": list(self.selected_add_on_ids),
            "quantity": self.quantity,
            "brief": self.brief,
        }

    @classmethod
    def from_dict(cls, data: dict, current_schema: bool = False) -> "CartLine":
        """
        Create from a persisted line.

        Lines written by this schema version restore their product exactly;
        older snapshots go through the catalog normalization instead.

        Raises KeyError/TypeError/ValueError on a malformed entry; the
        storage layer treats that as a corrupt snapshot.
        """
        product_data = data["product"]
        if not isinstance(product_data, dict) or not product_data.get("id"):
            raise ValueError("cart line without a product id")
        selected = data.get("selectedAddOnIds", data.get("selected_add_on_ids")) or []
        if not isinstance(selected, list):
            raise TypeError("selectedAddOnIds must be a list")
        return cls(
            product=Product.model_validate(product_data) if current_schema else Product.from_api(product_data),
            selected_add_on_ids=selected,
            quantity=data.get("quantity", 1),
            brief=data.get("brief") or "",
        )


@dataclass(frozen=True)
class CartTotals:
    """Read-only totals query result."""
    subtotal: int = 0
    items: int = 0

    @property
    def is_empty(self) -> bool:
        return self.items == 0

    def to_dict(self) -> dict:
        return {"subtotal": self.subtotal, "items": self.items}
