"""Cart store: the session's cart lines, partitioned per user."""
from dataclasses import replace
from typing import Callable, Iterable, List, Optional

from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.models import Product
from storefront.pricing import calc_line_subtotal
from .models import CartLine, CartTotals, clamp_quantity
from .storage import StorageBackend, read_lines, write_lines

logger = get_logger(__name__)

Listener = Callable[["CartStore"], None]


class CartStore:
    """
    Owns the current session's cart lines.

    Features:
    - One line per product; re-adding merges quantity
    - Every mutation persists the full snapshot under the bound user's key
    - ``sync_user`` swaps carts on login/logout without leaking lines
      between accounts
    - Listeners are notified after every change
    """

    def __init__(self, storage: StorageBackend, user_id: Optional[str] = None):
        self._storage = storage
        self._user_id = user_id
        self._lines: List[CartLine] = read_lines(storage, user_id)
        self._listeners: List[Listener] = []

    @property
    def user_id(self) -> Optional[str]:
        return self._user_id

    @property
    def lines(self) -> List[CartLine]:
        """Detached copies; change lines through the store operations."""
        return [replace(line) for line in self._lines]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _find(self, product_id: str) -> Optional[CartLine]:
        return next((line for line in self._lines if line.product_id == product_id), None)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Cart listener failed")

    def _commit(self) -> None:
        """Persist under the currently bound user, then notify."""
        write_lines(self._storage, self._user_id, self._lines)
        self._notify()

    # ------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------

    def add(
        self,
        product: Product,
        selected_add_on_ids: Iterable[str],
        quantity: int = 1,
        brief: str = "",
    ) -> CartLine:
        """Add a product, or merge into its existing line."""
        selected = list(selected_add_on_ids)
        existing = self._find(product.id)

        if existing:
            existing.selected_add_on_ids = list(dict.fromkeys(selected))
            existing.quantity = clamp_quantity(existing.quantity + quantity)
            if brief:
                existing.brief = brief
            line = existing
        else:
            line = CartLine(
                product=product,
                selected_add_on_ids=selected,
                quantity=quantity,
                brief=brief,
            )
            self._lines.append(line)

        self._commit()
        return replace(line)

    def remove(self, product_id: str) -> None:
        self._lines = [line for line in self._lines if line.product_id != product_id]
        self._commit()

    def set_qty(self, product_id: str, qty: int) -> None:
        """Set a line's quantity, clamped to at least 1. Unknown products are ignored."""
        line = self._find(product_id)
        if line is None:
            return
        line.quantity = clamp_quantity(qty)
        self._commit()

    def set_add_ons(self, product_id: str, add_on_ids: Iterable[str]) -> None:
        line = self._find(product_id)
        if line is None:
            return
        line.selected_add_on_ids = list(dict.fromkeys(add_on_ids))
        self._commit()

    def set_brief(self, product_id: str, brief: str) -> None:
        line = self._find(product_id)
        if line is None:
            return
        line.brief = brief or ""
        self._commit()

    def clear(self) -> None:
        """Empty the cart and persist the empty snapshot."""
        self._lines = []
        self._commit()

    # ------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------

    def totals(self) -> CartTotals:
        subtotal = sum(
            calc_line_subtotal(line.product, line.selected_add_on_ids).total * line.quantity
            for line in self._lines
        )
        items = sum(line.quantity for line in self._lines)
        return CartTotals(subtotal=subtotal, items=items)

    def checkout_items(self) -> List[dict]:
        """Plain line list handed to the order service."""
        items = []
        for line in self._lines:
            item = {"product_id": line.product_id, "quantity": line.quantity}
            if line.brief:
                item["brief"] = line.brief
            items.append(item)
        return items

    # ------------------------------------------------------------
    # User partitioning
    # ------------------------------------------------------------

    def sync_user(self, new_user_id: Optional[str]) -> None:
        """
        Bind the cart to ``new_user_id``.

        A repeated call with the current id does nothing. On a real change
        the in-memory lines are dropped and the id rebound before any
        storage I/O. The new key's snapshot is captured, an empty snapshot
        is written over it, and only then are the captured lines (if any)
        restored and persisted again.
        """
        new_user_id = new_user_id or None
        if new_user_id == self._user_id:
            return

        previous_user_id = self._user_id
        self._lines = []
        self._user_id = new_user_id

        logger.info(
            "Cart user switch %s -> %s",
            sanitize_id_for_logging(previous_user_id),
            sanitize_id_for_logging(new_user_id),
        )

        stored = read_lines(self._storage, new_user_id)
        write_lines(self._storage, new_user_id, [])

        if stored:
            self._lines = stored
            self._user_id = new_user_id
            write_lines(self._storage, new_user_id, self._lines)

        self._notify()
