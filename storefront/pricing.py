"""
Pricing Engine

Pure monetary arithmetic for cart lines and the checkout preview.
No state, no I/O; the same inputs always give the same numbers.
"""
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from storefront import config
from storefront.models import CheckoutPreview, DeliveryType, LineSubtotal, Product
from storefront.services.money import multiply, round_money


def calc_line_subtotal(product: Product, selected_add_on_ids: Iterable[str]) -> LineSubtotal:
    """
    Unit price of a product with the selected add-ons.

    Ids that do not match an add-on on the product snapshot are skipped;
    an empty or fully stale selection yields the base price alone.
    """
    base = product.base_price
    add_on_total = 0
    extra_sla = 0
    for add_on_id in dict.fromkeys(selected_add_on_ids):
        add_on = product.find_add_on(add_on_id)
        if add_on is None:
            continue
        add_on_total += add_on.price
        extra_sla += add_on.extra_sla_days or 0

    return LineSubtotal(
        base=base,
        add_on_total=add_on_total,
        total=base + add_on_total,
        extra_sla=extra_sla,
    )


def checkout_preview(
    line_totals: Sequence[int | LineSubtotal],
    eta_days: Optional[int] = None,
    fee_rate: Decimal = config.PLATFORM_FEE_RATE,
    tax_rate: Decimal = config.TAX_RATE,
) -> CheckoutPreview:
    """
    Subtotal, platform fee, tax and grand total for the given line totals.

    Each entry is a line total already multiplied by its quantity. Tax is
    charged on subtotal + fee. Fee and tax are rounded half-up to whole
    units before summing. ``eta_days`` is passed through untouched.
    """
    subtotal = sum(
        line.total if isinstance(line, LineSubtotal) else int(line)
        for line in line_totals
    )
    platform_fee = round_money(multiply(subtotal, fee_rate))
    tax = round_money(multiply(subtotal + platform_fee, tax_rate))

    return CheckoutPreview(
        subtotal=subtotal,
        platform_fee=platform_fee,
        tax=tax,
        grand_total=subtotal + platform_fee + tax,
        eta_days=eta_days,
    )


def line_eta_days(product: Product, selected_add_on_ids: Iterable[str]) -> int:
    """Days to deliver one line: 0 for instant products, else custom ETA plus add-on SLA."""
    if product.delivery == DeliveryType.INSTANT:
        return 0
    if product.custom_eta_days is not None:
        base_days = product.custom_eta_days
    else:
        base_days = product.base_sla_days or 0
    return base_days + calc_line_subtotal(product, selected_add_on_ids).extra_sla


def estimate_eta_days(lines) -> int:
    """Slowest line wins. An empty cart delivers in 0 days."""
    return max(
        (line_eta_days(line.product, line.selected_add_on_ids) for line in lines),
        default=0,
    )


def preview_for_lines(lines) -> CheckoutPreview:
    """Checkout preview for cart lines, with ETA aggregated across them."""
    line_totals = [
        calc_line_subtotal(line.product, line.selected_add_on_ids).total * line.quantity
        for line in lines
    ]
    return checkout_preview(line_totals, eta_days=estimate_eta_days(lines))
