"""Tests for Pydantic models"""
from storefront.models import AddOn, CheckoutPreview, DeliveryType, Order, Product
from storefront.services.money import format_money, round_money, to_decimal


def test_product_from_snake_case():
    product = Product.from_api({
        "id": "p1",
        "slug": "admin-dashboard",
        "title": "Admin Dashboard",
        "stack": ["React"],
        "base_price": 750000,
        "delivery": "custom",
        "requires_brief": True,
        "custom_eta_days": 10,
        "product_addons": [{"id": "a1", "name": "Auth", "price": 250000, "extra_sla_days": 2}],
    })

    assert product.base_price == 750000
    assert product.delivery == DeliveryType.CUSTOM
    assert product.requires_brief is True
    assert product.custom_eta_days == 10
    assert product.add_ons == [AddOn(id="a1", name="Auth", price=250000, extra_sla_days=2)]


def test_product_from_legacy_camel_case():
    product = Product.from_api({
        "id": "p2",
        "basePrice": 120000,
        "baseSlaDays": 3,
        "addOns": [{"id": "a", "name": "Docs", "price": 10000, "extraSlaDays": 1}],
    })

    assert product.base_price == 120000
    assert product.base_sla_days == 3
    assert product.add_ons[0].extra_sla_days == 1
    assert product.delivery == DeliveryType.INSTANT


def test_product_defaults_and_bad_values():
    product = Product.from_api({"id": 42, "delivery": "teleport", "stack": "Vue, Nuxt"})

    assert product.id == "42"
    assert product.base_price == 0
    assert product.base_sla_days == 7
    assert product.delivery == DeliveryType.INSTANT
    assert product.stack == ["Vue", "Nuxt"]
    assert product.find_add_on("missing") is None


def test_base_price_prefers_backend_field():
    product = Product.from_api({"id": "p", "base_price": 200, "basePrice": 100})

    assert product.base_price == 200


def test_checkout_preview_defaults():
    preview = CheckoutPreview()

    assert preview.grand_total == 0
    assert preview.eta_days is None


def test_order_normalization():
    order = Order.from_api({
        "id": "ord-1",
        "status": "PAID",
        "subtotal": 2000000,
        "platform_fee": 200000,
        "tax": 242000,
        "grandTotal": 2442000,
        "createdAt": "2025-01-01T00:00:00Z",
        "eta_days": 5,
        "order_items": [{
            "product_id": "p1",
            "product_title": "Landing Kit",
            "quantity": 1,
            "unit_price": 2000000,
            "order_item_addons": [{"addon_id": "a1"}, {"addonId": "a2"}],
        }],
        "order_milestones": [{"id": "m1", "title": "Design", "amount": 500000, "status": "pending"}],
    })

    assert order.total == 2000000
    assert order.platform_fee == 200000
    assert order.grand_total == 2442000
    assert order.created_at == "2025-01-01T00:00:00Z"
    assert order.eta_days == 5
    assert order.lines[0].price == 2000000
    assert order.lines[0].add_ons == ["a1", "a2"]
    assert order.milestones[0].title == "Design"


def test_money_helpers():
    assert to_decimal(None) == 0
    assert to_decimal("abc") == 0
    assert round_money("2.5") == 3
    assert round_money(0.5) == 1
    assert format_money(2442000) == "Rp 2.442.000"
    assert format_money(10, "USD") == "10 USD"
