"""Pytest configuration and fixtures"""
import os
import pytest

# Set test environment variables
os.environ.setdefault("STOREFRONT_API_URL", "https://api.test/api")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from storefront.cart import CartStore, MemoryStorage  # noqa: E402
from storefront.models import Product  # noqa: E402


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def sample_product():
    """Instant product with two add-ons."""
    return Product.from_api({
        "id": "prod-landing",
        "slug": "saas-landing-kit",
        "title": "SaaS Landing Kit",
        "stack": ["Next.js", "Tailwind"],
        "base_price": 1500000,
        "delivery": "instant",
        "addons": [
            {"id": "addon-a", "name": "Dark mode", "price": 500000},
            {"id": "addon-b", "name": "CMS integration", "price": 900000, "extra_sla_days": 3},
        ],
    })


@pytest.fixture
def custom_product():
    """Custom-order product with an SLA."""
    return Product.from_api({
        "id": "prod-custom-app",
        "slug": "custom-mobile-app",
        "title": "Custom Mobile App",
        "stack": ["Flutter"],
        "base_price": 5000000,
        "delivery": "custom",
        "requires_brief": True,
        "custom_eta_days": 7,
        "addons": [
            {"id": "addon-push", "name": "Push notifications", "price": 750000, "extra_sla_days": 2},
        ],
    })


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage(clock):
    return MemoryStorage(clock=clock)


@pytest.fixture
def store(storage):
    """Anonymous cart store on fresh storage."""
    return CartStore(storage)
