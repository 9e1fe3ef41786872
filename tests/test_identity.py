"""Tests for the identity bridge"""
import json

from storefront import config
from storefront.cart import CartStore, CartTotals, MemoryStorage
from storefront.identity import AuthSession, IdentityBridge, create_cart_store, resolve_initial_user_id


def _login(auth, user_id):
    auth.login({"id": user_id, "name": "Test", "email": f"{user_id}@example.com"})


def test_current_identifier(storage):
    auth = AuthSession(storage)
    assert auth.get_current_user_identifier() is None

    _login(auth, "user-1")
    assert auth.get_current_user_identifier() == "user-1"
    assert json.loads(storage.get(config.AUTH_SESSION_KEY))["id"] == "user-1"

    auth.logout()
    assert auth.get_current_user_identifier() is None


def test_malformed_session_is_anonymous(storage):
    storage.set(config.AUTH_SESSION_KEY, "{broken")
    assert resolve_initial_user_id(AuthSession(storage)) is None

    storage.set(config.AUTH_SESSION_KEY, json.dumps({"name": "no id"}))
    assert resolve_initial_user_id(AuthSession(storage)) is None


def test_session_read_failure_is_anonymous():
    class BrokenStorage(MemoryStorage):
        def get(self, key):
            raise ConnectionError("redis down")

    storage = BrokenStorage()
    auth = AuthSession(storage)

    assert resolve_initial_user_id(auth) is None
    cart = create_cart_store(storage, auth)
    assert cart.user_id is None
    assert cart.lines == []


def test_on_identity_change(storage):
    auth = AuthSession(storage)
    seen = []
    unsubscribe = auth.on_identity_change(seen.append)

    _login(auth, "user-1")
    auth.logout()
    unsubscribe()
    _login(auth, "user-2")

    assert seen == ["user-1", None]


def test_bootstrap_binds_to_persisted_user(storage, sample_product):
    auth = AuthSession(storage)
    _login(auth, "user-1")
    CartStore(storage, user_id="user-1").add(sample_product, ["addon-a"])

    # Simulated page reload: fresh objects over the same storage
    cart = create_cart_store(storage, AuthSession(storage))

    assert cart.user_id == "user-1"
    assert cart.totals() == CartTotals(subtotal=2000000, items=1)


def test_login_logout_swaps_carts(storage, sample_product, custom_product):
    auth = AuthSession(storage)
    cart = create_cart_store(storage, auth)
    cart.add(sample_product, [])

    _login(auth, "user-1")
    assert cart.user_id == "user-1"
    assert cart.lines == []
    cart.add(custom_product, [])

    _login(auth, "user-2")
    assert cart.lines == []

    auth.logout()
    assert cart.user_id is None
    assert [line.product_id for line in cart.lines] == ["prod-landing"]

    _login(auth, "user-1")
    assert [line.product_id for line in cart.lines] == ["prod-custom-app"]


def test_redundant_notifications_are_noops(storage, sample_product):
    auth = AuthSession(storage)
    _login(auth, "user-1")
    cart = CartStore(storage, user_id="user-1")
    bridge = IdentityBridge(auth, cart)
    bridge.attach()
    cart.add(sample_product, [], 2)
    changes = []
    cart.subscribe(lambda s: changes.append(s.user_id))

    for _ in range(3):
        bridge.notify("user-1")
    bridge.attach()

    assert changes == []
    assert cart.totals().items == 2


def test_detach_stops_syncing(storage):
    auth = AuthSession(storage)
    cart = CartStore(storage)
    bridge = IdentityBridge(auth, cart)
    bridge.attach()
    bridge.detach()

    _login(auth, "user-1")

    assert cart.user_id is None
