"""
Identity Bridge

Connects the authentication session to the cart store: the store is
rebound whenever the signed-in user changes, and a fresh store is bound
to whoever the persisted session says is signed in.
"""
import json
from typing import Callable, List, Optional

from storefront import config
from storefront.cart import CartStore, StorageBackend
from storefront.logging import get_logger, sanitize_id_for_logging

logger = get_logger(__name__)

IdentityListener = Callable[[Optional[str]], None]


class AuthSession:
    """
    Local mirror of the authentication provider's session.

    The provider persists the signed-in user as JSON under a single key;
    this class reads it synchronously and publishes identity changes.
    """

    def __init__(self, storage: StorageBackend, key: str = config.AUTH_SESSION_KEY):
        self._storage = storage
        self._key = key
        self._listeners: List[IdentityListener] = []

    def current_user(self) -> Optional[dict]:
        """Signed-in user, or None. An unreadable session counts as signed out."""
        try:
            raw = self._storage.get(self._key)
        except Exception:
            logger.exception("Failed to read auth session")
            return None
        if not raw:
            return None
        try:
            user = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Unreadable auth session: {e}")
            return None
        if not isinstance(user, dict) or not user.get("id"):
            return None
        return user

    def get_current_user_identifier(self) -> Optional[str]:
        user = self.current_user()
        return str(user["id"]) if user else None

    def on_identity_change(self, callback: IdentityListener) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def login(self, user: dict) -> None:
        """Persist the signed-in user (login and register share this path)."""
        self._storage.set(self._key, json.dumps(user, ensure_ascii=False))
        self._publish()

    def logout(self) -> None:
        self._storage.delete(self._key)
        self._publish()

    def _publish(self) -> None:
        user_id = self.get_current_user_identifier()
        for callback in list(self._listeners):
            callback(user_id)


def resolve_initial_user_id(auth: AuthSession) -> Optional[str]:
    """Bootstrap identifier, so a reload binds straight to the real user."""
    return auth.get_current_user_identifier()


class IdentityBridge:
    """Forwards identity changes to ``CartStore.sync_user``. Holds no state of its own."""

    def __init__(self, auth: AuthSession, cart: CartStore):
        self.auth = auth
        self.cart = cart
        self._unsubscribe: Optional[Callable[[], None]] = None

    def attach(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self.auth.on_identity_change(self.notify)
        self.notify(self.auth.get_current_user_identifier())

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def notify(self, user_id: Optional[str]) -> None:
        """Safe to call on every render; unchanged ids are no-ops in the store."""
        logger.debug(f"Identity observed: {sanitize_id_for_logging(user_id)}")
        self.cart.sync_user(user_id)


def create_cart_store(storage: StorageBackend, auth: AuthSession) -> CartStore:
    """Build the session's cart store bound to the persisted identity and wire it to auth."""
    cart = CartStore(storage, user_id=resolve_initial_user_id(auth))
    IdentityBridge(auth, cart).attach()
    return cart
