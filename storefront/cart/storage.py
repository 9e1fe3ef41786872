"""
Cart snapshot storage.

One snapshot per user id (plus a reserved anonymous key). ``snapshot_key``
is the only key derivation used by both the read and the write path.
"""
import json
import time
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Protocol, Tuple

from storefront import config
from storefront.logging import get_logger, sanitize_id_for_logging
from .models import CartLine

logger = get_logger(__name__)


class SnapshotError(ValueError):
    """Persisted snapshot could not be decoded."""


class StorageBackend(Protocol):
    """Synchronous key/value store holding serialized snapshots."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str, ex: Optional[int] = None) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStorage:
    """In-process storage. Expiry is checked lazily on read."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._data: Dict[str, Tuple[str, Optional[float]]] = {}
        self._clock = clock

    def get(self, key: str) -> Optional[str]:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._data[key]
            return None
        return value

    def set(self, key: str, value: str, ex: Optional[int] = None) -> None:
        expires_at = self._clock() + ex if ex else None
        self._data[key] = (value, expires_at)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return [k for k in list(self._data) if self.get(k) is not None]


class RedisStorage:
    """Upstash Redis backed storage (sync client)."""

    def __init__(self, client=None):
        self._client = client  # Lazy initialization

    @property
    def client(self):
        if self._client is None:
            from storefront.db import get_redis_sync

            self._client = get_redis_sync()
        return self._client

    def get(self, key: str) -> Optional[str]:
        value = self.client.get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set(self, key: str, value: str, ex: Optional[int] = None) -> None:
        if ex:
            self.client.set(key, value, ex=ex)
        else:
            self.client.set(key, value)

    def delete(self, key: str) -> None:
        self.client.delete(key)


def snapshot_key(user_id: Optional[str]) -> str:
    """Storage key for a user's cart; ``None`` maps to the anonymous key."""
    return f"{config.CART_KEY_PREFIX}{user_id or config.CART_ANONYMOUS_KEY}"


def encode_snapshot(lines: List[CartLine], user_id: Optional[str]) -> str:
    return json.dumps(
        {
            "state": {
                "lines": [line.to_dict() for line in lines],
                "userId": user_id,
                "updatedAt": datetime.now(timezone.utc).isoformat(),
            },
            "version": config.CART_SNAPSHOT_VERSION,
        },
        ensure_ascii=False,
    )


def decode_snapshot(raw: str) -> List[CartLine]:
    """
    Parse a stored snapshot into cart lines.

    Accepts the wrapped ``{"state": {"lines": ...}, "version": n}`` layout
    and the legacy bare ``{"lines": [...]}`` layout.
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise SnapshotError(f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotError("snapshot is not an object")

    state = data.get("state") if isinstance(data.get("state"), dict) else data
    current_schema = state is not data and data.get("version") == config.CART_SNAPSHOT_VERSION
    lines = state.get("lines")
    if lines is None:
        return []
    if not isinstance(lines, list):
        raise SnapshotError("lines is not a list")

    try:
        return [CartLine.from_dict(item, current_schema=current_schema) for item in lines]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise SnapshotError(f"malformed cart line: {e}") from e


def read_lines(storage: StorageBackend, user_id: Optional[str]) -> List[CartLine]:
    """Load a user's lines. Missing, unreadable or corrupt snapshots read as empty."""
    key = snapshot_key(user_id)
    try:
        raw = storage.get(key)
    except Exception:
        logger.exception("Failed to read cart snapshot for user %s", sanitize_id_for_logging(user_id))
        return []

    if not raw:
        return []

    try:
        return decode_snapshot(raw)
    except SnapshotError as e:
        logger.warning(f"Corrupted cart snapshot for user {sanitize_id_for_logging(user_id)}: {e}")
        return []


def write_lines(storage: StorageBackend, user_id: Optional[str], lines: List[CartLine]) -> bool:
    """Persist the full line list under the user's key. Returns False if the backend failed."""
    ttl = config.CART_SNAPSHOT_TTL or None
    try:
        storage.set(snapshot_key(user_id), encode_snapshot(lines, user_id), ex=ttl)
        return True
    except Exception:
        logger.exception("Failed to save cart snapshot for user %s", sanitize_id_for_logging(user_id))
        return False
