"""Key/value blob storage with an in-memory and a SQLite backend."""

from __future__ import annotations

import abc
import hashlib
import logging
import sqlite3
import threading
import time
from datetime import timedelta
from pathlib import Path
from typing import Callable, Union

logger = logging.getLogger(__name__)

Expire = Union[timedelta, float, int]

DEFAULT_EXPIRE = timedelta(days=90)

_REQUIRED_METHODS = ("get_data", "put_data", "is_data_exist")


class DataNotFoundError(LookupError):
    """Raised when a key is missing or has expired."""


def _to_seconds(expire: Expire) -> float:
    if isinstance(expire, timedelta):
        return expire.total_seconds()
    return float(expire)


class Storage(abc.ABC):
    """Interface of a blob store keyed by strings."""

    @abc.abstractmethod
    def get_data(self, key: str) -> bytes:
        """Return the value for ``key`` or raise DataNotFoundError."""

    @abc.abstractmethod
    def put_data(self, key: str, value: bytes, expire: Expire) -> None:
        """Store ``value`` under ``key`` for ``expire`` (0 means the default)."""

    @abc.abstractmethod
    def is_data_exist(self, key: str) -> bool:
        """Tell whether a live value is stored under ``key``."""


class MemStorage(Storage):
    """Process-local storage; expiry is ignored."""

    def __init__(self) -> None:
        self._data: dict[str, bytes] = {}

    def get_data(self, key: str) -> bytes:
        try:
            return self._data[key]
        except KeyError:
            raise DataNotFoundError(f"key:{key} not found") from None

    def put_data(self, key: str, value: bytes, expire: Expire = 0) -> None:
        self._data[key] = bytes(value)

    def is_data_exist(self, key: str) -> bool:
        return key in self._data


class SqliteStorage(Storage):
    """Storage in a SQLite file; expired rows are purged when opened."""

    def __init__(self, path: Union[str, Path]) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._db = sqlite3.connect(str(path), check_same_thread=False)
        with self._lock, self._db:
            self._db.execute(
                "CREATE TABLE IF NOT EXISTS cache_tab ("
                " key TEXT PRIMARY KEY,"
                " value BLOB,"
                " expire_at INTEGER"
                ")"
            )
            self._db.execute(
                "CREATE INDEX IF NOT EXISTS idx_expireat ON cache_tab(expire_at)"
            )
            self._db.execute(
                "DELETE FROM cache_tab WHERE expire_at <= ?", (int(time.time()),)
            )

    def get_data(self, key: str) -> bytes:
        with self._lock:
            row = self._db.execute(
                "SELECT value FROM cache_tab WHERE key = ? AND expire_at > ?",
                (key, int(time.time())),
            ).fetchone()
        if row is None:
            raise DataNotFoundError(f"key:{key} not found")
        return bytes(row[0])

    def put_data(self, key: str, value: bytes, expire: Expire = 0) -> None:
        seconds = _to_seconds(expire)
        if seconds == 0:
            seconds = DEFAULT_EXPIRE.total_seconds()
        expire_at = int(time.time() + seconds) if seconds > 0 else 0
        with self._lock, self._db:
            self._db.execute(
                "INSERT OR REPLACE INTO cache_tab (key, value, expire_at) VALUES (?, ?, ?)",
                (key, sqlite3.Binary(bytes(value)), expire_at),
            )

    def is_data_exist(self, key: str) -> bool:
        with self._lock:
            (count,) = self._db.execute(
                "SELECT count(*) FROM cache_tab WHERE key = ? AND expire_at > ?",
                (key, int(time.time())),
            ).fetchone()
        return count > 0

    def close(self) -> None:
        """Close the underlying database connection."""
        with self._lock:
            self._db.close()

    def __enter__(self) -> "SqliteStorage":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class _StorageSlot:
    """Holds the module-wide storage."""

    def __init__(self, impl: Storage) -> None:
        self.impl = impl


_slot = _StorageSlot(MemStorage())


def set_storage(impl: Storage) -> Storage:
    """Replace the module-wide storage and return the one it replaces."""
    missing = [name for name in _REQUIRED_METHODS if not callable(getattr(impl, name, None))]
    if missing:
        raise TypeError(f"storage lacks methods: {', '.join(missing)}")
    previous = _slot.impl
    _slot.impl = impl
    return previous


def get_storage() -> Storage:
    """Return the module-wide storage."""
    return _slot.impl


def put_data(key: str, value: bytes) -> None:
    """Store with the default expiry."""
    put_data_with_expire(key, value, 0)


def put_data_with_expire(key: str, value: bytes, expire: Expire) -> None:
    _slot.impl.put_data(key, value, expire)


def anonymous_put_data(value: bytes) -> str:
    """Store ``value`` under its SHA-1 hex digest and return that key."""
    key = hashlib.sha1(value).hexdigest()
    if is_data_exist(key):
        return key
    put_data(key, value)
    return key


def get_data(key: str) -> bytes:
    return _slot.impl.get_data(key)


def load_data(key: str, expire: Expire, loader: Callable[[], bytes]) -> bytes:
    """Return the cached value, or call ``loader``, cache and return its result."""
    try:
        return get_data(key)
    except Exception:  # any read failure falls back to the loader
        logger.debug("cache miss for key %s", key)
    data = loader()
    put_data_with_expire(key, data, expire)
    return data


def is_data_exist(key: str) -> bool:
    return _slot.impl.is_data_exist(key)


def anonymous_data_rewrite(key: str, fn: Callable[[bytes], bytes]) -> str:
    """Rewrite the data under ``key`` with ``fn`` and store it under a new content key."""
    raw = get_data(key)
    return anonymous_put_data(fn(raw))