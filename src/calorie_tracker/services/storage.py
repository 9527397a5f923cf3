"""Key-value storage abstractions."""

import logging
from dataclasses import dataclass, field
from typing import Generic, Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

_logger = logging.getLogger(__name__)

T = TypeVar("T")

QUARANTINE_SUFFIX = ".corrupt"


class StorageError(Exception):
    """Raised when a value cannot be read from or written to storage."""


class KeyValueStore(Protocol):
    """Flat key-value storage for serialized blobs."""

    def get(self, key: str) -> bytes | None:
        """Return the stored value for a key, if present."""

    def set(self, key: str, value: bytes) -> None:
        """Store a value under a key, replacing any previous value."""


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """Process-local key-value store."""

    _values: dict[str, bytes]

    def __init__(self, values: dict[str, bytes] | None = None) -> None:
        self._values = dict(values or {})

    def get(self, key: str) -> bytes | None:
        """Return the stored value for a key, if present."""
        return self._values.get(key)

    def set(self, key: str, value: bytes) -> None:
        """Store a value under a key."""
        self._values[key] = value


@dataclass
class JsonBlob(Generic[T]):
    """A whole value serialized as one JSON blob under a single key.

    A blob that fails to decode is copied to ``<key>.corrupt`` before the
    next save replaces it. When the blob could not be read, or the copy
    failed, saves are refused so the stored bytes are never lost.
    """

    store: KeyValueStore
    key: str
    adapter: TypeAdapter[T]
    _write_blocked: StorageError | None = field(default=None, init=False, repr=False)

    @property
    def quarantine_key(self) -> str:
        return f"{self.key}{QUARANTINE_SUFFIX}"

    def load(self) -> T | None:
        """Return the decoded value, or None when absent or unreadable."""
        self._write_blocked = None
        try:
            raw = self.store.get(self.key)
        except StorageError as exc:
            _logger.warning("Storage read failed: key=%s error=%s", self.key, exc)
            self._write_blocked = StorageError(
                f"Refusing to overwrite {self.key} after a failed read: {exc}"
            )
            return None
        if raw is None:
            return None
        try:
            return self.adapter.validate_json(raw)
        except ValidationError as exc:
            _logger.warning(
                "Discarding unreadable blob: key=%s errors=%s",
                self.key,
                exc.error_count(),
            )
            self._quarantine(raw)
            return None

    def save(self, value: T) -> StorageError | None:
        """Serialize and store the value, returning the failure if any."""
        if self._write_blocked is not None:
            _logger.warning(
                "Storage write skipped: key=%s error=%s", self.key, self._write_blocked
            )
            return self._write_blocked
        try:
            self.store.set(self.key, self.adapter.dump_json(value))
        except PydanticSerializationError as exc:
            error = StorageError(f"Could not serialize {self.key}: {exc}")
        except StorageError as exc:
            error = exc
        else:
            return None
        _logger.warning("Storage write failed: key=%s error=%s", self.key, error)
        return error

    def _quarantine(self, raw: bytes) -> None:
        try:
            self.store.set(self.quarantine_key, raw)
        except StorageError as exc:
            _logger.warning(
                "Could not preserve unreadable blob: key=%s error=%s", self.key, exc
            )
            self._write_blocked = StorageError(
                f"Refusing to overwrite unreadable {self.key}: {exc}"
            )
        else:
            _logger.info(
                "Preserved unreadable blob: key=%s copy=%s",
                self.key,
                self.quarantine_key,
            )
