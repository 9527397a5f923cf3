"""Supabase-backed key-value store."""

import base64
import binascii
from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from calorie_tracker.services.storage import KeyValueStore, StorageError

KV_TABLE = "kv_store"


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Stores blobs base64-encoded in a ``kv_store`` table."""

    client: Client
    table: str = KV_TABLE

    def get(self, key: str) -> bytes | None:
        """Return the stored value for a key, if present."""
        try:
            response = (
                self.client.table(self.table)
                .select("value")
                .eq("key", key)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            raise StorageError(f"Failed to read {key}") from exc
        if not response.data:
            return None
        try:
            return base64.b64decode(response.data[0]["value"], validate=True)
        except (KeyError, TypeError, binascii.Error) as exc:
            raise StorageError(f"Corrupt value for {key}") from exc

    def set(self, key: str, value: bytes) -> None:
        """Insert or replace the value for a key."""
        try:
            self.client.table(self.table).upsert(
                {
                    "key": key,
                    "value": base64.b64encode(value).decode("ascii"),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            ).execute()
        except Exception as exc:
            raise StorageError(f"Failed to write {key}") from exc
