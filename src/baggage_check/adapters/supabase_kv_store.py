"""Supabase-backed key-value store."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from baggage_check.domain.errors import StorageUnavailable
from baggage_check.services.kv_store import KeyValueStore


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Stores values as rows of a scoped key-value table."""

    client: Client
    table: str = "kv_store"
    scope: str = "default"

    def get_item(self, key: str) -> str | None:
        """Return the stored value for a key."""
        try:
            response = (
                self.client.table(self.table)
                .select("value")
                .eq("scope", self.scope)
                .eq("key", key)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            raise StorageUnavailable(f"Failed to read {key!r}") from exc
        if not response.data:
            return None
        return response.data[0].get("value")

    def set_item(self, key: str, value: str) -> None:
        """Insert or replace the value stored under a key."""
        try:
            self.client.table(self.table).upsert(
                {
                    "scope": self.scope,
                    "key": key,
                    "value": value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="scope,key",
            ).execute()
        except Exception as exc:
            raise StorageUnavailable(f"Failed to write {key!r}") from exc

    def remove_item(self, key: str) -> None:
        """Delete the row stored under a key."""
        try:
            self.client.table(self.table).delete().eq("scope", self.scope).eq(
                "key", key
            ).execute()
        except Exception as exc:
            raise StorageUnavailable(f"Failed to remove {key!r}") from exc
