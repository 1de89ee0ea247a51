"""Supabase-backed document store.

Each collection is a table with a text ``id`` primary key and a jsonb
``data`` column.
"""

from dataclasses import dataclass

from supabase import Client

from derender.domain.errors import PersistenceError
from derender.services.stores import DocumentStore


@dataclass
class SupabaseDocumentStore(DocumentStore):
    """Supabase implementation for keyed documents."""

    client: Client

    def get(self, collection: str, document_id: str) -> dict[str, object] | None:
        """Return a document by id, if present."""
        try:
            response = (
                self.client.table(collection)
                .select("id, data")
                .eq("id", document_id)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            raise PersistenceError(
                f"Failed to read {collection}/{document_id}: {exc}"
            ) from exc
        if not response.data:
            return None
        # A row with a null payload still exists.
        return response.data[0].get("data") or {}

    def set(self, collection: str, document_id: str, data: dict[str, object]) -> None:
        """Create or replace a document."""
        try:
            self.client.table(collection).upsert(
                {"id": document_id, "data": data}
            ).execute()
        except Exception as exc:
            raise PersistenceError(
                f"Failed to write {collection}/{document_id}: {exc}"
            ) from exc

    def add(self, collection: str, data: dict[str, object]) -> str:
        """Insert a document with a database-generated id."""
        try:
            response = self.client.table(collection).insert({"data": data}).execute()
        except Exception as exc:
            raise PersistenceError(
                f"Failed to add document to {collection}: {exc}"
            ) from exc
        if not response.data:
            raise PersistenceError(f"Failed to add document to {collection}")
        return str(response.data[0]["id"])
