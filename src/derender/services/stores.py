"""Storage interfaces shared by the generation and sync services."""

from typing import Protocol


class ObjectStore(Protocol):
    """Interface for blob storage with public URLs."""

    def list_objects(self, prefix: str) -> list[str]:
        """Return the full paths of every object under a prefix."""

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Store a publicly readable object and return its public URL."""

    def public_url(self, path: str) -> str:
        """Return the public URL for an object path."""


class DocumentStore(Protocol):
    """Interface for keyed documents grouped in collections."""

    def get(self, collection: str, document_id: str) -> dict[str, object] | None:
        """Return a document, or None when it does not exist."""

    def set(self, collection: str, document_id: str, data: dict[str, object]) -> None:
        """Create or replace a document under a known id."""

    def add(self, collection: str, data: dict[str, object]) -> str:
        """Create a document with a generated id and return the id."""
