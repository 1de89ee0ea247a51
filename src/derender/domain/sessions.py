"""Domain models for storage-backed sessions."""

from dataclasses import dataclass, field

DEFAULT_MIME_TYPE = "image/jpeg"
SYNCED_PROMPT = "Synced from storage - original prompt not available"
ACTIVE_STATUS = "active"


@dataclass(frozen=True)
class FoundationTryon:
    """Auxiliary try-on image stored alongside a session."""

    sku: str
    timestamp: int
    image_url: str

    def to_document(self) -> dict[str, object]:
        return {
            "sku": self.sku,
            "timestamp": self.timestamp,
            "imageUrl": self.image_url,
        }


@dataclass(frozen=True)
class SessionRecord:
    """Session document backfilled from object storage."""

    created_at: int
    original_image_url: str | None
    derendered_image_url: str | None
    model: str
    synced_at: int
    foundation_tryons: list[FoundationTryon] = field(default_factory=list)
    original_mime_type: str = DEFAULT_MIME_TYPE
    derendered_mime_type: str = DEFAULT_MIME_TYPE
    derender_prompt: str = SYNCED_PROMPT
    status: str = ACTIVE_STATUS
    completed_at: int | None = None
    synced_from_storage: bool = True

    def to_document(self) -> dict[str, object]:
        """Serialize using the document store field names."""
        return {
            "createdAt": self.created_at,
            "originalImageUrl": self.original_image_url,
            "originalMimeType": self.original_mime_type,
            "derenderedImageUrl": self.derendered_image_url,
            "derenderedMimeType": self.derendered_mime_type,
            "model": self.model,
            "derenderPrompt": self.derender_prompt,
            "foundationTryons": [
                tryon.to_document() for tryon in self.foundation_tryons
            ],
            "status": self.status,
            "completedAt": self.completed_at,
            "syncedFromStorage": self.synced_from_storage,
            "syncedAt": self.synced_at,
        }


@dataclass(frozen=True)
class SyncDetail:
    """Per-session outcome of a sweep."""

    session_id: str
    status: str
    error: str | None = None


@dataclass
class SyncReport:
    """Tally produced by a write-mode sweep."""

    total_folders: int
    already_synced: int = 0
    newly_created: int = 0
    failed: int = 0
    details: list[SyncDetail] = field(default_factory=list)


@dataclass(frozen=True)
class SyncStatusReport:
    """Dry-run comparison of storage folders against the document store."""

    total_folders: int
    in_store: int
    missing: list[str]

    @property
    def missing_count(self) -> int:
        return len(self.missing)

    @property
    def message(self) -> str:
        return (
            f"{self.missing_count} sessions in Storage are missing from Firestore. "
            "Use POST to sync them."
        )
