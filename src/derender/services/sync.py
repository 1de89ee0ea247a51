"""Reconciliation of stored session folders with the document store."""

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from derender.clock import now_ms
from derender.domain.sessions import (
    FoundationTryon,
    SessionRecord,
    SyncDetail,
    SyncReport,
    SyncStatusReport,
)
from derender.services.stores import DocumentStore, ObjectStore

logger = logging.getLogger(__name__)

SESSIONS_PREFIX = "sessions/"
SESSIONS_COLLECTION = "sessions"
UNKNOWN_SKU = "unknown"

_SESSION_PATH = re.compile(r"^sessions/([^/]+)/")
_FOUNDATION_FILE = re.compile(r"foundation-([^-]+)-(\d+)\.jpg")


def group_session_folders(paths: Iterable[str]) -> dict[str, list[str]]:
    """Group object paths by session id, keeping first-seen order."""
    folders: dict[str, list[str]] = {}
    for path in paths:
        match = _SESSION_PATH.match(path)
        if match:
            folders.setdefault(match.group(1), []).append(path)
    return folders


def parse_created_at(session_id: str, synced_at: int) -> int:
    """Use the id as the creation time when it is an epoch-ms number."""
    if session_id.isascii() and session_id.isdigit():
        return int(session_id)
    return synced_at


def parse_foundation_tryon(
    path: str, image_url: str, synced_at: int
) -> FoundationTryon:
    """Parse foundation-<sku>-<timestamp>.jpg, falling back to placeholders."""
    match = _FOUNDATION_FILE.search(_file_name(path))
    if match is None:
        return FoundationTryon(
            sku=UNKNOWN_SKU, timestamp=synced_at, image_url=image_url
        )
    return FoundationTryon(
        sku=match.group(1), timestamp=int(match.group(2)), image_url=image_url
    )


def build_session_record(
    session_id: str,
    paths: list[str],
    *,
    public_url: Callable[[str], str],
    model: str,
    synced_at: int,
) -> SessionRecord:
    """Synthesize a session record from the files found in its folder."""
    folder = f"{SESSIONS_PREFIX}{session_id}/"
    original_path = f"{folder}original.jpg"
    derendered_path = f"{folder}derendered.jpg"
    tryons = [
        parse_foundation_tryon(path, public_url(path), synced_at)
        for path in paths
        if _is_foundation_file(path)
    ]
    return SessionRecord(
        created_at=parse_created_at(session_id, synced_at),
        original_image_url=public_url(original_path)
        if original_path in paths
        else None,
        derendered_image_url=public_url(derendered_path)
        if derendered_path in paths
        else None,
        model=model,
        synced_at=synced_at,
        foundation_tryons=tryons,
    )


def _file_name(path: str) -> str:
    return path.rsplit("/", maxsplit=1)[-1]


def _is_foundation_file(path: str) -> bool:
    name = _file_name(path)
    return "foundation-" in name and name.endswith(".jpg")


@dataclass
class SessionSyncService:
    """Backfills session documents for folders that exist only in storage.

    The existence check and the write are not guarded against a concurrent
    sweep; two sweeps racing on one id may both write, last write wins.
    """

    object_store: ObjectStore
    document_store: DocumentStore
    model: str
    clock: Callable[[], int] = now_ms

    def sync(self) -> SyncReport:
        """Create records for every session folder lacking one."""
        folders = self._list_session_folders()
        logger.info("Found %s session folders in storage", len(folders))
        report = SyncReport(total_folders=len(folders))
        for session_id, paths in folders.items():
            try:
                status = self._sync_session(session_id, paths)
            except Exception as exc:
                report.failed += 1
                report.details.append(
                    SyncDetail(session_id=session_id, status="failed", error=str(exc))
                )
                logger.exception("Failed to sync session %s", session_id)
                continue
            if status == "created":
                report.newly_created += 1
            else:
                report.already_synced += 1
            report.details.append(SyncDetail(session_id=session_id, status=status))
        logger.info(
            "Sync complete: %s created, %s already existed, %s failed",
            report.newly_created,
            report.already_synced,
            report.failed,
        )
        return report

    def status(self) -> SyncStatusReport:
        """Report which session folders lack a document, without writing."""
        folders = self._list_session_folders()
        missing = [
            session_id
            for session_id in folders
            if self.document_store.get(SESSIONS_COLLECTION, session_id) is None
        ]
        return SyncStatusReport(
            total_folders=len(folders),
            in_store=len(folders) - len(missing),
            missing=missing,
        )

    def _list_session_folders(self) -> dict[str, list[str]]:
        return group_session_folders(self.object_store.list_objects(SESSIONS_PREFIX))

    def _sync_session(self, session_id: str, paths: list[str]) -> str:
        if self.document_store.get(SESSIONS_COLLECTION, session_id) is not None:
            return "already_exists"
        record = build_session_record(
            session_id,
            paths,
            public_url=self.object_store.public_url,
            model=self.model,
            synced_at=self.clock(),
        )
        self.document_store.set(SESSIONS_COLLECTION, session_id, record.to_document())
        logger.info("Created session document for %s", session_id)
        return "created"
