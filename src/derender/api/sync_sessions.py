"""Endpoints reconciling stored sessions with the document store."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from derender.domain.errors import AuthorizationError

if TYPE_CHECKING:
    from derender.containers import AppContainer
    from derender.domain.sessions import SyncReport, SyncStatusReport

router = APIRouter(prefix="/api", tags=["sync"])


async def require_sync_secret(request: Request) -> None:
    """Check the body secret when a sync secret is configured."""
    container: AppContainer = request.app.state.container
    expected = container.settings.sync_secret
    if not expected:
        return
    payload = await _read_json(request)
    secret = payload.get("secret") if isinstance(payload, dict) else None
    if secret != expected:
        raise AuthorizationError


@router.post("/sync-sessions", dependencies=[Depends(require_sync_secret)])
async def sync_sessions(request: Request) -> dict[str, object]:
    """Backfill session documents missing for storage folders."""
    container: AppContainer = request.app.state.container
    return _serialize_report(container.sync_service.sync())


@router.get("/sync-sessions")
async def sync_status(request: Request) -> dict[str, object]:
    """Dry run: list storage folders that have no session document."""
    container: AppContainer = request.app.state.container
    return _serialize_status(container.sync_service.status())


async def _read_json(request: Request) -> object:
    """Return the parsed body, treating an empty or invalid body as {}."""
    body = await request.body()
    if not body:
        return {}
    try:
        return json.loads(body)
    except ValueError:
        return {}


def _serialize_report(report: SyncReport) -> dict[str, object]:
    details: list[dict[str, object]] = []
    for detail in report.details:
        entry: dict[str, object] = {
            "sessionId": detail.session_id,
            "status": detail.status,
        }
        if detail.error is not None:
            entry["error"] = detail.error
        details.append(entry)
    return {
        "totalFolders": report.total_folders,
        "alreadySynced": report.already_synced,
        "newlyCreated": report.newly_created,
        "failed": report.failed,
        "details": details,
    }


def _serialize_status(report: SyncStatusReport) -> dict[str, object]:
    return {
        "totalFolders": report.total_folders,
        "inFirestore": report.in_store,
        "missingFromFirestore": report.missing_count,
        "missing": report.missing,
        "message": report.message,
    }
