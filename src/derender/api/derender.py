"""Makeup removal endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from derender.api.models import DerenderRequest  # noqa: TC001

if TYPE_CHECKING:
    from derender.containers import AppContainer

router = APIRouter(prefix="/api", tags=["derender"])

NO_IMAGE_ERROR = "No image generated by model"


@router.post("/derender")
async def derender(body: DerenderRequest, request: Request) -> dict[str, object]:
    """Return the image with makeup removed."""
    container: AppContainer = request.app.state.container
    outcome = await container.generation_service.derender(body.image, body.mime_type)
    if outcome.image is None:
        payload: dict[str, object] = {"error": NO_IMAGE_ERROR}
        if outcome.raw_text is not None:
            payload["rawText"] = outcome.raw_text
        return payload
    return {"image": outcome.image.data, "mimeType": outcome.image.mime_type}
