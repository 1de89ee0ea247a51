"""Request bodies accepted by the API."""

from pydantic import BaseModel, ConfigDict, Field


class DerenderRequest(BaseModel):
    """Image to process, base64-encoded."""

    model_config = ConfigDict(populate_by_name=True)

    image: str | None = None
    mime_type: str | None = Field(default=None, alias="mimeType")
