"""Models for image model responses and generation records."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class InlineImage:
    """Encoded image bytes returned inline by the model."""

    data: str
    mime_type: str


@dataclass(frozen=True)
class ResponsePart:
    """Single part of a model response: inline image or plain text."""

    inline_image: InlineImage | None = None
    text: str | None = None


@dataclass(frozen=True)
class ModelResponse:
    """Parts of the first candidate returned by the model."""

    parts: list[ResponsePart] = field(default_factory=list)

    @property
    def text(self) -> str | None:
        """Concatenated text parts, or None when there is no text."""
        chunks = [part.text for part in self.parts if part.text]
        return "".join(chunks) or None


@dataclass(frozen=True)
class GenerationOutcome:
    """Result of a derender request."""

    image: InlineImage | None
    raw_text: str | None = None


@dataclass(frozen=True)
class GenerationRecord:
    """Metadata persisted for each successful generation."""

    timestamp: int
    original_image_url: str
    original_mime_type: str
    processed_image_url: str
    processed_mime_type: str
    model: str
    prompt: str

    def to_document(self) -> dict[str, object]:
        return {
            "timestamp": self.timestamp,
            "originalImageUrl": self.original_image_url,
            "originalMimeType": self.original_mime_type,
            "processedImageUrl": self.processed_image_url,
            "processedMimeType": self.processed_mime_type,
            "model": self.model,
            "prompt": self.prompt,
        }
