"""Makeup removal via an external image model."""

import base64
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from derender.clock import now_ms
from derender.domain.errors import (
    ConfigurationError,
    DerenderError,
    UpstreamError,
    ValidationError,
)
from derender.domain.generations import (
    GenerationOutcome,
    GenerationRecord,
    InlineImage,
    ModelResponse,
    ResponsePart,
)
from derender.services.best_effort import attempt_best_effort
from derender.services.stores import DocumentStore, ObjectStore

logger = logging.getLogger(__name__)

GENERATIONS_COLLECTION = "generations"
DEFAULT_MIME_TYPE = "image/jpeg"

DERENDER_SYSTEM_INSTRUCTION = (
    "You are an expert digital retoucher and dermatologist. Your goal is to "
    "reveal the subject's natural, healthy skin by digitally removing all "
    "cosmetic makeup.\n\n"
    "1. Remove all foundation, blush, eyeshadow, eyeliner, lipstick, and contour.\n"
    "2. Reveal the underlying skin tone consistent with the neck/hairline.\n"
    "3. The resulting skin should appear **naturally clear, hydrated, and "
    "healthy**. It should NOT look airbrushed, plastic, or blurry.\n"
    "4. RETAIN natural skin micro-texture (pores) to ensure realism, but DO NOT "
    "GENERATE blemishes, acne, redness, or blotchiness that is not present.\n"
    "5. Strictly preserve the original facial identity, bone structure, and "
    "expression."
)

DERENDER_PROMPT = (
    "Remove all makeup to reveal a clean, fresh-faced, natural look. "
    "The skin should look healthy and clear with realistic micro-texture, "
    "but free of blemishes. Do not smooth the skin excessively."
)


class ImageModelClient(Protocol):
    """Interface for a generative model that edits images."""

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        system_instruction: str,
        prompt: str,
        image_data: str,
        mime_type: str,
    ) -> ModelResponse:
        """Return the parts of the first response candidate."""

    async def close(self) -> None:
        """Release client resources."""


def find_inline_image(parts: list[ResponsePart]) -> InlineImage | None:
    """Return the first inline image part in encounter order."""
    return next(
        (part.inline_image for part in parts if part.inline_image is not None),
        None,
    )


@dataclass
class GenerationService:
    """Runs the model and records the before/after pair."""

    client: ImageModelClient | None
    object_store: ObjectStore
    document_store: DocumentStore
    model: str
    credential_name: str = "GOOGLE_API_KEY"
    clock: Callable[[], int] = now_ms

    async def derender(
        self, image: str | None, mime_type: str | None = None
    ) -> GenerationOutcome:
        """Remove makeup from a base64-encoded image."""
        if not image:
            raise ValidationError("Image data is required")
        if self.client is None:
            raise ConfigurationError(f"{self.credential_name} is not set")
        resolved_mime_type = mime_type or DEFAULT_MIME_TYPE

        try:
            response = await self.client.generate(
                model=self.model,
                system_instruction=DERENDER_SYSTEM_INSTRUCTION,
                prompt=DERENDER_PROMPT,
                image_data=image,
                mime_type=resolved_mime_type,
            )
        except DerenderError:
            raise
        except Exception as exc:
            raise UpstreamError(str(exc)) from exc

        output = find_inline_image(response.parts)
        if output is None:
            text = response.text
            if text:
                logger.info("Model returned text instead of image: %s", text)
            return GenerationOutcome(image=None, raw_text=text)

        timestamp = self.clock()
        attempt_best_effort(
            lambda: self._persist(timestamp, image, resolved_mime_type, output),
            description="generation persistence",
        )
        return GenerationOutcome(image=output)

    def _persist(
        self,
        timestamp: int,
        original_data: str,
        original_mime_type: str,
        processed: InlineImage,
    ) -> None:
        folder = f"generations/{timestamp}"
        original_url = self.object_store.upload(
            f"{folder}/original.jpg",
            base64.b64decode(original_data),
            original_mime_type,
        )
        processed_url = self.object_store.upload(
            f"{folder}/processed.jpg",
            base64.b64decode(processed.data),
            processed.mime_type,
        )
        record = GenerationRecord(
            timestamp=timestamp,
            original_image_url=original_url,
            original_mime_type=original_mime_type,
            processed_image_url=processed_url,
            processed_mime_type=processed.mime_type,
            model=self.model,
            prompt=DERENDER_PROMPT,
        )
        self.document_store.add(GENERATIONS_COLLECTION, record.to_document())
        logger.info("Stored generation %s", timestamp)
