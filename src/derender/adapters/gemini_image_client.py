"""Gemini client for image editing."""

import base64
from dataclasses import dataclass

from google import genai
from google.genai import types

from derender.domain.generations import InlineImage, ModelResponse, ResponsePart
from derender.services.generation import ImageModelClient


@dataclass
class GeminiImageClient(ImageModelClient):
    """Image model client backed by the Gemini API."""

    client: genai.Client

    @classmethod
    def create(cls, api_key: str) -> "GeminiImageClient":
        """Create a Gemini image client."""
        return cls(client=genai.Client(api_key=api_key))

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        system_instruction: str,
        prompt: str,
        image_data: str,
        mime_type: str,
    ) -> ModelResponse:
        """Send the prompt and inline image in a single request."""
        image_part = types.Part.from_bytes(
            data=base64.b64decode(image_data), mime_type=mime_type
        )
        response = await self.client.aio.models.generate_content(
            model=model,
            contents=[prompt, image_part],
            config=types.GenerateContentConfig(system_instruction=system_instruction),
        )
        return _to_model_response(response)

    async def close(self) -> None:
        """Nothing to release; the SDK manages its own connections."""


def _to_model_response(response: types.GenerateContentResponse) -> ModelResponse:
    """Normalize the first candidate's parts."""
    if not response.candidates:
        return ModelResponse()
    content = response.candidates[0].content
    if content is None or not content.parts:
        return ModelResponse()
    parts: list[ResponsePart] = []
    for part in content.parts:
        inline = part.inline_data
        if inline is not None and inline.data:
            parts.append(
                ResponsePart(
                    inline_image=InlineImage(
                        data=_encode(inline.data),
                        mime_type=inline.mime_type or "image/png",
                    )
                )
            )
        elif part.text:
            parts.append(ResponsePart(text=part.text))
    return ModelResponse(parts=parts)


def _encode(data: bytes | str) -> str:
    if isinstance(data, bytes):
        return base64.b64encode(data).decode("utf-8")
    return data
