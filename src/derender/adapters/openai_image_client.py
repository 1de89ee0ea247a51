"""OpenAI Responses API client for image editing."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from derender.domain.generations import InlineImage, ModelResponse, ResponsePart
from derender.services.generation import ImageModelClient

_OUTPUT_MIME_TYPE = "image/png"


@dataclass
class OpenAIImageClient(ImageModelClient):
    """Image model client using the image_generation tool."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIImageClient":
        """Create an OpenAI image client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        system_instruction: str,
        prompt: str,
        image_data: str,
        mime_type: str,
    ) -> ModelResponse:
        """Call the Responses API and collect image and text output."""
        response = await self.client.responses.create(
            model=model,
            instructions=system_instruction,
            input=[
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": prompt},
                        {
                            "type": "input_image",
                            "image_url": f"data:{mime_type};base64,{image_data}",
                        },
                    ],
                }
            ],
            tools=[{"type": "image_generation"}],
        )
        parts: list[ResponsePart] = []
        for item in response.output:
            if item.type == "image_generation_call" and item.result:
                parts.append(
                    ResponsePart(
                        inline_image=InlineImage(
                            data=item.result, mime_type=_OUTPUT_MIME_TYPE
                        )
                    )
                )
            elif item.type == "message":
                for content in item.content:
                    if content.type == "output_text" and content.text:
                        parts.append(ResponsePart(text=content.text))
        return ModelResponse(parts=parts)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()
