import logging
from typing import Any, Optional

from google import genai
from google.genai import types

from frame_core.errors import NoImageProducedError
from frame_core.interfaces.image_model import IImageModel
from frame_core.models.image_payload import ImagePayload

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"


def first_inline_image(response: Any) -> Optional[ImagePayload]:
    """Returns the first inline image part of the first candidate, if any."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    for part in getattr(content, "parts", None) or []:
        inline_data = getattr(part, "inline_data", None)
        if inline_data and inline_data.data:
            return ImagePayload(data=inline_data.data, mime_type=inline_data.mime_type or "image/png")
    return None


class GeminiImageAdapter(IImageModel):
    """
    Image synthesis and instruction-based editing on a Gemini image model.
    One generate_content call per method; no retrying here.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_IMAGE_MODEL,
        client: Optional[genai.Client] = None
    ):
        if client is None and not api_key:
            raise ValueError("API key required. Set GEMINI_API_KEY env var or pass api_key")
        self._client = client or genai.Client(api_key=api_key)
        self._model = model

    async def synthesize(self, prompt: str, aspect_ratio: str = "16:9") -> ImagePayload:
        logger.info("Requesting %s image from %s", aspect_ratio, self._model)
        response = await self._client.aio.models.generate_content(
            model=self._model,
            contents=[types.Part.from_text(text=prompt)],
            config=types.GenerateContentConfig(
                image_config=types.ImageConfig(aspect_ratio=aspect_ratio)
            )
        )

        image = first_inline_image(response)
        if image is None:
            raise NoImageProducedError("No image generated")
        return image

    async def edit(self, image: ImagePayload, instruction: str) -> ImagePayload:
        logger.info("Requesting image edit from %s", self._model)
        response = await self._client.aio.models.generate_content(
            model=self._model,
            contents=[
                types.Part.from_bytes(data=image.data, mime_type=image.mime_type),
                types.Part.from_text(text=instruction),
            ]
        )

        edited = first_inline_image(response)
        if edited is None:
            raise NoImageProducedError("No edited image generated")
        return edited
