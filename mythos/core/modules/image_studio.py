"""
Module for generating and editing images with Nano Banana.

Single requests return a data URI. Variations fan the same request out N
times concurrently and keep whatever succeeds; the batch only fails when
every request fails.

Book covers use Nano Banana Pro at 2:3 with a selectable resolution.
"""

import logging
from typing import Optional

import httpx
from google import genai
from google.genai import types
from google.genai.errors import APIError

from mythos.config import (
    IMAGE_CONSTANTS,
    extract_image_from_response,
    get_cover_model,
    get_genai_client,
    get_image_config,
    get_image_model,
)
from ..batching import require_any
from ..compositing import parse_data_uri, to_data_uri
from ..errors import GenerationError
from ..prompts import build_cover_prompt, build_edit_prompt

logger = logging.getLogger(__name__)


class ImageStudio:
    """Generate, edit and vary images. Each failure is logged and raised as GenerationError."""

    def __init__(self, client: Optional[genai.Client] = None):
        self.client = client or get_genai_client()
        self.model = get_image_model()
        self.cover_model = get_cover_model()

    async def _request(self, model: str, contents, config: types.GenerateContentConfig) -> str:
        try:
            response = await self.client.aio.models.generate_content(
                model=model,
                contents=contents,
                config=config,
            )
            data, mime_type = extract_image_from_response(response)
        except (APIError, httpx.HTTPError) as e:
            logger.error("Image request to %s failed: %s", model, e)
            raise GenerationError(f"Image generation failed: {e}") from e
        except ValueError as e:
            logger.error("Image request to %s returned no image", model)
            raise GenerationError(str(e)) from e

        return to_data_uri(data, mime_type)

    async def generate(self, prompt: str, aspect_ratio: str = "1:1") -> str:
        """Generate one image from text. Returns a data URI."""
        return await self._request(self.model, prompt, get_image_config(aspect_ratio))

    async def edit(self, image: str, prompt: str, aspect_ratio: str = "1:1") -> str:
        """
        Edit an image according to an instruction.

        Args:
            image: Data URI or bare base64 of the source image
            prompt: What to change
            aspect_ratio: Output aspect ratio
        """
        data, mime_type = parse_data_uri(image)
        contents = [
            types.Part.from_bytes(data=data, mime_type=mime_type),
            build_edit_prompt(prompt),
        ]
        return await self._request(self.model, contents, get_image_config(aspect_ratio))

    async def generate_variations(
        self,
        prompt: str,
        aspect_ratio: str = "1:1",
        count: int = IMAGE_CONSTANTS["variation_count"],
    ) -> list[str]:
        """Generate `count` candidates concurrently; returns the ones that succeeded."""
        return await require_any(self.generate(prompt, aspect_ratio) for _ in range(count))

    async def edit_variations(
        self,
        image: str,
        prompt: str,
        aspect_ratio: str = "1:1",
        count: int = IMAGE_CONSTANTS["variation_count"],
    ) -> list[str]:
        return await require_any(self.edit(image, prompt, aspect_ratio) for _ in range(count))

    async def generate_cover(
        self,
        title: str,
        concept: str,
        style: str,
        resolution: str = "2K",
        count: int = IMAGE_CONSTANTS["variation_count"],
    ) -> list[str]:
        """Generate cover art candidates on the Pro image model at 2:3."""
        if resolution not in IMAGE_CONSTANTS["cover_resolutions"]:
            raise ValueError(f"Unsupported cover resolution: {resolution}")

        prompt = build_cover_prompt(title, concept, style)
        config = get_image_config(IMAGE_CONSTANTS["cover_aspect_ratio"], image_size=resolution)
        return await require_any(
            self._request(self.cover_model, prompt, config) for _ in range(count)
        )
