"""
Module for turning free text into an infographic deck.

Two stages:
1. Structure: Gemini 3 Pro returns schema-constrained JSON with 4-8 tiles
   (title, summary, visual prompt).
2. Render: each tile's visual prompt becomes an image, optionally with the
   title and summary composited over a gradient scrim.
"""

import json
import logging
from typing import Optional

from google import genai
from google.genai import types
from google.genai.errors import APIError

from mythos.config import TEXT_CONSTANTS, get_genai_client, get_story_model
from ..compositing import overlay_text, parse_data_uri, to_data_uri
from ..errors import GenerationError, StructuredOutputError
from ..prompts import build_infographic_prompt, build_tile_image_prompt
from ..types import InfographicItem, TileStatus, now_ms
from .image_studio import ImageStudio

logger = logging.getLogger(__name__)

TILES_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "tiles": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "title": types.Schema(type=types.Type.STRING),
                    "summary": types.Schema(type=types.Type.STRING),
                    "visualPrompt": types.Schema(type=types.Type.STRING),
                },
                required=["title", "summary", "visualPrompt"],
            ),
        )
    },
)


def parse_tiles(json_text: Optional[str], aspect_ratio: str = "4:3", style: str = "") -> list[InfographicItem]:
    """
    Parse the structured response into pending tiles.

    Raises:
        StructuredOutputError: Empty, non-JSON or schema-violating output
    """
    if not json_text:
        raise StructuredOutputError("No JSON response")

    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise StructuredOutputError(f"Model returned invalid JSON: {e}") from e

    tiles = data.get("tiles") if isinstance(data, dict) else None
    if not isinstance(tiles, list):
        raise StructuredOutputError("Response has no 'tiles' array")

    stamp = now_ms()
    items = []
    for i, tile in enumerate(tiles):
        try:
            items.append(
                InfographicItem(
                    id=f"info-{stamp}-{i}",
                    title=tile["title"],
                    summary=tile["summary"],
                    visual_prompt=tile["visualPrompt"],
                    status=TileStatus.PENDING,
                    aspect_ratio=aspect_ratio,
                    chart={"style": style},
                )
            )
        except (KeyError, TypeError) as e:
            raise StructuredOutputError(f"Tile {i} is missing a field: {e}") from e
    return items


class InfographicPlanner:
    """Plan and render infographic tiles."""

    def __init__(self, client: Optional[genai.Client] = None, image_studio: Optional[ImageStudio] = None):
        self.client = client or get_genai_client()
        self.model = get_story_model()
        self.image_studio = image_studio or ImageStudio(client=self.client)

    async def structure(self, text: str, style: str, aspect_ratio: str = "4:3") -> list[InfographicItem]:
        """
        Ask the model to break the text into tiles.

        Raises:
            GenerationError: The API call failed
            StructuredOutputError: The response could not be parsed
        """
        prompt = build_infographic_prompt(text, style, TEXT_CONSTANTS["infographic_input_limit"])

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=TILES_SCHEMA,
                ),
            )
        except APIError as e:
            logger.error("Failed to structure infographic: %s", e)
            raise GenerationError(f"Failed to structure infographic: {e}") from e

        try:
            items = parse_tiles(response.text, aspect_ratio, style)
        except StructuredOutputError:
            logger.exception("Infographic response was not valid tile JSON")
            raise

        logger.info("Planned %d infographic tiles", len(items))
        return items

    async def render_tile(self, item: InfographicItem, style: str, include_overlay: bool = True) -> str:
        """Generate the tile image and return it as a data URI."""
        prompt = build_tile_image_prompt(item.visual_prompt, style)
        image = await self.image_studio.generate(prompt, item.aspect_ratio)

        if not include_overlay:
            return image

        data, _ = parse_data_uri(image)
        composed = overlay_text(data, item.title, item.summary, item.aspect_ratio)
        return to_data_uri(composed, "image/png")
