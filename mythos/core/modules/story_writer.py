"""
Module for streaming long-form stories from Gemini 3 Pro.

The prompt is built from the wizard answers (plus lore and, for
continuations, the existing text). Thinking is enabled with a large budget
so the model plans structure before writing. Text arrives incrementally.
"""

import logging
from typing import AsyncIterator, Optional

import httpx
from google import genai
from google.genai.errors import APIError
from google.genai.types import GenerateContentConfig, ThinkingConfig

from mythos.config import TEXT_CONSTANTS, get_genai_client, get_story_model
from ..errors import GenerationError
from ..prompts import build_story_prompt
from ..types import StoryConfig

logger = logging.getLogger(__name__)


class StoryWriter:
    """Stream a story for a StoryConfig. No retries: failures surface to the caller."""

    def __init__(self, client: Optional[genai.Client] = None):
        self.client = client or get_genai_client()
        self.model = get_story_model()

    def _build_config(self) -> GenerateContentConfig:
        return GenerateContentConfig(
            thinking_config=ThinkingConfig(thinking_budget=TEXT_CONSTANTS["thinking_budget"])
        )

    async def stream(self, config: StoryConfig) -> AsyncIterator[str]:
        """
        Yield new text chunks as the model produces them.

        Raises:
            GenerationError: If the request or the stream fails
        """
        prompt = build_story_prompt(config)

        try:
            response_stream = await self.client.aio.models.generate_content_stream(
                model=self.model,
                contents=prompt,
                config=self._build_config(),
            )
            async for chunk in response_stream:
                if chunk.text:
                    yield chunk.text
        except (APIError, httpx.HTTPError) as e:
            logger.error("Story generation failed: %s", e, exc_info=True)
            raise GenerationError(f"Story generation failed: {e}") from e

    async def write(self, config: StoryConfig) -> str:
        """Collect the full story text."""
        parts = []
        async for chunk in self.stream(config):
            parts.append(chunk)
        return "".join(parts)
