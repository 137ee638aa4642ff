"""
Module for the Mythos chat assistant.

Multimodal chat with a single tool, generate_image. When the model calls
the tool, the image is generated inline and the call is noted in the reply
text. Attachments switch the turn to Gemini 3 Pro with thinking enabled.
"""

import logging
from typing import Optional

import httpx
from google import genai
from google.genai import types
from google.genai.errors import APIError

from mythos.config import TEXT_CONSTANTS, get_fast_model, get_genai_client, get_story_model
from ..compositing import parse_data_uri
from ..errors import GenerationError
from ..prompts import CHAT_SYSTEM_INSTRUCTION
from ..types import ChatMessage, ChatReply
from .image_studio import ImageStudio

logger = logging.getLogger(__name__)

CONNECTION_FAILURE_REPLY = "I'm having trouble connecting to the AI models right now. Please try again."

GENERATE_IMAGE_TOOL = types.FunctionDeclaration(
    name="generate_image",
    description=(
        "Generates an image based on a detailed text prompt. Call this function "
        "when the user asks to draw, create, or visualize something."
    ),
    parameters=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "prompt": types.Schema(
                type=types.Type.STRING,
                description="The detailed visual description of the image to generate.",
            ),
            "aspectRatio": types.Schema(
                type=types.Type.STRING,
                description="The aspect ratio of the image. Options: '1:1', '16:9', '9:16', '4:3', '3:4'. Defaults to '1:1'.",
            ),
        },
        required=["prompt"],
    ),
)


def _to_content(message: ChatMessage) -> types.Content:
    parts = [types.Part.from_text(text=message.text)]
    for attachment in message.attachments:
        data, mime_type = parse_data_uri(attachment)
        parts.append(types.Part.from_bytes(data=data, mime_type=mime_type))
    return types.Content(role=message.role, parts=parts)


class ChatAssistant:
    """One chat turn at a time; the caller owns the session history."""

    def __init__(self, client: Optional[genai.Client] = None, image_studio: Optional[ImageStudio] = None):
        self.client = client or get_genai_client()
        self.image_studio = image_studio or ImageStudio(client=self.client)

    def _build_config(self, model: str) -> types.GenerateContentConfig:
        config = types.GenerateContentConfig(
            system_instruction=CHAT_SYSTEM_INSTRUCTION,
            tools=[types.Tool(function_declarations=[GENERATE_IMAGE_TOOL])],
        )
        if model == get_story_model():
            config.thinking_config = types.ThinkingConfig(
                thinking_budget=TEXT_CONSTANTS["thinking_budget"]
            )
        return config

    async def _run_tool(self, args: dict) -> tuple[str, Optional[str]]:
        prompt = args.get("prompt", "")
        note = f"\n\n_(Generating image: {prompt})_\n"
        try:
            image = await self.image_studio.generate(prompt, args.get("aspectRatio") or "1:1")
        except GenerationError as e:
            return note + f"\n_(Image generation failed: {e})_", None
        return note, image

    async def send(
        self,
        history: list[ChatMessage],
        message: str,
        model: Optional[str] = None,
        attachments: Optional[list[str]] = None,
    ) -> ChatReply:
        """
        Send a user message and return the model's reply.

        Never raises for API failures: a connection apology is returned instead.
        """
        attachments = attachments or []
        # Image understanding needs the Pro model
        effective_model = get_story_model() if attachments else (model or get_fast_model())

        contents = [_to_content(m) for m in history]
        contents.append(_to_content(ChatMessage(role="user", text=message, attachments=attachments)))

        try:
            result = await self.client.aio.models.generate_content(
                model=effective_model,
                contents=contents,
                config=self._build_config(effective_model),
            )
        except (APIError, httpx.HTTPError) as e:
            logger.error("Chat failed with model %s: %s", effective_model, e)
            return ChatReply(text=CONNECTION_FAILURE_REPLY)

        candidates = result.candidates or []
        parts = []
        if candidates and candidates[0].content and candidates[0].content.parts:
            parts = candidates[0].content.parts

        text = ""
        generated_image = None
        for part in parts:
            if part.text:
                text += part.text
            if part.function_call and part.function_call.name == "generate_image":
                note, image = await self._run_tool(dict(part.function_call.args or {}))
                text += note
                generated_image = image or generated_image

        return ChatReply(text=text, generated_image=generated_image)
