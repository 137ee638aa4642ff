"""Studio controller: the single owner of application state.

Holds which view is active, the story being read or generated, and the
ephemeral infographic deck. Persisted collections are reached only through
their repositories; generation goes through the core modules, which are
created on first use so the API key is only required by features that call
the model.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import AsyncIterator, Optional

from mythos.core.batching import settle_all
from mythos.core.compositing import DEFAULT_LEVEL, apply_filters, parse_data_uri, to_data_uri
from mythos.core.errors import GenerationError
from mythos.core.exporters import export_docx, export_infographic_deck, export_markdown, export_story_pdf
from mythos.core.layout import LayoutPreview, build_preview
from mythos.core.modules import ChatAssistant, ImageStudio, InfographicPlanner, StoryWriter, TextEditor
from mythos.core.pagination import paginate
from mythos.core.types import (
    ChatMessage,
    ChatReply,
    ChatSession,
    HistoryItem,
    ImageHistoryItem,
    InfographicItem,
    PageData,
    PublishingConfig,
    StoryConfig,
    TileStatus,
    new_id,
)

from ..database import ChatSessionRepository, ImageHistoryRepository, StoryHistoryRepository
from ..logging import studio_logger

logger = logging.getLogger(__name__)


class AppView(str, Enum):
    DASHBOARD = "DASHBOARD"
    WIZARD = "WIZARD"
    STORY_RESULT = "STORY_RESULT"
    IMAGE_STUDIO = "IMAGE_STUDIO"
    INFOGRAPHICS = "INFOGRAPHICS"
    PUBLISHER = "PUBLISHER"
    HISTORY = "HISTORY"
    CHAT = "CHAT"


@dataclass
class StudioState:
    """Everything the shell needs to render the current screen."""

    view: AppView = AppView.DASHBOARD
    active_story_id: Optional[str] = None
    generated_story: Optional[str] = None
    is_generating: bool = False
    infographic_items: list[InfographicItem] = field(default_factory=list)
    infographic_style: str = "Swiss"
    include_overlay: bool = True


class StoryNotFoundError(KeyError):
    """No story with the requested id."""


class SessionNotFoundError(KeyError):
    """No chat session with the requested id."""


def _check_attachment(attachment: str) -> None:
    try:
        data, _ = parse_data_uri(attachment)
    except ValueError as e:  # binascii.Error
        raise ValueError(f"Attachment is not valid base64 image data: {e}") from e
    if not data:
        raise ValueError("Attachment is empty")


class StudioController:
    """Owns StudioState and routes every user action to the right collaborator."""

    def __init__(
        self,
        stories: StoryHistoryRepository,
        images: ImageHistoryRepository,
        chats: ChatSessionRepository,
        story_writer: Optional[StoryWriter] = None,
        image_studio: Optional[ImageStudio] = None,
        planner: Optional[InfographicPlanner] = None,
        assistant: Optional[ChatAssistant] = None,
        editor: Optional[TextEditor] = None,
    ):
        self.state = StudioState()
        self.stories = stories
        self.images = images
        self.chats = chats
        self._story_writer = story_writer
        self._image_studio = image_studio
        self._planner = planner
        self._assistant = assistant
        self._editor = editor

    # -------------------------------------------------------------------------
    # Lazily created collaborators
    # -------------------------------------------------------------------------

    @property
    def story_writer(self) -> StoryWriter:
        if self._story_writer is None:
            self._story_writer = StoryWriter()
        return self._story_writer

    @property
    def image_studio(self) -> ImageStudio:
        if self._image_studio is None:
            self._image_studio = ImageStudio()
        return self._image_studio

    @property
    def planner(self) -> InfographicPlanner:
        if self._planner is None:
            self._planner = InfographicPlanner(image_studio=self.image_studio)
        return self._planner

    @property
    def assistant(self) -> ChatAssistant:
        if self._assistant is None:
            self._assistant = ChatAssistant(image_studio=self.image_studio)
        return self._assistant

    @property
    def editor(self) -> TextEditor:
        if self._editor is None:
            from mythos.config import get_editor_lm

            self._editor = TextEditor(lm=get_editor_lm())
        return self._editor

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def navigate(self, view: AppView) -> StudioState:
        self.state.view = view
        return self.state

    def select_story(self, story_id: str) -> HistoryItem:
        story = self.get_story(story_id)
        self.state.active_story_id = story.id
        self.state.generated_story = story.content
        self.state.view = AppView.STORY_RESULT
        return story

    def reset(self) -> StudioState:
        self.state.generated_story = None
        self.state.active_story_id = None
        self.state.view = AppView.DASHBOARD
        return self.state

    # -------------------------------------------------------------------------
    # Stories
    # -------------------------------------------------------------------------

    def list_stories(self) -> list[HistoryItem]:
        return self.stories.list()

    def get_story(self, story_id: str) -> HistoryItem:
        story = self.stories.get(story_id)
        if story is None:
            raise StoryNotFoundError(story_id)
        return story

    def delete_story(self, story_id: str) -> None:
        if not self.stories.delete(story_id):
            raise StoryNotFoundError(story_id)
        if self.state.active_story_id == story_id:
            self.reset()

    def story_pages(self, story_id: str) -> list[PageData]:
        return paginate(self.get_story(story_id).content)

    def update_story_content(self, story_id: str, content: str) -> HistoryItem:
        story = self.stories.update_content(story_id, content)
        if story is None:
            raise StoryNotFoundError(story_id)
        if self.state.active_story_id == story_id:
            self.state.generated_story = story.content
        return story

    async def generate_story(self, config: StoryConfig) -> AsyncIterator[str]:
        """
        Stream a story, yielding the full text so far after every chunk.

        The finished story is saved to history. Continuing the active story
        updates it in place; anything else becomes a new entry.

        Raises:
            GenerationError: The model call failed; the view returns to the dashboard
        """
        job_id = new_id("story-")
        starting_text = f"{config.existing_content}\n\n" if config.is_continuation else ""
        continuing_id = self.state.active_story_id if config.is_continuation else None

        self.state.is_generating = True
        self.state.generated_story = starting_text
        self.state.view = AppView.STORY_RESULT
        studio_logger.generation_started(job_id, "story")
        start = time.monotonic()

        full_text = starting_text
        try:
            async for chunk in self.story_writer.stream(config):
                full_text += chunk
                self.state.generated_story = full_text
                yield full_text
        except GenerationError as e:
            studio_logger.generation_failed(job_id, e, stage="streaming")
            self.state.view = AppView.DASHBOARD
            raise
        finally:
            self.state.is_generating = False

        if not full_text:
            return

        if continuing_id and self.stories.get(continuing_id):
            item = self.stories.update_content(continuing_id, full_text)
        else:
            item = self.stories.add(HistoryItem.from_content(full_text, config))
        self.state.active_story_id = item.id
        studio_logger.generation_completed(job_id, time.monotonic() - start)

    def rewrite(self, text: str, instruction: str) -> str:
        return self.editor.rewrite(text, instruction)

    def quick_analyze(self, text: str) -> str:
        return self.editor.quick_analyze(text)

    # -------------------------------------------------------------------------
    # Images
    # -------------------------------------------------------------------------

    async def create_images(self, prompt: str, aspect_ratio: str = "1:1", count: int = 4) -> list[ImageHistoryItem]:
        variations = await self.image_studio.generate_variations(prompt, aspect_ratio, count)
        return [self.images.add(prompt, image, "create", aspect_ratio) for image in variations]

    async def edit_images(
        self, image: str, prompt: str, aspect_ratio: str = "1:1", count: int = 4
    ) -> list[ImageHistoryItem]:
        variations = await self.image_studio.edit_variations(image, prompt, aspect_ratio, count)
        return [self.images.add(prompt, result, "edit", aspect_ratio) for result in variations]

    def adjust_image(
        self,
        image: str,
        brightness: float = DEFAULT_LEVEL,
        contrast: float = DEFAULT_LEVEL,
        saturation: float = DEFAULT_LEVEL,
    ) -> str:
        """Bake filters into a data URI; defaults hand back the same URI."""
        if brightness == contrast == saturation == DEFAULT_LEVEL:
            return image
        data, _ = parse_data_uri(image)
        return to_data_uri(apply_filters(data, brightness, contrast, saturation), "image/png")

    # -------------------------------------------------------------------------
    # Infographics
    # -------------------------------------------------------------------------

    def _find_tile(self, tile_id: str) -> InfographicItem:
        for item in self.state.infographic_items:
            if item.id == tile_id:
                return item
        raise KeyError(tile_id)

    async def _render_tile(self, item: InfographicItem) -> InfographicItem:
        item.status = TileStatus.GENERATING
        try:
            item.image_data = await self.planner.render_tile(
                item, self.state.infographic_style, self.state.include_overlay
            )
        except Exception as e:
            logger.error("Tile %s failed: %s", item.id, e, exc_info=True)
            item.status = TileStatus.FAILED
            item.chart["error"] = str(e)
            return item

        item.status = TileStatus.DONE
        item.chart.pop("error", None)
        return item

    async def plan_infographic(
        self,
        text: str,
        style: str,
        aspect_ratio: str = "4:3",
        include_overlay: bool = True,
    ) -> list[InfographicItem]:
        """
        Structure the text into tiles, then render every tile concurrently.

        Raises:
            GenerationError / StructuredOutputError: Planning failed; no tiles are kept
        """
        job_id = new_id("deck-")
        studio_logger.generation_started(job_id, "infographic")
        self.state.infographic_items = []
        self.state.infographic_style = style
        self.state.include_overlay = include_overlay

        try:
            items = await self.planner.structure(text, style, aspect_ratio)
        except GenerationError as e:
            studio_logger.generation_failed(job_id, e, stage="structure")
            raise

        for item in items:
            item.chart["overlay"] = include_overlay
        self.state.infographic_items = items

        await settle_all(self._render_tile(item) for item in items)
        failed = sum(1 for item in items if item.status == TileStatus.FAILED)
        if failed:
            studio_logger.batch_partial_failure(job_id, len(items) - failed, failed)
        studio_logger.stage_completed(job_id, "render")
        return items

    async def regenerate_tile(self, tile_id: str) -> InfographicItem:
        return await self._render_tile(self._find_tile(tile_id))

    def export_deck(self) -> bytes:
        items = self.state.infographic_items
        aspect_ratio = items[0].aspect_ratio if items else "4:3"
        return export_infographic_deck(items, aspect_ratio)

    # -------------------------------------------------------------------------
    # Chat
    # -------------------------------------------------------------------------

    async def send_chat(
        self,
        text: str,
        session_id: Optional[str] = None,
        attachments: Optional[list[str]] = None,
        model: Optional[str] = None,
    ) -> tuple[ChatSession, ChatReply]:
        """
        Send a message, starting a new session when no id is given.

        Raises:
            SessionNotFoundError: session_id names no saved session
            ValueError: An attachment is not decodable image data; nothing is saved
        """
        user_message = ChatMessage(role="user", text=text, attachments=list(attachments or []))
        for attachment in user_message.attachments:
            _check_attachment(attachment)

        if session_id is None:
            history: list[ChatMessage] = []
            session = self.chats.create(user_message)
        else:
            session = self.chats.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            history = list(session.messages)
            self.chats.append(session.id, user_message)
            self.chats.set_last_session_id(session.id)

        reply = await self.assistant.send(history, text, model, user_message.attachments)
        model_message = ChatMessage(role="model", text=reply.text, generated_image=reply.generated_image)
        session = self.chats.append(session.id, model_message)
        return session, reply

    async def regenerate_chat(self, session_id: str, model: Optional[str] = None) -> tuple[ChatSession, ChatReply]:
        """Ask again for the reply to the last user message, replacing the old reply."""
        session = self.chats.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)

        messages = session.messages
        last_user = next((i for i in range(len(messages) - 1, -1, -1) if messages[i].role == "user"), None)
        if last_user is None:
            raise ValueError(f"Chat session {session_id} has no message to answer")

        prompt = messages[last_user]
        reply = await self.assistant.send(list(messages[:last_user]), prompt.text, model, prompt.attachments)
        model_message = ChatMessage(role="model", text=reply.text, generated_image=reply.generated_image)
        session = self.chats.replace_last_reply(session_id, model_message)
        self.chats.set_last_session_id(session_id)
        return session, reply

    def delete_chat(self, session_id: str) -> None:
        if not self.chats.delete(session_id):
            raise SessionNotFoundError(session_id)

    # -------------------------------------------------------------------------
    # Publishing
    # -------------------------------------------------------------------------

    def get_publishing(self, story_id: str) -> PublishingConfig:
        """Saved settings, or defaults seeded from the story."""
        story = self.get_story(story_id)
        if story.publishing_config:
            return story.publishing_config
        config = PublishingConfig()
        config.metadata.author = "Unknown Author"
        if story.excerpt:
            config.back_cover_blurb = story.excerpt
        return config

    def update_publishing(self, story_id: str, config: PublishingConfig) -> HistoryItem:
        story = self.stories.update_publishing(story_id, config)
        if story is None:
            raise StoryNotFoundError(story_id)
        return story

    def preview(self, story_id: str, zoom: float = 1.0) -> LayoutPreview:
        story = self.get_story(story_id)
        return build_preview(story, self.get_publishing(story_id), zoom)

    async def generate_covers(
        self,
        story_id: str,
        concept: Optional[str] = None,
        style: Optional[str] = None,
        count: int = 4,
    ) -> list[str]:
        story = self.get_story(story_id)
        config = self.get_publishing(story_id)
        concept = concept or story.config.core_premise or f"A book about {story.title}"
        return await self.image_studio.generate_cover(
            story.title, concept, style or config.cover_style, config.cover_resolution, count
        )

    def set_cover(self, story_id: str, image: str) -> HistoryItem:
        config = self.get_publishing(story_id)
        config.cover_image = image
        return self.update_publishing(story_id, config)

    def export(self, story_id: str, fmt: str) -> bytes:
        story = self.get_story(story_id)
        config = self.get_publishing(story_id)
        if fmt == "docx":
            return export_docx(story, config)
        if fmt == "pdf":
            return export_story_pdf(story, config)
        if fmt == "md":
            return export_markdown(story)
        raise ValueError(f"Unsupported export format: {fmt}")

