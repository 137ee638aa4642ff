"""Core studio logic: types, prompts, pagination, layout, compositing and generation."""

from .types import (
    ChatMessage,
    ChatReply,
    ChatSession,
    HistoryItem,
    ImageHistoryItem,
    InfographicItem,
    LoreEntry,
    PageData,
    PublishingConfig,
    StoryConfig,
    TileStatus,
)
from .pagination import paginate, extract_story_title, extract_chapters
from .batching import require_any, settle_all

__all__ = [
    "ChatMessage",
    "ChatReply",
    "ChatSession",
    "HistoryItem",
    "ImageHistoryItem",
    "InfographicItem",
    "LoreEntry",
    "PageData",
    "PublishingConfig",
    "StoryConfig",
    "TileStatus",
    "paginate",
    "extract_story_title",
    "extract_chapters",
    "require_any",
    "settle_all",
]
