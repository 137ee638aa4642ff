from .store import JsonFileStore, KeyValueStore, MemoryStore
from .repository import (
    ChatSessionRepository,
    ImageHistoryRepository,
    StoryHistoryRepository,
    VersionedCollection,
)

__all__ = [
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "ChatSessionRepository",
    "ImageHistoryRepository",
    "StoryHistoryRepository",
    "VersionedCollection",
]
