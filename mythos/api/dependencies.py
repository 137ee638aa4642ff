"""FastAPI dependency injection for the store, repositories and studio controller."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from .config import STORE_DIR
from .database import (
    ChatSessionRepository,
    ImageHistoryRepository,
    JsonFileStore,
    KeyValueStore,
    StoryHistoryRepository,
)
from .services.studio import StudioController


@lru_cache
def get_store() -> KeyValueStore:
    """Process-wide JSON file store under the data directory."""
    return JsonFileStore(STORE_DIR)


@lru_cache
def get_controller() -> StudioController:
    """The single studio controller; it owns the in-memory state for the process."""
    store = get_store()
    return StudioController(
        stories=StoryHistoryRepository(store),
        images=ImageHistoryRepository(store),
        chats=ChatSessionRepository(store),
    )


# Type alias for cleaner route signatures
Controller = Annotated[StudioController, Depends(get_controller)]
