from .studio import (
    AppView,
    SessionNotFoundError,
    StoryNotFoundError,
    StudioController,
    StudioState,
)

__all__ = [
    "AppView",
    "SessionNotFoundError",
    "StoryNotFoundError",
    "StudioController",
    "StudioState",
]
