"""Pytest fixtures for unit and API tests."""

import os
from io import BytesIO
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from PIL import Image

# Generation modules need a key to build a client; tests never reach the network
os.environ.setdefault("GOOGLE_API_KEY", "test-key-for-unit-tests")

from mythos.api.database import (  # noqa: E402
    ChatSessionRepository,
    ImageHistoryRepository,
    MemoryStore,
    StoryHistoryRepository,
)
from mythos.api.dependencies import get_controller  # noqa: E402
from mythos.api.main import app  # noqa: E402
from mythos.api.services.studio import StudioController  # noqa: E402
from mythos.core.compositing import to_data_uri  # noqa: E402
from mythos.core.types import HistoryItem, StoryConfig  # noqa: E402

SAMPLE_STORY = """# The Glass Orchard

## Chapter 1: Frost

Mara found the first glass apple on the morning the river froze.

---

By noon there were a hundred of them, ringing in the wind.

## Chapter 2: Thaw

The orchard began to sing when the ice broke.
"""


def make_png(width: int = 40, height: int = 30, color=(200, 80, 40, 255)) -> bytes:
    """Encode a solid-colour RGBA PNG."""
    buffer = BytesIO()
    Image.new("RGBA", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


def make_image_response(data: bytes, mime_type: str = "image/png") -> MagicMock:
    """A generate_content response carrying one inline image part."""
    part = MagicMock()
    part.inline_data.data = data
    part.inline_data.mime_type = mime_type
    response = MagicMock()
    response.candidates = [MagicMock()]
    response.candidates[0].content.parts = [part]
    return response


def make_text_response(text: str) -> MagicMock:
    response = MagicMock()
    response.text = text
    return response


class FakeStream:
    """Async iterator over text chunks, shaped like a streaming response."""

    def __init__(self, chunks, error=None):
        self._chunks = list(chunks)
        self._error = error

    def __aiter__(self):
        return self

    async def __anext__(self):
        if self._chunks:
            chunk = MagicMock()
            chunk.text = self._chunks.pop(0)
            return chunk
        if self._error is not None:
            error, self._error = self._error, None
            raise error
        raise StopAsyncIteration


@pytest.fixture
def png_bytes():
    return make_png()


@pytest.fixture
def png_data_uri(png_bytes):
    return to_data_uri(png_bytes, "image/png")


@pytest.fixture
def mock_genai_client():
    """A genai.Client stand-in whose async model calls are AsyncMocks."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock()
    client.aio.models.generate_content_stream = AsyncMock()
    return client


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def sample_story():
    return HistoryItem.from_content(SAMPLE_STORY, StoryConfig(core_premise="Glass fruit in winter"))


@pytest.fixture
def controller(memory_store):
    """Controller over an in-memory store with every generation module mocked."""
    return StudioController(
        stories=StoryHistoryRepository(memory_store),
        images=ImageHistoryRepository(memory_store),
        chats=ChatSessionRepository(memory_store),
        story_writer=MagicMock(),
        image_studio=MagicMock(),
        planner=MagicMock(),
        assistant=MagicMock(),
        editor=MagicMock(),
    )


@pytest.fixture
def client_with_controller(controller):
    """TestClient with the studio controller overridden."""
    app.dependency_overrides[get_controller] = lambda: controller

    with TestClient(app) as client:
        yield client, controller

    app.dependency_overrides.clear()


# Factories exposed as fixtures so test modules never import conftest directly


@pytest.fixture
def image_response():
    return make_image_response


@pytest.fixture
def text_response():
    return make_text_response


@pytest.fixture
def fake_stream():
    return FakeStream


@pytest.fixture
def png_factory():
    return make_png


@pytest.fixture
def sample_story_text():
    return SAMPLE_STORY
