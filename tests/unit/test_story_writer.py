"""Unit tests for streaming story generation."""

import httpx
import pytest
from google.genai.errors import ServerError

from mythos.core.errors import GenerationError
from mythos.core.modules import StoryWriter
from mythos.core.types import StoryConfig


def _server_error():
    return ServerError(code=503, response_json={"error": {"code": 503, "message": "busy"}})


class TestStoryWriter:
    """Tests for StoryWriter."""

    @pytest.mark.asyncio
    async def test_streams_chunks(self, mock_genai_client, fake_stream):
        mock_genai_client.aio.models.generate_content_stream.return_value = fake_stream(
            ["# Title\n", "", "Once upon"]
        )
        writer = StoryWriter(client=mock_genai_client)

        chunks = [c async for c in writer.stream(StoryConfig(core_premise="p"))]

        assert chunks == ["# Title\n", "Once upon"]

    @pytest.mark.asyncio
    async def test_uses_pro_model_with_thinking(self, mock_genai_client, fake_stream):
        mock_genai_client.aio.models.generate_content_stream.return_value = fake_stream(["x"])

        await StoryWriter(client=mock_genai_client).write(StoryConfig(core_premise="a heist"))

        kwargs = mock_genai_client.aio.models.generate_content_stream.call_args.kwargs
        assert kwargs["model"] == "gemini-3-pro-preview"
        assert kwargs["config"].thinking_config.thinking_budget == 32768
        assert "- Core Premise: a heist" in kwargs["contents"]

    @pytest.mark.asyncio
    async def test_write_joins_chunks(self, mock_genai_client, fake_stream):
        mock_genai_client.aio.models.generate_content_stream.return_value = fake_stream(["a", "b", "c"])
        assert await StoryWriter(client=mock_genai_client).write(StoryConfig()) == "abc"

    @pytest.mark.asyncio
    async def test_request_failure(self, mock_genai_client):
        mock_genai_client.aio.models.generate_content_stream.side_effect = _server_error()

        with pytest.raises(GenerationError):
            await StoryWriter(client=mock_genai_client).write(StoryConfig())

    @pytest.mark.asyncio
    async def test_mid_stream_failure_after_chunks(self, mock_genai_client, fake_stream):
        mock_genai_client.aio.models.generate_content_stream.return_value = fake_stream(
            ["partial"], error=_server_error()
        )
        received = []

        with pytest.raises(GenerationError):
            async for chunk in StoryWriter(client=mock_genai_client).stream(StoryConfig()):
                received.append(chunk)

        assert received == ["partial"]

    @pytest.mark.asyncio
    async def test_read_timeout_mid_stream(self, mock_genai_client, fake_stream):
        mock_genai_client.aio.models.generate_content_stream.return_value = fake_stream(
            ["partial"], error=httpx.ReadTimeout("slow")
        )

        with pytest.raises(GenerationError):
            await StoryWriter(client=mock_genai_client).write(StoryConfig())

    @pytest.mark.asyncio
    async def test_connect_error(self, mock_genai_client):
        mock_genai_client.aio.models.generate_content_stream.side_effect = httpx.ConnectError("refused")

        with pytest.raises(GenerationError):
            await StoryWriter(client=mock_genai_client).write(StoryConfig())
