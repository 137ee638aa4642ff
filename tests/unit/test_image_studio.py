"""Unit tests for image generation, editing and covers."""

import base64
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from google.genai.errors import ClientError, ServerError

from mythos.config import extract_image_from_response, get_image_config
from mythos.core.errors import GenerationError
from mythos.core.modules import ImageStudio


def _make_server_error(code: int = 503, message: str = "Model overloaded") -> ServerError:
    """Create a ServerError for testing."""
    return ServerError(
        code=code,
        response_json={"error": {"code": code, "message": message, "status": "UNAVAILABLE"}},
    )


def _make_client_error(code: int, message: str = "Error") -> ClientError:
    return ClientError(
        code=code,
        response_json={"error": {"code": code, "message": message}},
    )


class TestExtractImage:
    """Tests for pulling image bytes out of a response."""

    def test_returns_bytes_and_mime(self, image_response, png_bytes):
        assert extract_image_from_response(image_response(png_bytes, "image/jpeg")) == (png_bytes, "image/jpeg")

    def test_decodes_base64_strings(self, image_response, png_bytes):
        response = image_response(base64.b64encode(png_bytes).decode())
        assert extract_image_from_response(response)[0] == png_bytes

    def test_no_candidates_raises(self):
        response = MagicMock()
        response.candidates = []
        with pytest.raises(ValueError, match="No image generated"):
            extract_image_from_response(response)

    def test_text_only_parts_raise(self):
        part = MagicMock()
        part.inline_data = None
        response = MagicMock()
        response.candidates = [MagicMock()]
        response.candidates[0].content.parts = [part]
        with pytest.raises(ValueError):
            extract_image_from_response(response)


class TestImageConfig:
    def test_aspect_ratio_only(self):
        config = get_image_config("16:9")
        assert config.image_config.aspect_ratio == "16:9"
        assert config.image_config.image_size is None

    def test_with_image_size(self):
        assert get_image_config("2:3", image_size="4K").image_config.image_size == "4K"


class TestImageStudio:
    """Tests for ImageStudio requests."""

    @pytest.mark.asyncio
    async def test_generate_returns_data_uri(self, mock_genai_client, image_response, png_bytes):
        mock_genai_client.aio.models.generate_content.return_value = image_response(png_bytes)
        studio = ImageStudio(client=mock_genai_client)

        uri = await studio.generate("a lighthouse", "16:9")

        assert uri == "data:image/png;base64," + base64.b64encode(png_bytes).decode()
        kwargs = mock_genai_client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash-image"
        assert kwargs["contents"] == "a lighthouse"
        assert kwargs["config"].image_config.aspect_ratio == "16:9"

    @pytest.mark.asyncio
    async def test_api_error_becomes_generation_error(self, mock_genai_client):
        mock_genai_client.aio.models.generate_content.side_effect = _make_server_error()
        studio = ImageStudio(client=mock_genai_client)

        with pytest.raises(GenerationError):
            await studio.generate("x")

    @pytest.mark.asyncio
    async def test_transport_error_becomes_generation_error(self, mock_genai_client):
        mock_genai_client.aio.models.generate_content.side_effect = httpx.ConnectError("refused")

        with pytest.raises(GenerationError, match="refused"):
            await ImageStudio(client=mock_genai_client).generate("x")

    @pytest.mark.asyncio
    async def test_missing_image_becomes_generation_error(self, mock_genai_client):
        response = MagicMock()
        response.candidates = []
        mock_genai_client.aio.models.generate_content.return_value = response

        with pytest.raises(GenerationError, match="No image generated"):
            await ImageStudio(client=mock_genai_client).generate("x")

    @pytest.mark.asyncio
    async def test_edit_sends_image_then_instruction(self, mock_genai_client, image_response, png_bytes, png_data_uri):
        mock_genai_client.aio.models.generate_content.return_value = image_response(png_bytes)

        await ImageStudio(client=mock_genai_client).edit(png_data_uri, "make it night")

        contents = mock_genai_client.aio.models.generate_content.call_args.kwargs["contents"]
        assert contents[0].inline_data.data == png_bytes
        assert contents[0].inline_data.mime_type == "image/png"
        assert contents[1] == "Edit this image: make it night"

    @pytest.mark.asyncio
    async def test_variations_survive_partial_failure(self, mock_genai_client, image_response, png_bytes):
        mock_genai_client.aio.models.generate_content = AsyncMock(side_effect=[
            _make_server_error(),
            image_response(png_bytes),
            _make_client_error(429, "Rate limit"),
            image_response(png_bytes),
        ])

        results = await ImageStudio(client=mock_genai_client).generate_variations("x", count=4)

        assert len(results) == 2

    @pytest.mark.asyncio
    async def test_variations_fail_when_all_fail(self, mock_genai_client):
        mock_genai_client.aio.models.generate_content.side_effect = _make_server_error()

        with pytest.raises(GenerationError):
            await ImageStudio(client=mock_genai_client).edit_variations("AAAA", "x", count=3)
        assert mock_genai_client.aio.models.generate_content.call_count == 3

    @pytest.mark.asyncio
    async def test_cover_uses_pro_model_at_two_by_three(self, mock_genai_client, image_response, png_bytes):
        mock_genai_client.aio.models.generate_content.return_value = image_response(png_bytes)

        covers = await ImageStudio(client=mock_genai_client).generate_cover(
            "Neon Rain", "rain-soaked detective", "Cyberpunk Neon", resolution="4K", count=2
        )

        assert len(covers) == 2
        kwargs = mock_genai_client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-3-pro-image-preview"
        assert kwargs["config"].image_config.aspect_ratio == "2:3"
        assert kwargs["config"].image_config.image_size == "4K"
        assert 'titled "Neon Rain"' in kwargs["contents"]

    @pytest.mark.asyncio
    async def test_cover_rejects_unknown_resolution(self, mock_genai_client):
        with pytest.raises(ValueError):
            await ImageStudio(client=mock_genai_client).generate_cover("T", "c", "s", resolution="8K")
