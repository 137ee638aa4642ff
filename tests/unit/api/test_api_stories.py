"""Tests for story API endpoints."""

from unittest.mock import MagicMock

import httpx

from mythos.api.services import AppView
from mythos.core.errors import GenerationError
from mythos.core.modules import StoryWriter


def _stream_of(*chunks, error=None):
    async def stream(config):
        for chunk in chunks:
            yield chunk
        if error is not None:
            raise error

    return stream


class TestListStories:
    """Tests for GET /stories endpoint."""

    def test_empty_history(self, client_with_controller):
        client, _ = client_with_controller

        response = client.get("/stories/")

        assert response.status_code == 200
        assert response.json() == {"stories": [], "total": 0}

    def test_lists_summaries(self, client_with_controller, sample_story):
        client, controller = client_with_controller
        controller.stories.add(sample_story)

        data = client.get("/stories/").json()

        assert data["total"] == 1
        assert data["stories"][0]["title"] == "The Glass Orchard"
        assert "content" not in data["stories"][0]

    def test_templates(self, client_with_controller):
        client, _ = client_with_controller

        data = client.get("/stories/templates").json()

        assert len(data) == 8
        assert data[0]["title"] == "The Starlight Guardian"
        assert data[0]["config"]["core_premise"]


class TestGenerateStory:
    """Tests for POST /stories/generate endpoint."""

    def test_streams_plain_text_and_saves(self, client_with_controller):
        client, controller = client_with_controller
        controller.story_writer.stream = _stream_of("# Ember\n\n", "Sparks rose.")

        response = client.post("/stories/generate", json={"core_premise": "a forge that remembers"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "# Ember\n\nSparks rose."
        assert controller.list_stories()[0].title == "Ember"

    def test_failure_before_first_chunk_is_502(self, client_with_controller):
        client, controller = client_with_controller
        controller.story_writer.stream = _stream_of(error=GenerationError("quota exceeded"))

        response = client.post("/stories/generate", json={"core_premise": "x"})

        assert response.status_code == 502
        assert "quota exceeded" in response.json()["detail"]

    def test_transport_timeout_is_502_and_returns_to_dashboard(
        self, client_with_controller, mock_genai_client, fake_stream
    ):
        client, controller = client_with_controller
        mock_genai_client.aio.models.generate_content_stream.return_value = fake_stream(
            [], error=httpx.ReadTimeout("read timed out")
        )
        controller.story_writer.stream = StoryWriter(client=mock_genai_client).stream

        response = client.post("/stories/generate", json={"core_premise": "x"})

        assert response.status_code == 502
        assert "read timed out" in response.json()["detail"]
        assert controller.state.view == AppView.DASHBOARD
        assert controller.state.is_generating is False

    def test_failure_mid_stream_truncates(self, client_with_controller):
        client, controller = client_with_controller
        controller.story_writer.stream = _stream_of("# Half\n\n", "A begin", error=GenerationError("reset"))

        response = client.post("/stories/generate", json={})

        assert response.status_code == 200
        assert response.text == "# Half\n\nA begin"
        assert controller.list_stories() == []

    def test_rejects_bad_lore_category(self, client_with_controller):
        client, _ = client_with_controller

        response = client.post(
            "/stories/generate",
            json={"lore": [{"name": "Ash", "category": "Weapon", "description": "A sword"}]},
        )

        assert response.status_code == 422


class TestTextTools:
    def test_rewrite(self, client_with_controller):
        client, controller = client_with_controller
        controller.editor.rewrite = MagicMock(return_value="Darker.")

        response = client.post("/stories/rewrite", json={"text": "Light.", "instruction": "darker"})

        assert response.json() == {"text": "Darker."}
        controller.editor.rewrite.assert_called_once_with("Light.", "darker")

    def test_analyze(self, client_with_controller):
        client, controller = client_with_controller
        controller.editor.quick_analyze = MagicMock(return_value="Strong hook.")

        assert client.post("/stories/analyze", json={"text": "idea"}).json()["text"] == "Strong hook."

    def test_analyze_requires_text(self, client_with_controller):
        client, _ = client_with_controller
        assert client.post("/stories/analyze", json={"text": ""}).status_code == 422


class TestStoryResource:
    """Tests for per-story endpoints."""

    def test_get_story(self, client_with_controller, sample_story):
        client, controller = client_with_controller
        controller.stories.add(sample_story)

        data = client.get(f"/stories/{sample_story.id}").json()

        assert data["content"] == sample_story.content
        assert data["config"]["core_premise"] == "Glass fruit in winter"
        assert data["publishing_config"] is None

    def test_missing_story_is_404(self, client_with_controller):
        client, _ = client_with_controller

        response = client.get("/stories/missing")

        assert response.status_code == 404
        assert response.json()["detail"] == "Story missing not found"

    def test_delete(self, client_with_controller, sample_story):
        client, controller = client_with_controller
        controller.stories.add(sample_story)

        assert client.delete(f"/stories/{sample_story.id}").status_code == 204
        assert client.delete(f"/stories/{sample_story.id}").status_code == 404

    def test_update_content(self, client_with_controller, sample_story):
        client, controller = client_with_controller
        controller.stories.add(sample_story)

        data = client.put(f"/stories/{sample_story.id}/content", json={"content": "# New Name\n\nText"}).json()

        assert data["title"] == "New Name"

    def test_select_switches_view(self, client_with_controller, sample_story):
        client, controller = client_with_controller
        controller.stories.add(sample_story)

        client.post(f"/stories/{sample_story.id}/select")

        assert controller.state.active_story_id == sample_story.id
        assert controller.state.view.value == "STORY_RESULT"

    def test_pages(self, client_with_controller, sample_story):
        client, controller = client_with_controller
        controller.stories.add(sample_story)

        data = client.get(f"/stories/{sample_story.id}/pages").json()

        assert data["total"] == len(data["pages"]) >= 1
        assert data["pages"][0]["page_number"] == 1
        assert data["story_id"] == sample_story.id

    def test_markdown_download(self, client_with_controller, sample_story):
        client, controller = client_with_controller
        controller.stories.add(sample_story)

        response = client.get(f"/stories/{sample_story.id}/markdown")

        assert response.text == sample_story.content
        assert 'filename="the_glass_orchard.md"' in response.headers["content-disposition"]
