"""Tests for publisher API endpoints."""

from unittest.mock import AsyncMock

import pytest

from mythos.core.errors import BatchFailedError


@pytest.fixture
def stored_story(client_with_controller, sample_story):
    client, controller = client_with_controller
    controller.stories.add(sample_story)
    return client, controller, sample_story


class TestPublishingConfig:
    def test_cover_styles(self, client_with_controller):
        client, _ = client_with_controller
        assert "Cinematic Fantasy" in client.get("/publishing/cover-styles").json()

    def test_defaults(self, stored_story):
        client, _, story = stored_story

        data = client.get(f"/publishing/{story.id}/config").json()

        assert data["metadata"]["author"] == "Unknown Author"
        assert data["paper_size"] == "6x9"
        assert data["back_cover_blurb"] == story.excerpt

    def test_save_and_reload(self, stored_story):
        client, _, story = stored_story
        payload = {
            "metadata": {"author": "R. Vale", "isbn": "123"},
            "paper_size": "A5",
            "margins": "wide",
            "layout": {"divider_style": "stars"},
            "extra_sections": [{"title": "Preface", "content": "Hello", "type": "preface"}],
        }

        saved = client.put(f"/publishing/{story.id}/config", json=payload).json()
        reloaded = client.get(f"/publishing/{story.id}/config").json()

        assert saved["publishing_config"]["paper_size"] == "A5"
        assert reloaded["metadata"]["author"] == "R. Vale"
        assert reloaded["layout"]["divider_style"] == "stars"
        assert reloaded["extra_sections"][0]["type"] == "preface"

    def test_unknown_paper_rejected(self, stored_story):
        client, _, story = stored_story
        assert client.put(f"/publishing/{story.id}/config", json={"paper_size": "B5"}).status_code == 422

    def test_missing_story(self, client_with_controller):
        client, _ = client_with_controller
        assert client.get("/publishing/nope/config").status_code == 404


class TestPreview:
    def test_preview_geometry(self, stored_story):
        client, _, story = stored_story

        data = client.get(f"/publishing/{story.id}/preview", params={"zoom": 0.5}).json()

        assert data["title"] == "The Glass Orchard"
        assert data["geometry"]["zoom"] == 0.5
        assert data["geometry"]["page_width"] == pytest.approx(6 * 96 * 0.5)
        assert [c["title"] for c in data["toc"]] == ["Chapter 1: Frost", "Chapter 2: Thaw"]
        assert data["drop_cap"]["letter"] == "M"

    def test_zoom_bounds(self, stored_story):
        client, _, story = stored_story
        assert client.get(f"/publishing/{story.id}/preview", params={"zoom": 0}).status_code == 422


class TestCovers:
    def test_generate_and_set_cover(self, stored_story):
        client, controller, story = stored_story
        controller.image_studio.generate_cover = AsyncMock(return_value=["data:image/png;base64,C1"])

        covers = client.post(f"/publishing/{story.id}/covers", json={"count": 1}).json()
        chosen = client.put(f"/publishing/{story.id}/cover", json={"image": covers["images"][0]}).json()

        assert covers["images"] == ["data:image/png;base64,C1"]
        assert chosen["publishing_config"]["cover_image"] == "data:image/png;base64,C1"

    def test_cover_failure_is_502(self, stored_story):
        client, controller, story = stored_story
        controller.image_studio.generate_cover = AsyncMock(side_effect=BatchFailedError("none"))

        assert client.post(f"/publishing/{story.id}/covers", json={}).status_code == 502


class TestExport:
    @pytest.mark.parametrize(
        "fmt,media_type,magic",
        [
            ("docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document", b"PK"),
            ("pdf", "application/pdf", b"%PDF"),
            ("md", "text/markdown; charset=utf-8", b"# The Glass Orchard"),
        ],
    )
    def test_formats(self, stored_story, fmt, media_type, magic):
        client, _, story = stored_story

        response = client.get(f"/publishing/{story.id}/export/{fmt}")

        assert response.status_code == 200
        assert response.headers["content-type"] == media_type
        assert response.content.startswith(magic)
        assert f"the_glass_orchard.{fmt}" in response.headers["content-disposition"]

    def test_unknown_format(self, stored_story):
        client, _, story = stored_story
        assert client.get(f"/publishing/{story.id}/export/epub").status_code == 400
