"""Tests for chat API endpoints."""

from unittest.mock import AsyncMock

from mythos.core.types import ChatReply


class TestSendMessage:
    def test_new_session(self, client_with_controller):
        client, controller = client_with_controller
        controller.assistant.send = AsyncMock(return_value=ChatReply(text="Hi!", generated_image="data:image/png;base64,AA"))

        response = client.post("/chat/", json={"text": "Draw me a fox"})

        assert response.status_code == 200
        data = response.json()
        assert data["text"] == "Hi!"
        assert data["generated_image"] == "data:image/png;base64,AA"
        assert data["session"]["title"] == "Draw me a fox"
        assert [m["role"] for m in data["session"]["messages"]] == ["user", "model"]

    def test_continue_session(self, client_with_controller):
        client, controller = client_with_controller
        controller.assistant.send = AsyncMock(return_value=ChatReply(text="ok"))
        session_id = client.post("/chat/", json={"text": "one"}).json()["session"]["id"]

        data = client.post("/chat/", json={"text": "two", "session_id": session_id}).json()

        assert data["session"]["id"] == session_id
        assert len(data["session"]["messages"]) == 4

    def test_unknown_session_is_404(self, client_with_controller):
        client, controller = client_with_controller
        controller.assistant.send = AsyncMock()

        response = client.post("/chat/", json={"text": "hi", "session_id": "ghost"})

        assert response.status_code == 404

    def test_bad_attachment_is_400(self, client_with_controller):
        client, controller = client_with_controller
        controller.assistant.send = AsyncMock(return_value=ChatReply(text="ok"))
        session_id = client.post("/chat/", json={"text": "one"}).json()["session"]["id"]

        response = client.post(
            "/chat/",
            json={"text": "what is this?", "session_id": session_id, "attachments": ["data:image/png;base64,abc"]},
        )

        assert response.status_code == 400
        assert len(client.get(f"/chat/sessions/{session_id}").json()["messages"]) == 2
        controller.assistant.send.assert_awaited_once()


class TestSessions:
    def test_list_get_delete(self, client_with_controller):
        client, controller = client_with_controller
        controller.assistant.send = AsyncMock(return_value=ChatReply(text="ok"))
        session_id = client.post("/chat/", json={"text": "hello"}).json()["session"]["id"]

        listing = client.get("/chat/sessions").json()
        assert listing["last_session_id"] == session_id
        assert len(listing["sessions"]) == 1

        assert client.get(f"/chat/sessions/{session_id}").json()["title"] == "hello"
        assert client.delete(f"/chat/sessions/{session_id}").status_code == 204
        assert client.get(f"/chat/sessions/{session_id}").status_code == 404
        assert client.get("/chat/sessions").json()["last_session_id"] is None


class TestRegenerate:
    def test_replaces_last_reply(self, client_with_controller):
        client, controller = client_with_controller
        controller.assistant.send = AsyncMock(side_effect=[ChatReply(text="first try"), ChatReply(text="second try")])
        session_id = client.post("/chat/", json={"text": "name a dragon"}).json()["session"]["id"]

        response = client.post(f"/chat/sessions/{session_id}/regenerate")

        assert response.status_code == 200
        data = response.json()
        assert data["text"] == "second try"
        assert [m["text"] for m in data["session"]["messages"]] == ["name a dragon", "second try"]

    def test_unknown_session_is_404(self, client_with_controller):
        client, controller = client_with_controller
        controller.assistant.send = AsyncMock()

        assert client.post("/chat/sessions/ghost/regenerate").status_code == 404
