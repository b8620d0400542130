"""
Integration tests for the HTTP API.
Drives the FastAPI app end to end with a temporary store and a stubbed
completion provider.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from justiceconnect.api.dependencies import get_llm_provider
from justiceconnect.config import settings
from justiceconnect.core.errors import UpstreamError
from justiceconnect.core.prompts import CITATION_FOOTER, CREATOR_RESPONSE
from justiceconnect.identity import LocalIdentityProvider, get_identity_provider
from justiceconnect.main import app
from justiceconnect.storage import get_kv_store

PREFIX = settings.api_prefix


@pytest.fixture
def client(store, mock_llm):
    app.dependency_overrides[get_kv_store] = lambda: store
    app.dependency_overrides[get_llm_provider] = lambda: mock_llm
    app.dependency_overrides[get_identity_provider] = lambda: LocalIdentityProvider(
        store, secret_key="integration-secret"
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def account(client):
    """Sign up and log in a user; returns (user_id, auth headers)."""
    signup = client.post(f"{PREFIX}/signup", json={
        "email": "maria@example.com",
        "password": "pw123456",
        "name": "Maria",
    })
    assert signup.status_code == 200
    user_id = signup.json()["user"]["id"]

    login = client.post(f"{PREFIX}/login", json={
        "email": "maria@example.com",
        "password": "pw123456",
    })
    assert login.status_code == 200
    return user_id, {"Authorization": f"Bearer {login.json()['access_token']}"}


def _record(chat_id, user_id, updated_at):
    return {
        "id": chat_id,
        "userId": user_id,
        "messages": [
            {"role": "user", "content": f"question {chat_id}"},
            {"role": "assistant", "content": f"answer {chat_id}"},
        ],
        "language": "english",
        "updatedAt": updated_at,
    }


class TestHealth:

    def test_health(self, client):
        response = client.get(f"{PREFIX}/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "message": "JusticeConnect server is running"}


class TestChatAPIIntegration:
    """Integration tests for POST /chat."""

    def test_missing_message(self, client, mock_llm):
        response = client.post(f"{PREFIX}/chat", json={"language": "english"})
        assert response.status_code == 400
        assert response.json()["error"] == "Message is required"
        mock_llm.chat_completion.assert_not_called()

    def test_malformed_body(self, client):
        response = client.post(f"{PREFIX}/chat", json={
            "message": "Hello",
            "conversationHistory": "not a list",
        })
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"

    def test_provider_not_configured(self, client):
        app.dependency_overrides[get_llm_provider] = lambda: None
        response = client.post(f"{PREFIX}/chat", json={"message": "Hello"})
        assert response.status_code == 500
        assert "not configured" in response.json()["error"]

    def test_creator_trigger(self, client, mock_llm):
        response = client.post(f"{PREFIX}/chat", json={
            "message": "Sino gumawa sa'yo?",
            "conversationHistory": [],
            "language": "tagalog",
        })
        assert response.status_code == 200
        assert response.json() == {"message": CREATOR_RESPONSE, "conversationHistory": []}
        mock_llm.chat_completion.assert_not_called()

    def test_statute_reply_is_persisted(self, client, store):
        response = client.post(f"{PREFIX}/chat", json={
            "message": "What is RA 9262?",
            "conversationHistory": [],
            "language": "english",
            "userId": "u1",
            "chatId": "c1",
        })
        assert response.status_code == 200
        data = response.json()
        expected = f"RA 9262 is...\n\n{CITATION_FOOTER}"
        assert data["message"] == expected
        assert data["conversationHistory"] == [
            {"role": "user", "content": "What is RA 9262?"},
            {"role": "assistant", "content": expected},
        ]

        record = asyncio.run(store.get("chat:u1:c1"))
        assert record["userId"] == "u1"
        assert len(record["messages"]) == 2

    def test_free_mode_is_not_persisted(self, client, store):
        response = client.post(f"{PREFIX}/chat", json={"message": "Hello"})
        assert response.status_code == 200
        assert asyncio.run(store.get_by_prefix("chat:")) == []

    def test_upstream_status_is_propagated(self, client, mock_llm):
        mock_llm.chat_completion.side_effect = UpstreamError(
            "Failed to get response from groq", status_code=429, details="rate limit exceeded"
        )
        response = client.post(f"{PREFIX}/chat", json={"message": "Hello"})
        assert response.status_code == 429
        assert response.json() == {
            "error": "Failed to get response from groq",
            "details": "rate limit exceeded",
        }


class TestHistoryAPIIntegration:
    """Integration tests for GET /history and DELETE /chat/{chatId}."""

    def test_history_requires_token(self, client):
        response = client.get(f"{PREFIX}/history")
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_history_rejects_bad_token(self, client):
        response = client.get(f"{PREFIX}/history", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    def test_history_sorted_newest_first(self, client, store, account):
        user_id, headers = account
        asyncio.run(store.mset({
            f"chat:{user_id}:a": _record("a", user_id, "2025-01-01T10:00:00+00:00"),
            f"chat:{user_id}:b": _record("b", user_id, "2025-01-01T10:05:00+00:00"),
            f"chat:{user_id}:c": _record("c", user_id, "2025-01-01T09:00:00+00:00"),
            "chat:someone-else:d": _record("d", "someone-else", "2025-01-01T11:00:00+00:00"),
        }))

        response = client.get(f"{PREFIX}/history", headers=headers)

        assert response.status_code == 200
        chats = response.json()["chats"]
        assert [c["id"] for c in chats] == ["b", "a", "c"]
        assert set(chats[0]) == {"id", "userId", "messages", "language", "updatedAt"}

    def test_empty_history(self, client, account):
        _, headers = account
        response = client.get(f"{PREFIX}/history", headers=headers)
        assert response.status_code == 200
        assert response.json() == {"chats": []}

    def test_delete_chat(self, client, store, account):
        user_id, headers = account
        asyncio.run(store.set(f"chat:{user_id}:a", _record("a", user_id, "2025-01-01T10:00:00+00:00")))

        response = client.delete(f"{PREFIX}/chat/a", headers=headers)
        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert client.get(f"{PREFIX}/history", headers=headers).json() == {"chats": []}

        again = client.delete(f"{PREFIX}/chat/a", headers=headers)
        assert again.status_code == 200

    def test_delete_requires_token(self, client):
        response = client.delete(f"{PREFIX}/chat/a")
        assert response.status_code == 401

    def test_chat_then_history(self, client, account):
        user_id, headers = account
        client.post(f"{PREFIX}/chat", json={
            "message": "What is RA 9262?",
            "userId": user_id,
            "chatId": "chat_1700000000000",
        })

        chats = client.get(f"{PREFIX}/history", headers=headers).json()["chats"]
        assert len(chats) == 1
        assert chats[0]["id"] == "chat_1700000000000"
        assert chats[0]["messages"][0]["content"] == "What is RA 9262?"


class TestAuthAPIIntegration:
    """Integration tests for signup, login and logout."""

    def test_signup_missing_fields(self, client):
        response = client.post(f"{PREFIX}/signup", json={"email": "a@example.com"})
        assert response.status_code == 400
        assert response.json()["error"] == "Email, password, and name are required"

    def test_signup_duplicate(self, client, account):
        response = client.post(f"{PREFIX}/signup", json={
            "email": "maria@example.com",
            "password": "another",
            "name": "Maria Two",
        })
        assert response.status_code == 400

    def test_signup_response(self, client):
        response = client.post(f"{PREFIX}/signup", json={
            "email": "pedro@example.com",
            "password": "pw123456",
            "name": "Pedro",
        })
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["user"]["email"] == "pedro@example.com"
        assert data["user"]["name"] == "Pedro"
        assert "hashed_password" not in data["user"]

    def test_login_wrong_password(self, client, account):
        response = client.post(f"{PREFIX}/login", json={
            "email": "maria@example.com",
            "password": "wrong",
        })
        assert response.status_code == 401

    def test_logout_revokes_token(self, client, account):
        _, headers = account
        response = client.post(f"{PREFIX}/logout", headers=headers)
        assert response.status_code == 200
        assert response.json() == {"success": True}

        assert client.get(f"{PREFIX}/history", headers=headers).status_code == 401


class TestQuickActionsIntegration:

    def test_default_language(self, client):
        response = client.get(f"{PREFIX}/quick-actions")
        assert response.status_code == 200
        data = response.json()
        assert data["language"] == "english"
        assert len(data["actions"]) == 6

    def test_bisaya(self, client):
        response = client.get(f"{PREFIX}/quick-actions", params={"language": "bisaya"})
        assert response.status_code == 200
        assert response.json()["language"] == "bisaya"

    def test_unknown_language(self, client):
        response = client.get(f"{PREFIX}/quick-actions", params={"language": "klingon"})
        assert response.status_code == 400
