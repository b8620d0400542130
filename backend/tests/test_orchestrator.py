"""
Tests for ChatOrchestrator: the full request-to-reply pipeline.
"""

import pytest
from unittest.mock import AsyncMock

from justiceconnect.core.errors import (
    ConfigurationError,
    InvalidRequest,
    StorageError,
    UpstreamError,
)
from justiceconnect.core.orchestrator import ChatOrchestrator
from justiceconnect.core.prompts import CITATION_FOOTER, CREATOR_RESPONSE
from justiceconnect.core.session_manager import SessionManager
from justiceconnect.llm.base import LLMResponse
from justiceconnect.models import ChatMessage, ChatRequest, Language
from justiceconnect.storage import KVStore


@pytest.fixture
def orchestrator(session_manager, mock_llm):
    return ChatOrchestrator(session_manager, mock_llm)


class TestValidation:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", [None, "", "   "])
    async def test_empty_message_rejected(self, orchestrator, mock_llm, message):
        with pytest.raises(InvalidRequest) as exc_info:
            await orchestrator.handle(ChatRequest(message=message))
        assert exc_info.value.status_code == 400
        mock_llm.chat_completion.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_provider_is_configuration_error(self, session_manager):
        orchestrator = ChatOrchestrator(session_manager, None)
        with pytest.raises(ConfigurationError) as exc_info:
            await orchestrator.handle(ChatRequest(message="Hello"))
        assert exc_info.value.status_code == 500


class TestCreatorTrigger:

    @pytest.mark.asyncio
    async def test_canned_reply_skips_provider(self, orchestrator, mock_llm):
        history = [
            ChatMessage(role="user", content="hi"),
            ChatMessage(role="assistant", content="hello"),
        ]
        result = await orchestrator.handle(ChatRequest(
            message="Sino gumawa sa'yo?",
            conversation_history=history,
            language=Language.TAGALOG,
        ))

        assert result.message == CREATOR_RESPONSE
        assert result.canned is True
        assert result.conversation_history == history
        mock_llm.chat_completion.assert_not_called()

    @pytest.mark.asyncio
    async def test_canned_reply_is_not_persisted(self, orchestrator, store):
        result = await orchestrator.handle(ChatRequest(
            message="Who created you?", user_id="u1", chat_id="c1",
        ))
        assert result.persisted is False
        assert await store.get("chat:u1:c1") is None


class TestCompletion:

    @pytest.mark.asyncio
    async def test_composed_message_order(self, orchestrator, mock_llm):
        history = [
            ChatMessage(role="user", content="q1"),
            ChatMessage(role="assistant", content="a1"),
        ]
        await orchestrator.handle(ChatRequest(
            message="q2", conversation_history=history, language=Language.BISAYA,
        ))

        sent = mock_llm.chat_completion.call_args.args[0]
        assert [m.role for m in sent] == ["system", "user", "assistant", "user"]
        assert [m.content for m in sent[1:]] == ["q1", "a1", "q2"]
        assert "bisaya" in sent[0].content

    @pytest.mark.asyncio
    async def test_history_grows_by_one_exchange(self, orchestrator, mock_llm):
        mock_llm.chat_completion.return_value = LLMResponse(content="Sure.", model="m")
        result = await orchestrator.handle(ChatRequest(message="Hello"))

        assert result.message == "Sure."
        assert result.conversation_history == [
            ChatMessage(role="user", content="Hello"),
            ChatMessage(role="assistant", content="Sure."),
        ]

    @pytest.mark.asyncio
    async def test_system_prompt_never_returned(self, orchestrator):
        result = await orchestrator.handle(ChatRequest(message="Hello"))
        assert all(m.role != "system" for m in result.conversation_history)

    @pytest.mark.asyncio
    async def test_footer_appended_for_statute(self, orchestrator, mock_llm):
        mock_llm.chat_completion.return_value = LLMResponse(content="It protects women.", model="m")
        result = await orchestrator.handle(ChatRequest(message="What is RA 9262?"))
        assert result.message == f"It protects women.\n\n{CITATION_FOOTER}"
        assert result.conversation_history[-1].content == result.message

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", [
        f"RA 9262 is...\n\n{CITATION_FOOTER}\n\nPlease consult a lawyer.",
        f"RA 9262 is...\n\n{CITATION_FOOTER}\n",
    ])
    async def test_footer_once_when_model_wrote_it(self, orchestrator, mock_llm, reply):
        mock_llm.chat_completion.return_value = LLMResponse(content=reply, model="m")
        result = await orchestrator.handle(ChatRequest(message="What is RA 9262?"))
        assert result.message.count(CITATION_FOOTER) == 1
        assert result.message.endswith(f"\n\n{CITATION_FOOTER}")

    @pytest.mark.asyncio
    async def test_no_footer_without_statute(self, orchestrator, mock_llm):
        mock_llm.chat_completion.return_value = LLMResponse(content="Annulment is...", model="m")
        result = await orchestrator.handle(ChatRequest(message="What is annulment?"))
        assert CITATION_FOOTER not in result.message

    @pytest.mark.asyncio
    async def test_upstream_error_propagates(self, orchestrator, mock_llm, store):
        mock_llm.chat_completion.side_effect = UpstreamError("rate limited", status_code=429)
        with pytest.raises(UpstreamError) as exc_info:
            await orchestrator.handle(ChatRequest(message="Hello", user_id="u1", chat_id="c1"))
        assert exc_info.value.status_code == 429
        assert await store.get("chat:u1:c1") is None


class TestPersistence:

    @pytest.mark.asyncio
    async def test_owned_chat_is_persisted(self, orchestrator, store):
        result = await orchestrator.handle(ChatRequest(
            message="What is RA 9262?", user_id="u1", chat_id="c1",
        ))

        assert result.message == f"RA 9262 is...\n\n{CITATION_FOOTER}"
        assert result.persisted is True
        record = await store.get("chat:u1:c1")
        assert record["id"] == "c1"
        assert record["userId"] == "u1"
        assert len(record["messages"]) == 2
        assert record["messages"][1]["content"] == result.message

    @pytest.mark.asyncio
    async def test_free_mode_writes_nothing(self, mock_llm):
        store = AsyncMock(spec=KVStore)
        orchestrator = ChatOrchestrator(SessionManager(store), mock_llm)

        result = await orchestrator.handle(ChatRequest(message="Hello"))

        assert result.persisted is False
        store.set.assert_not_called()

    @pytest.mark.asyncio
    async def test_user_without_chat_id_is_not_persisted(self, mock_llm):
        store = AsyncMock(spec=KVStore)
        orchestrator = ChatOrchestrator(SessionManager(store), mock_llm)

        await orchestrator.handle(ChatRequest(message="Hello", user_id="u1"))
        store.set.assert_not_called()

    @pytest.mark.asyncio
    async def test_store_failure_still_returns_reply(self, mock_llm):
        store = AsyncMock(spec=KVStore)
        store.set.side_effect = StorageError("unavailable")
        orchestrator = ChatOrchestrator(SessionManager(store), mock_llm)

        result = await orchestrator.handle(ChatRequest(message="Hello", user_id="u1", chat_id="c1"))

        assert result.message == "RA 9262 is..."
        assert result.persisted is False
        store.set.assert_awaited_once()
