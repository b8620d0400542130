"""
Chat Orchestrator - Turns one incoming chat request into one assistant reply.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .errors import ConfigurationError, InvalidRequest, PersistenceError
from .prompts import (
    CREATOR_RESPONSE,
    compose_messages,
    detect_creator_trigger,
    detect_statute_reference,
    inject_citation_footer,
)
from .session_manager import SessionManager
from ..llm.base import LLMMessage, LLMProvider
from ..models import ChatMessage, ChatRequest, ChatSession

logger = logging.getLogger(__name__)


@dataclass
class ChatResult:
    """Assistant reply plus the history the client should keep."""
    message: str
    conversation_history: List[ChatMessage]
    canned: bool = False
    persisted: bool = False


class ChatOrchestrator:
    """
    Linear pipeline: validate, check the creator trigger, call the
    completion provider, add the citation footer, persist if owned.

    Holds no state between requests; the caller supplies the full history.
    """

    def __init__(self, session_manager: SessionManager,
                 llm_provider: Optional[LLMProvider] = None):
        """
        Args:
            session_manager: SessionManager used to persist owned chats
            llm_provider: Completion provider, or None if no credential is configured
        """
        self.session_manager = session_manager
        self.llm_provider = llm_provider

    async def handle(self, request: ChatRequest) -> ChatResult:
        """
        Process a chat request.

        Raises:
            InvalidRequest: Empty message
            ConfigurationError: No completion provider configured
            UpstreamError: Completion provider failed
        """
        message = request.message
        if not message or not message.strip():
            raise InvalidRequest("Message is required")

        if self.llm_provider is None:
            raise ConfigurationError("Completion provider API key not configured")

        history = list(request.conversation_history)

        if detect_creator_trigger(message):
            logger.info("Creator trigger matched, returning canned response")
            return ChatResult(message=CREATOR_RESPONSE, conversation_history=history, canned=True)

        composed = compose_messages(request.language, history, message)

        logger.info(
            f"Chat request: language={request.language.value}, "
            f"history={len(history)} messages, owned={bool(request.user_id and request.chat_id)}"
        )

        response = await self.llm_provider.chat_completion(
            [LLMMessage.text(m.role, m.content) for m in composed]
        )

        reply = response.content
        if detect_statute_reference(message):
            reply = inject_citation_footer(reply)

        new_history = [*composed[1:], ChatMessage(role="assistant", content=reply)]

        persisted = False
        if request.user_id and request.chat_id:
            session = ChatSession(
                id=request.chat_id,
                user_id=request.user_id,
                messages=new_history,
                language=request.language,
            )
            try:
                persisted = await self.session_manager.persist(session)
            except PersistenceError as e:
                logger.warning(
                    f"Chat history not saved: {e.message}",
                    extra={"extra_fields": {
                        "user_id": request.user_id,
                        "chat_id": request.chat_id,
                        "error": str(e.details),
                    }}
                )

        return ChatResult(message=reply, conversation_history=new_history, persisted=persisted)
