"""
Chat API endpoints - conversation exchange and stored chat history.
"""

from fastapi import APIRouter, Depends, Query

from .dependencies import get_current_user_id, get_orchestrator, get_session_manager
from ..core.orchestrator import ChatOrchestrator
from ..core.quick_actions import get_quick_actions
from ..core.session_manager import SessionManager
from ..models import ChatRequest, ChatResponse, Language, QuickActionList, SessionList

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
async def send_message(
    request: ChatRequest,
    orchestrator: ChatOrchestrator = Depends(get_orchestrator),
):
    """
    Send a chat message and get the assistant reply.

    The caller supplies the full prior ``conversationHistory``. When both
    ``userId`` and ``chatId`` are present the updated conversation is saved;
    a failure to save does not fail the request.

    Returns:
        ``{"message": ..., "conversationHistory": [...]}``
    """
    result = await orchestrator.handle(request)
    return ChatResponse(message=result.message, conversation_history=result.conversation_history)


@router.get("/history", response_model=SessionList)
async def get_chat_history(
    user_id: str = Depends(get_current_user_id),
    session_manager: SessionManager = Depends(get_session_manager),
):
    """
    Get the stored chats of the current user, most recently updated first.
    """
    chats = await session_manager.list_sessions(user_id)
    return SessionList(chats=chats)


@router.delete("/chat/{chat_id}")
async def delete_chat(
    chat_id: str,
    user_id: str = Depends(get_current_user_id),
    session_manager: SessionManager = Depends(get_session_manager),
):
    """Delete one of the current user's chats. Succeeds even if it does not exist."""
    await session_manager.delete_session(user_id, chat_id)
    return {"success": True}


@router.get("/quick-actions", response_model=QuickActionList)
async def quick_actions(language: Language = Query(Language.ENGLISH)):
    """Starter questions for an empty chat in the requested language."""
    return QuickActionList(language=language, actions=get_quick_actions(language))
