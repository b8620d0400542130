"""
Session Manager - Chat session identity, history mutation and persistence.
"""

import logging
import time
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import ValidationError

from .errors import PersistenceError
from ..models import ChatMessage, ChatSession, Language
from ..storage.interface import KVStore

logger = logging.getLogger(__name__)


def chat_key(owner_id: str, chat_id: str) -> str:
    """Store key of a persisted chat."""
    return f"chat:{owner_id}:{chat_id}"


def new_chat_id() -> str:
    """Fresh chat id in the ``chat_<epoch-ms>`` form clients also generate."""
    return f"chat_{int(time.time() * 1000)}"


class SessionManager:
    """
    Creates, updates, stores, lists and deletes chat sessions for users.

    Free-mode sessions (no owner) are never written. Writes are
    last-write-wins: a persisted session replaces whatever record was stored
    for the same ``(owner, chat id)`` pair.
    """

    def __init__(self, store: KVStore):
        """
        Args:
            store: Key-value store holding the chat records
        """
        self.store = store

    def create_session(
        self,
        language: Language = Language.ENGLISH,
        owner_id: Optional[str] = None,
    ) -> ChatSession:
        """Allocate an empty session."""
        return ChatSession(id=new_chat_id(), user_id=owner_id, messages=[], language=language)

    def append_exchange(
        self,
        session: ChatSession,
        user_text: str,
        assistant_text: str,
    ) -> ChatSession:
        """Return a copy of ``session`` with one user/assistant exchange appended."""
        messages = [
            *session.messages,
            ChatMessage(role="user", content=user_text),
            ChatMessage(role="assistant", content=assistant_text),
        ]
        return session.model_copy(update={"messages": messages})

    async def persist(self, session: ChatSession) -> bool:
        """
        Write the session record if it has both an owner and an id.

        Returns:
            bool: True if a record was written, False for free-mode sessions

        Raises:
            PersistenceError: If the store write fails
        """
        if not session.user_id or not session.id:
            return False

        snapshot = session.model_copy(update={"updated_at": datetime.now(timezone.utc)})
        key = chat_key(session.user_id, session.id)
        try:
            await self.store.set(key, snapshot.to_record())
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(f"Failed to persist chat {key}", details=str(e)) from e

        logger.debug(f"Persisted chat {key} ({len(snapshot.messages)} messages)")
        return True

    async def list_sessions(self, owner_id: str) -> List[ChatSession]:
        """
        Sessions stored for ``owner_id``, most recently updated first.
        Malformed records and records owned by someone else are skipped.
        """
        rows = await self.store.get_by_prefix(f"chat:{owner_id}:")

        sessions: List[ChatSession] = []
        for row in rows:
            value = row.get("value")
            if not isinstance(value, dict) or not value.get("messages"):
                logger.warning(f"Skipping malformed chat record {row.get('key')}")
                continue
            try:
                session = ChatSession.model_validate(value)
            except ValidationError as e:
                logger.warning(
                    f"Skipping malformed chat record {row.get('key')}",
                    extra={"extra_fields": {"errors": e.errors(include_url=False)}}
                )
                continue
            if session.user_id != owner_id:
                logger.warning(f"Skipping chat record {row.get('key')} owned by another user")
                continue
            sessions.append(session)

        epoch = datetime.min.replace(tzinfo=timezone.utc)
        sessions.sort(key=lambda s: s.updated_at or epoch, reverse=True)
        return sessions

    async def delete_session(self, owner_id: str, chat_id: str) -> None:
        """Remove a stored chat. Deleting a chat that does not exist is not an error."""
        await self.store.delete(chat_key(owner_id, chat_id))
        logger.info(f"Deleted chat {chat_key(owner_id, chat_id)}")
