"""
Session Models - Chat sessions, messages and the chat request/response shapes.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator


class Language(str, Enum):
    """Language preference attached to a session."""
    ENGLISH = "english"
    TAGALOG = "tagalog"
    BISAYA = "bisaya"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class ChatMessage(BaseModel):
    """A single role-tagged message in a conversation."""
    role: Literal["system", "user", "assistant"]
    content: str


class ChatSession(BaseModel):
    """
    One conversation thread.

    ``user_id`` is None in free mode; such sessions are never persisted.
    Serialized by alias this is exactly the stored record shape:
    ``{id, userId, messages, language, updatedAt}``.
    """
    id: str = Field(..., min_length=1)
    user_id: Optional[str] = Field(None, alias="userId")
    messages: List[ChatMessage]
    language: Language = Language.ENGLISH
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    class Config:
        populate_by_name = True

    @field_validator("updated_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def to_record(self) -> dict:
        """Serialize to the JSON record written to the history store."""
        return self.model_dump(by_alias=True, mode="json")


class ChatRequest(BaseModel):
    """Body of ``POST /chat``."""
    message: Optional[str] = None
    conversation_history: List[ChatMessage] = Field(default_factory=list, alias="conversationHistory")
    language: Language = Language.ENGLISH
    user_id: Optional[str] = Field(None, alias="userId")
    chat_id: Optional[str] = Field(None, alias="chatId")

    class Config:
        populate_by_name = True

    @field_validator("conversation_history", mode="before")
    @classmethod
    def _null_history(cls, value):
        return [] if value is None else value

    @field_validator("language", mode="before")
    @classmethod
    def _default_language(cls, value):
        return Language.ENGLISH if value in (None, "") else value


class ChatResponse(BaseModel):
    """Body returned by ``POST /chat``."""
    message: str
    conversation_history: List[ChatMessage] = Field(..., alias="conversationHistory")

    class Config:
        populate_by_name = True


class SessionList(BaseModel):
    """Body returned by ``GET /history``."""
    chats: List[ChatSession]
