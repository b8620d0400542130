"""Models module."""

from .session import Language, ChatMessage, ChatSession, ChatRequest, ChatResponse, SessionList
from .user import SignupRequest, LoginRequest, UserProfile, UserInDB, AuthSession, TokenData
from .actions import QuickAction, QuickActionList

__all__ = [
    'Language', 'ChatMessage', 'ChatSession', 'ChatRequest', 'ChatResponse', 'SessionList',
    'SignupRequest', 'LoginRequest', 'UserProfile', 'UserInDB', 'AuthSession', 'TokenData',
    'QuickAction', 'QuickActionList'
]
