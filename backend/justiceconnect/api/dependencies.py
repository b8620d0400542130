"""
Shared FastAPI dependencies - authentication and the per-request services.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from ..config import settings
from ..core.errors import Unauthorized
from ..core.orchestrator import ChatOrchestrator
from ..core.session_manager import SessionManager
from ..identity import IdentityProvider, get_identity_provider
from ..llm import LLMProvider, provider_from_settings
from ..storage import KVStore, get_kv_store

# Bearer token security; missing headers are reported as 401 by get_bearer_token
security = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> str:
    """
    Dependency returning the raw bearer token.

    Raises:
        Unauthorized: If the Authorization header is missing or not a bearer token
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized()
    return credentials.credentials


async def get_current_user_id(
    token: str = Depends(get_bearer_token),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> str:
    """
    Dependency to get the current user id from the bearer token.

    Raises:
        Unauthorized: If the identity provider does not accept the token
    """
    user_id = await identity.verify_token(token)
    if not user_id:
        raise Unauthorized()
    return user_id


def get_llm_provider() -> Optional[LLMProvider]:
    """Get configured completion provider or None."""
    return provider_from_settings(settings)


def get_session_manager(store: KVStore = Depends(get_kv_store)) -> SessionManager:
    return SessionManager(store)


def get_orchestrator(
    session_manager: SessionManager = Depends(get_session_manager),
    llm_provider: Optional[LLMProvider] = Depends(get_llm_provider),
) -> ChatOrchestrator:
    return ChatOrchestrator(session_manager, llm_provider=llm_provider)
