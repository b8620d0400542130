"""
Authentication API endpoints.
"""

import logging
from fastapi import APIRouter, Depends

from .dependencies import get_bearer_token
from ..core.errors import InvalidRequest
from ..identity import IdentityProvider, get_identity_provider
from ..models import AuthSession, LoginRequest, SignupRequest

router = APIRouter(tags=["authentication"])

logger = logging.getLogger(__name__)


@router.post("/signup")
async def signup(
    user_data: SignupRequest,
    identity: IdentityProvider = Depends(get_identity_provider),
):
    """
    Register a new user with the email address already confirmed.

    Args:
        user_data: Email, password and display name

    Returns:
        ``{"success": true, "user": {...}}``

    Raises:
        InvalidRequest: If a field is missing or the provider rejects the account
    """
    if not user_data.email or not user_data.password or not user_data.name:
        raise InvalidRequest("Email, password, and name are required")

    user = await identity.create_user(user_data.email, user_data.password, user_data.name)
    logger.info(f"Signup completed for user {user.id}")

    return {"success": True, "user": user.model_dump(mode="json")}


@router.post("/login", response_model=AuthSession)
async def login(
    credentials: LoginRequest,
    identity: IdentityProvider = Depends(get_identity_provider),
):
    """
    Login and get access token.

    Raises:
        InvalidRequest: If email or password is missing
        Unauthorized: If authentication fails
    """
    if not credentials.email or not credentials.password:
        raise InvalidRequest("Email and password are required")

    return await identity.sign_in(credentials.email, credentials.password)


@router.post("/logout")
async def logout(
    token: str = Depends(get_bearer_token),
    identity: IdentityProvider = Depends(get_identity_provider),
):
    """Invalidate the caller's bearer token."""
    await identity.sign_out(token)
    return {"success": True}
