"""
Local Identity Provider - Accounts stored in the key-value store, bcrypt
password hashes and self-issued JWT bearer tokens.
"""

import logging
from datetime import timedelta
from typing import Optional

from .base import IdentityProvider
from .user_store import UserStore
from ..core.errors import InvalidRequest, Unauthorized
from ..models import AuthSession, UserProfile
from ..storage.interface import KVStore
from ..utils.auth import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)

logger = logging.getLogger(__name__)


class LocalIdentityProvider(IdentityProvider):
    """Identity provider that needs nothing but the history store."""

    def __init__(
        self,
        store: KVStore,
        secret_key: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 60 * 24 * 7,
    ):
        self.users = UserStore(store)
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_expire_minutes = access_token_expire_minutes

    async def create_user(self, email: str, password: str, name: str) -> UserProfile:
        if await self.users.get_user_by_email(email):
            raise InvalidRequest("A user with this email address has already been registered")

        user = await self.users.create_user(email, get_password_hash(password), name)
        logger.info(f"Created user {user.id}")
        return user.to_profile()

    async def sign_in(self, email: str, password: str) -> AuthSession:
        user = await self.users.get_user_by_email(email)
        if user is None or not verify_password(password, user.hashed_password):
            raise Unauthorized("Invalid login credentials")

        token = create_access_token(
            user.id,
            expires_delta=timedelta(minutes=self.access_token_expire_minutes),
            secret_key=self.secret_key,
            algorithm=self.algorithm,
        )
        return AuthSession(access_token=token, user=user.to_profile())

    async def verify_token(self, token: str) -> Optional[str]:
        token_data = decode_access_token(token, secret_key=self.secret_key, algorithm=self.algorithm)
        if token_data is None:
            return None
        if token_data.jti and await self.users.is_token_revoked(token_data.jti):
            return None
        if await self.users.get_user(token_data.user_id) is None:
            return None
        return token_data.user_id

    async def sign_out(self, token: str) -> None:
        token_data = decode_access_token(token, secret_key=self.secret_key, algorithm=self.algorithm)
        if token_data is None or not token_data.jti:
            raise Unauthorized()
        await self.users.revoke_token(token_data.jti, token_data.expires_at)
        logger.info(f"Signed out user {token_data.user_id}")
