"""
Identity Provider Base - Contract for services that own user accounts and
bearer tokens.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import AuthSession, UserProfile


class IdentityProvider(ABC):
    """
    Abstract identity provider.

    ``verify_token`` is the only call made on every authenticated request;
    it returns None for anything that is not a currently valid token.
    """

    @abstractmethod
    async def create_user(self, email: str, password: str, name: str) -> UserProfile:
        """
        Create a confirmed account.

        Raises:
            InvalidRequest: If the provider rejects the account (e.g. duplicate email)
        """

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> AuthSession:
        """
        Exchange credentials for a bearer token.

        Raises:
            Unauthorized: If the credentials are wrong
        """

    @abstractmethod
    async def verify_token(self, token: str) -> Optional[str]:
        """Return the user id a bearer token belongs to, or None if it is invalid."""

    @abstractmethod
    async def sign_out(self, token: str) -> None:
        """Invalidate a bearer token."""
