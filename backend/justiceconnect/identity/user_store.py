"""
User Store - User records kept in the key-value store.
Keys: ``user:<id>`` for the record, ``user_email:<email>`` as the lookup index,
``revoked_token:<jti>`` for signed-out tokens until they expire.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError

from ..models import UserInDB
from ..storage.interface import KVStore

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class UserStore:
    """Persistent user records for the local identity provider."""

    def __init__(self, store: KVStore):
        """
        Args:
            store: KVStore implementation shared with chat history
        """
        self.store = store

    async def get_user(self, user_id: str) -> Optional[UserInDB]:
        """
        Get user by id.

        Returns:
            Optional[UserInDB]: User record or None if not found or unreadable
        """
        data = await self.store.get(f"user:{user_id}")
        if data is None:
            return None
        try:
            return UserInDB.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Stored user {user_id} is malformed: {e}")
            return None

    async def get_user_by_email(self, email: str) -> Optional[UserInDB]:
        """Get user by email (case-insensitive)."""
        user_id = await self.store.get(f"user_email:{_normalize_email(email)}")
        if not user_id:
            return None
        return await self.get_user(user_id)

    async def create_user(self, email: str, hashed_password: str, name: str) -> UserInDB:
        """
        Create a new user and its email index entry.

        Returns:
            UserInDB: Created user record
        """
        user = UserInDB(
            id=str(uuid.uuid4()),
            email=_normalize_email(email),
            name=name,
            created_at=datetime.now(timezone.utc),
            hashed_password=hashed_password,
        )
        await self.store.mset({
            f"user:{user.id}": user.model_dump(mode="json"),
            f"user_email:{user.email}": user.id,
        })
        return user

    async def revoke_token(self, jti: str, expires_at: Optional[datetime]) -> None:
        """
        Mark a token id as signed out until the token itself expires.
        Revocations whose token has already expired are dropped on the way.
        """
        await self.prune_revoked_tokens()
        if expires_at is not None and expires_at <= datetime.now(timezone.utc):
            return
        await self.store.set(
            f"revoked_token:{jti}",
            {"expires_at": expires_at.isoformat() if expires_at else None},
        )

    async def is_token_revoked(self, jti: str) -> bool:
        return await self.store.get(f"revoked_token:{jti}") is not None

    async def prune_revoked_tokens(self, now: Optional[datetime] = None) -> int:
        """Delete revocation records for tokens that can no longer verify anyway."""
        now = now or datetime.now(timezone.utc)
        expired = []
        for row in await self.store.get_by_prefix("revoked_token:"):
            value = row.get("value")
            raw = value.get("expires_at") if isinstance(value, dict) else None
            if not raw:
                continue
            try:
                expires_at = datetime.fromisoformat(raw)
            except (TypeError, ValueError):
                logger.warning(f"Unreadable revocation record {row['key']}")
                continue
            if expires_at.tzinfo is None:
                expires_at = expires_at.replace(tzinfo=timezone.utc)
            if expires_at <= now:
                expired.append(row["key"])

        if expired:
            await self.store.mdel(expired)
            logger.debug(f"Pruned {len(expired)} expired token revocations")
        return len(expired)
