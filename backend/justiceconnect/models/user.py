"""
User Models - Identity records and the auth request/response shapes.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr


class SignupRequest(BaseModel):
    """Body of ``POST /signup``. Presence of every field is checked by the route."""
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    name: Optional[str] = None


class LoginRequest(BaseModel):
    """Body of ``POST /login``."""
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class UserProfile(BaseModel):
    """Public user record returned to clients."""
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    created_at: Optional[datetime] = None


class UserInDB(UserProfile):
    """User record as kept by the local identity provider."""
    hashed_password: str

    def to_profile(self) -> UserProfile:
        return UserProfile(**self.model_dump(exclude={"hashed_password"}))


class AuthSession(BaseModel):
    """Bearer token issued on sign in."""
    access_token: str
    token_type: str = "bearer"
    user: UserProfile


class TokenData(BaseModel):
    """Decoded access-token payload."""
    user_id: Optional[str] = None
    jti: Optional[str] = None
    expires_at: Optional[datetime] = None
