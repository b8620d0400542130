"""
Supabase Identity Provider - Delegates accounts and tokens to Supabase Auth
(GoTrue) over its REST API.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from .base import IdentityProvider
from ..core.errors import InvalidRequest, Unauthorized, UpstreamError
from ..models import AuthSession, UserProfile

logger = logging.getLogger(__name__)


def _error_message(resp: httpx.Response) -> str:
    """Pick the human-readable message out of a GoTrue error body."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, dict):
        for key in ("msg", "message", "error_description", "error"):
            if body.get(key):
                return str(body[key])
    return resp.text


def _to_profile(user: Dict[str, Any]) -> UserProfile:
    metadata = user.get("user_metadata") or {}
    return UserProfile(
        id=user["id"],
        email=user.get("email"),
        name=metadata.get("name"),
        created_at=user.get("created_at"),
    )


class SupabaseIdentityProvider(IdentityProvider):
    """Identity provider backed by a Supabase project."""

    def __init__(
        self,
        url: str,
        service_role_key: str,
        anon_key: Optional[str] = None,
        timeout: float = 30.0,
    ):
        self.url = url.rstrip("/")
        self.service_role_key = service_role_key
        self.anon_key = anon_key or service_role_key
        self.timeout = timeout

    def _get_headers(self, bearer: str, apikey: Optional[str] = None) -> Dict[str, str]:
        return {
            "apikey": apikey or self.anon_key,
            "Authorization": f"Bearer {bearer}",
            "Content-Type": "application/json",
        }

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.request(method, f"{self.url}/auth/v1{path}", **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Supabase auth request {method} {path} failed: {e}")
            raise UpstreamError("Failed to reach identity provider", details=str(e)) from e

        if resp.status_code >= 500:
            logger.error(f"Supabase auth {method} {path} returned {resp.status_code}: {resp.text}")
            raise UpstreamError(
                "Identity provider error", status_code=502, details=_error_message(resp)
            )
        return resp

    async def create_user(self, email: str, password: str, name: str) -> UserProfile:
        resp = await self._request(
            "POST", "/admin/users",
            json={
                "email": email,
                "password": password,
                "user_metadata": {"name": name},
                "email_confirm": True,
            },
            headers=self._get_headers(self.service_role_key, apikey=self.service_role_key),
        )
        if resp.status_code >= 400:
            raise InvalidRequest(_error_message(resp))
        return _to_profile(resp.json())

    async def sign_in(self, email: str, password: str) -> AuthSession:
        resp = await self._request(
            "POST", "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
            headers=self._get_headers(self.anon_key),
        )
        if resp.status_code >= 400:
            raise Unauthorized(_error_message(resp))
        data = resp.json()
        return AuthSession(
            access_token=data["access_token"],
            token_type=data.get("token_type", "bearer"),
            user=_to_profile(data["user"]),
        )

    async def verify_token(self, token: str) -> Optional[str]:
        resp = await self._request("GET", "/user", headers=self._get_headers(token))
        if resp.status_code != 200:
            return None
        return resp.json().get("id") or None

    async def sign_out(self, token: str) -> None:
        resp = await self._request("POST", "/logout", headers=self._get_headers(token))
        if resp.status_code >= 400:
            raise Unauthorized(_error_message(resp))
