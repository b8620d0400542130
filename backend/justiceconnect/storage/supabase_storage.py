"""
Supabase Storage Implementation.
Keeps key/value rows in a PostgREST-exposed table with ``key`` (text, primary
key) and ``value`` (jsonb) columns.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from .interface import KVStore
from ..core.errors import StorageError

logger = logging.getLogger(__name__)


class SupabaseKVStore(KVStore):
    """Key-value store backed by a Supabase table through the REST API."""

    def __init__(
        self,
        url: str,
        service_role_key: str,
        table: str = "kv_store_a76efa1a",
        timeout: float = 30.0,
    ):
        self.url = url.rstrip("/")
        self.service_role_key = service_role_key
        self.table = table
        self.timeout = timeout

    @property
    def _endpoint(self) -> str:
        return f"{self.url}/rest/v1/{self.table}"

    def _get_headers(self, **extra: str) -> Dict[str, str]:
        headers = {
            "apikey": self.service_role_key,
            "Authorization": f"Bearer {self.service_role_key}",
            "Content-Type": "application/json",
        }
        headers.update(extra)
        return headers

    async def _request(self, method: str, operation: str, **kwargs) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.request(method, self._endpoint, **kwargs)
                resp.raise_for_status()
                return resp
        except httpx.HTTPStatusError as e:
            logger.error(
                f"KV store {operation} failed: {e.response.status_code}",
                extra={"extra_fields": {"table": self.table, "body": e.response.text}}
            )
            raise StorageError(f"KV store {operation} failed", details=e.response.text) from e
        except httpx.HTTPError as e:
            logger.error(f"KV store {operation} failed: {e}", extra={"extra_fields": {"table": self.table}})
            raise StorageError(f"KV store {operation} failed", details=str(e)) from e

    async def set(self, key: str, value: Any) -> None:
        await self._request(
            "POST", "set",
            json={"key": key, "value": value},
            headers=self._get_headers(Prefer="resolution=merge-duplicates"),
        )

    async def mset(self, items: Dict[str, Any]) -> None:
        if not items:
            return
        await self._request(
            "POST", "mset",
            json=[{"key": k, "value": v} for k, v in items.items()],
            headers=self._get_headers(Prefer="resolution=merge-duplicates"),
        )

    async def get(self, key: str) -> Optional[Any]:
        resp = await self._request(
            "GET", "get",
            params={"select": "value", "key": f"eq.{key}"},
            headers=self._get_headers(),
        )
        rows = resp.json()
        return rows[0]["value"] if rows else None

    async def delete(self, key: str) -> None:
        await self._request(
            "DELETE", "delete",
            params={"key": f"eq.{key}"},
            headers=self._get_headers(),
        )

    async def get_by_prefix(self, prefix: str) -> List[Dict[str, Any]]:
        resp = await self._request(
            "GET", "get_by_prefix",
            params={"select": "key,value", "key": f"like.{prefix}*", "order": "key.asc"},
            headers=self._get_headers(),
        )
        # ``like`` treats % and _ as wildcards; keep only true prefix matches
        return [
            {"key": row["key"], "value": row.get("value")}
            for row in resp.json()
            if str(row.get("key", "")).startswith(prefix)
        ]
