"""
OpenAI-compatible LLM Provider.
Talks to any ``/chat/completions`` endpoint that follows the OpenAI wire format.
"""

import httpx
import logging
import time
from typing import Any, Dict, List, Optional

from .base import LLMProvider, LLMMessage, LLMResponse
from ..core.errors import UpstreamError

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """Provider for the OpenAI Chat Completions API and compatible services."""

    name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str = "https://api.openai.com/v1",
        default_temperature: float = 0.7,
        default_max_tokens: int = 1000,
        timeout: float = 60.0,
    ):
        super().__init__(api_key, model, base_url, default_temperature, default_max_tokens, timeout)

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def chat_completion(
        self,
        messages: List[LLMMessage],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> LLMResponse:
        """Send request to the Chat Completions endpoint."""
        start_time = time.time()
        url = f"{self.base_url}/chat/completions"
        payload: Dict[str, Any] = {
            "model": kwargs.get("model", self.model),
            "messages": self._format_messages(messages),
            "temperature": temperature if temperature is not None else self.default_temperature,
            "max_tokens": max_tokens or self.default_max_tokens,
        }

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"LLM API call starting: provider={self.name}, model={payload['model']}, "
                f"temperature={payload['temperature']}, {len(messages)} messages"
            )

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(url, json=payload, headers=self._get_headers())
        except httpx.TimeoutException as e:
            self._log_failure(payload, start_time, f"timeout: {e}")
            raise UpstreamError("Completion provider timed out", status_code=504, details=str(e)) from e
        except httpx.HTTPError as e:
            self._log_failure(payload, start_time, str(e))
            raise UpstreamError("Failed to reach completion provider", status_code=502, details=str(e)) from e

        if resp.status_code >= 400:
            self._log_failure(payload, start_time, f"status {resp.status_code}: {resp.text}")
            raise UpstreamError(
                f"Failed to get response from {self.name}",
                status_code=resp.status_code,
                details=resp.text,
            )

        try:
            data = resp.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            self._log_failure(payload, start_time, f"malformed response: {e}")
            raise UpstreamError(
                f"Malformed response from {self.name}", status_code=502, details=resp.text
            ) from e

        if not isinstance(content, str) or not content:
            self._log_failure(payload, start_time, "empty completion content")
            raise UpstreamError(
                f"Empty response from {self.name}", status_code=502, details=resp.text
            )

        usage = data.get("usage") or {}
        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "LLM API call completed",
            extra={"extra_fields": {
                "provider": self.name,
                "model": data.get("model", self.model),
                "prompt_tokens": usage.get("prompt_tokens", 0),
                "completion_tokens": usage.get("completion_tokens", 0),
                "total_tokens": usage.get("total_tokens", 0),
                "duration_ms": round(duration_ms, 2),
            }}
        )

        return LLMResponse(
            content=content,
            model=data.get("model", self.model),
            usage=usage,
            raw=data,
        )

    def _log_failure(self, payload: Dict[str, Any], start_time: float, error: str) -> None:
        duration_ms = (time.time() - start_time) * 1000
        logger.error(
            f"LLM API call failed: {error}",
            extra={"extra_fields": {
                "provider": self.name,
                "model": payload.get("model"),
                "duration_ms": round(duration_ms, 2),
                "error": error,
            }}
        )
