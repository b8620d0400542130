"""
Completion provider contract shared by every chat-completion backend.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class LLMMessage:
    """One turn of the prompt sent upstream."""
    role: str
    content: str

    @staticmethod
    def text(role: str, text: str) -> "LLMMessage":
        return LLMMessage(role=role, content=text)


@dataclass
class LLMResponse:
    """Assistant text plus whatever accounting the provider returned."""
    content: str
    model: str = ""
    usage: Dict[str, int] = field(default_factory=dict)
    raw: Optional[Dict[str, Any]] = None


class LLMProvider(ABC):
    """
    A chat-completion backend.

    Subclasses send the composed conversation (system prompt first) and turn
    the reply into an ``LLMResponse``. Sampling defaults come from the
    settings and can be overridden per call.
    """

    name = "base"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: Optional[str] = None,
        default_temperature: float = 0.7,
        default_max_tokens: int = 1000,
        timeout: float = 60.0,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.default_temperature = default_temperature
        self.default_max_tokens = default_max_tokens
        self.timeout = timeout

    @abstractmethod
    async def chat_completion(
        self,
        messages: List[LLMMessage],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> LLMResponse:
        """
        Ask the provider for the next assistant message.

        Raises:
            UpstreamError: Non-success status (status preserved), transport
                failure or timeout, or a reply without content
        """

    def _format_messages(self, messages: List[LLMMessage]) -> List[Dict[str, str]]:
        return [{"role": m.role, "content": m.content} for m in messages]
