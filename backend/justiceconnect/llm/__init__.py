"""LLM module - provides unified interface for chat-completion API providers."""

from .base import LLMProvider, LLMMessage, LLMResponse
from .openai_provider import OpenAIProvider
from .groq_provider import GroqProvider
from .factory import create_llm_provider, provider_from_settings

__all__ = [
    'LLMProvider',
    'LLMMessage',
    'LLMResponse',
    'OpenAIProvider',
    'GroqProvider',
    'create_llm_provider',
    'provider_from_settings',
]
