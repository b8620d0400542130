"""
Shared test fixtures and configuration.
"""

import os
import tempfile

import pytest
from unittest.mock import AsyncMock

# Set test environment variables before importing app modules
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing")
os.environ.setdefault("LOCAL_STORAGE_PATH", os.path.join(tempfile.gettempdir(), "justiceconnect_test_data"))
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("LOG_API_REQUESTS", "true")
os.environ.pop("LLM_API_KEY", None)
os.environ.pop("GROQ_API_KEY", None)

from justiceconnect.core.session_manager import SessionManager  # noqa: E402
from justiceconnect.llm.base import LLMProvider, LLMResponse  # noqa: E402
from justiceconnect.storage import LocalKVStore  # noqa: E402


@pytest.fixture
def store(tmp_path):
    """Empty local key-value store in a temporary directory."""
    return LocalKVStore(str(tmp_path / "kv"))


@pytest.fixture
def session_manager(store):
    return SessionManager(store)


@pytest.fixture
def mock_llm():
    """Completion provider stub answering every request with the same text."""
    provider = AsyncMock(spec=LLMProvider)
    provider.chat_completion.return_value = LLMResponse(content="RA 9262 is...", model="test-model")
    return provider
