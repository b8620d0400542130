"""Core module - chat pipeline, session management and prompt composition."""

from .errors import (
    JusticeConnectError,
    InvalidRequest,
    Unauthorized,
    UpstreamError,
    ConfigurationError,
    PersistenceError,
    StorageError,
)

__all__ = [
    'JusticeConnectError', 'InvalidRequest', 'Unauthorized', 'UpstreamError',
    'ConfigurationError', 'PersistenceError', 'StorageError'
]
