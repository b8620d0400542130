"""Identity module - identity provider interface, implementations and the shared instance."""

from typing import Optional

from .base import IdentityProvider
from .local_provider import LocalIdentityProvider
from .supabase_provider import SupabaseIdentityProvider
from .user_store import UserStore
from ..config import Settings, settings as default_settings
from ..core.errors import ConfigurationError
from ..storage import get_kv_store

# Global identity provider instance
_identity_provider: Optional[IdentityProvider] = None


def create_identity_provider(config: Settings) -> IdentityProvider:
    """
    Build the provider selected by ``config.identity_provider``.

    Raises:
        ConfigurationError: If Supabase is selected without credentials
        ValueError: If the provider name is unknown
    """
    if config.identity_provider == "local":
        return LocalIdentityProvider(
            store=get_kv_store(),
            secret_key=config.secret_key,
            algorithm=config.algorithm,
            access_token_expire_minutes=config.access_token_expire_minutes,
        )

    if config.identity_provider == "supabase":
        if not config.supabase_url or not config.supabase_service_role_key:
            raise ConfigurationError("Supabase identity selected but SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY not configured")
        return SupabaseIdentityProvider(
            url=config.supabase_url,
            service_role_key=config.supabase_service_role_key,
            anon_key=config.supabase_anon_key,
        )

    raise ValueError(f"Unsupported identity provider: {config.identity_provider}")


def init_identity_provider(provider: Optional[IdentityProvider] = None) -> IdentityProvider:
    """
    Initialize the global identity provider.

    Args:
        provider: Optional provider. If None, one is created from the settings.
    """
    global _identity_provider
    _identity_provider = provider if provider is not None else create_identity_provider(default_settings)
    return _identity_provider


def get_identity_provider() -> IdentityProvider:
    """FastAPI dependency returning the global identity provider, creating it on first use."""
    if _identity_provider is None:
        return init_identity_provider()
    return _identity_provider


__all__ = [
    'IdentityProvider', 'LocalIdentityProvider', 'SupabaseIdentityProvider', 'UserStore',
    'create_identity_provider', 'init_identity_provider', 'get_identity_provider'
]
