"""Storage module - key-value store interface, implementations and the shared instance."""

from typing import Optional

from .interface import KVStore
from .local_storage import LocalKVStore
from .supabase_storage import SupabaseKVStore
from ..config import Settings, settings as default_settings
from ..core.errors import ConfigurationError

# Global store instance
_kv_store: Optional[KVStore] = None


def create_kv_store(config: Settings) -> KVStore:
    """
    Build the store selected by ``config.storage_type``.

    Raises:
        ConfigurationError: If Supabase is selected without credentials
        ValueError: If the storage type is unknown
    """
    if config.storage_type == "local":
        return LocalKVStore(config.local_storage_path)

    if config.storage_type == "supabase":
        if not config.supabase_url or not config.supabase_service_role_key:
            raise ConfigurationError("Supabase storage selected but SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY not configured")
        return SupabaseKVStore(
            url=config.supabase_url,
            service_role_key=config.supabase_service_role_key,
            table=config.supabase_kv_table,
        )

    raise ValueError(f"Unsupported storage type: {config.storage_type}")


def init_kv_store(store: Optional[KVStore] = None) -> KVStore:
    """
    Initialize the global store instance.

    Args:
        store: Optional store. If None, one is created from the settings.
    """
    global _kv_store
    _kv_store = store if store is not None else create_kv_store(default_settings)
    return _kv_store


def get_kv_store() -> KVStore:
    """FastAPI dependency returning the global store, creating it on first use."""
    if _kv_store is None:
        return init_kv_store()
    return _kv_store


__all__ = [
    'KVStore', 'LocalKVStore', 'SupabaseKVStore',
    'create_kv_store', 'init_kv_store', 'get_kv_store'
]
