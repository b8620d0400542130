"""
Configuration Settings.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # App info
    app_name: str = "JusticeConnect"
    app_version: str = "1.0.0"
    debug: bool = False
    api_prefix: str = "/make-server-a76efa1a"

    # Security (local identity provider)
    secret_key: str = "your-secret-key-change-this-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days

    # History store
    storage_type: str = "local"  # local, supabase
    local_storage_path: str = "./data"

    # Identity provider
    identity_provider: str = "local"  # local, supabase

    # Supabase (identity and/or kv store)
    supabase_url: Optional[str] = None
    supabase_service_role_key: Optional[str] = None
    supabase_anon_key: Optional[str] = None
    supabase_kv_table: str = "kv_store_a76efa1a"

    # Completion provider settings
    llm_provider: str = "groq"  # "groq" or "openai"
    llm_api_key: Optional[str] = None
    llm_model: Optional[str] = None  # uses provider default if not set
    llm_base_url: Optional[str] = None  # uses provider default if not set
    llm_temperature: float = 0.7
    llm_max_tokens: int = 1000
    llm_timeout: float = 60.0

    # Legacy key (still accepted)
    groq_api_key: Optional[str] = None

    # CORS
    cors_origins: list[str] = ["*"]

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file_path: str = "./logs/justiceconnect.log"
    log_file_enabled: bool = True
    log_console_enabled: bool = True
    log_json_format: bool = True  # JSON format for files, human-readable for console
    log_api_requests: bool = True  # Log all API requests/responses

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
