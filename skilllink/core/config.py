"""Client configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Nothing is required at load time: Firestore stays
disabled until a service account key or path is provided.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment and .env."""

    # App
    app_name: str = "skilllink"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Firebase / Firestore: use key (env) or path (file).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None
    # Overrides project_id from the service account JSON (e.g. emulator projects)
    firebase_project_id: str | None = None
    firestore_timeout_seconds: float = 30.0

    # Connections: commit a pair-guard document with every active record so
    # Firestore itself rejects a second active record for the same two users.
    enforce_pair_uniqueness: bool = True

    # Chat
    require_connection_for_chat: bool = True
    message_page_size: int = 100
    max_message_length: int = 2000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_limits(self) -> "Settings":
        """Reject timeouts and page sizes the REST client cannot use."""
        if self.firestore_timeout_seconds <= 0:
            raise ValueError(
                f"firestore_timeout_seconds must be positive, got {self.firestore_timeout_seconds}"
            )
        if not 1 <= self.message_page_size <= 1000:
            raise ValueError(
                f"message_page_size must be between 1 and 1000, got {self.message_page_size}"
            )
        if self.max_message_length <= 0:
            raise ValueError("max_message_length must be positive")
        return self

    @property
    def firestore_enabled(self) -> bool:
        """True when service account credentials are configured."""
        has_key = (
            self.firebase_service_account_key is not None
            and bool(self.firebase_service_account_key.get_secret_value())
        )
        return has_key or bool(self.firebase_service_account_path)


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
