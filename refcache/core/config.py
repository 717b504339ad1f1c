"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Nothing is required at load time; the SQL table source
checks database_url when the runtime is built.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from refcache.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_REFERENCE


class Settings(BaseSettings):
    """Settings loaded from environment and .env.

    All settings have defaults. validate_cache_settings rejects a
    non-positive TTL and a key prefix containing the key separator.
    """

    # App
    app_name: str = "refcache"
    debug: bool = False

    # Database (table source)
    database_url: str = ""
    database_echo: bool = False
    # Optional pool overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # Redis (cache store); when disabled an in-process store is used
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None

    # Reference cache
    cache_key_prefix: str = CACHE_PREFIX_REFERENCE
    # None = no expiry; the cache medium's native eviction is the only policy.
    cache_ttl_reference: int | None = None
    reference_condition_check: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_cache_settings(self) -> "Settings":
        """Validate cache TTL and key prefix."""
        if self.cache_ttl_reference is not None and self.cache_ttl_reference <= 0:
            raise ValueError(
                f"cache_ttl_reference must be a positive number of seconds or unset, "
                f"got: {self.cache_ttl_reference!r}"
            )
        if not self.cache_key_prefix or CACHE_KEY_SEP in self.cache_key_prefix:
            raise ValueError(
                f"cache_key_prefix must be non-empty and must not contain {CACHE_KEY_SEP!r}"
            )
        return self


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
