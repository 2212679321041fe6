from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Project Tracker"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True

    # Security
    csp_production: str = "default-src 'self'; frame-ancestors 'none'"

    # Database
    # Explicit URL wins over the storage config file (used by tests and containers)
    database_url: str | None = None
    db_config_path: str = "db_config.json"
    default_sqlite_path: str = "tracker.db"
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Sessions
    session_cookie_name: str = "tracker_session"
    session_expire_days: int = 7
    session_cookie_secure: bool = False

    # Password hashing
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 1

    # Rate limiting
    login_rate_limit: str = "5/minute"

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Reject wildcards: the session cookie needs allow_credentials=True."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("session_expire_days")
    @classmethod
    def validate_session_expiry(cls, v: int) -> int:
        if v < 1:
            raise ValueError("SESSION_EXPIRE_DAYS must be at least 1")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
