"""
PostBoard Backend: Application Configuration
============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a module-level `settings` object.
       `create_app()` also accepts an explicit Settings instance, which is
       how the tests build isolated applications.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults. Production deployments should
    override AUTH_TOKEN, LOGIN_PASSWORD and DATABASE_URL, and set
    EXPOSE_ERROR_DETAILS=false.
    """

    # ── Resource Stores ───────────────────────────────────────────────────
    # "memory": process-lifetime lists, lost on restart
    # "database": SQLAlchemy tables behind DATABASE_URL
    store_backend: str = Field(default="memory")

    # Load the demo users and posts into in-memory stores on startup
    seed_demo_data: bool = Field(default=True)

    # Reproduces the historical delete that dropped the matched record AND
    # its successor. Only for compatibility testing; never enable in prod.
    legacy_delete: bool = Field(default=False)

    @field_validator("store_backend")
    @classmethod
    def validate_store_backend(cls, v: str) -> str:
        """Only the two store variants exist."""
        lower = v.lower()
        if lower not in {"memory", "database"}:
            raise ValueError(f"Invalid store_backend '{v}'. Must be 'memory' or 'database'")
        return lower

    # ── Database ──────────────────────────────────────────────────────────
    # Format: sqlite+aiosqlite:///./file.db or postgresql+asyncpg://user:pw@host/db
    database_url: str = Field(
        default="sqlite+aiosqlite:///./postboard.db",
        description="Async SQLAlchemy connection URL",
    )

    # Pool sizing is ignored for SQLite, which manages its own connections
    db_pool_size: int = Field(default=20, ge=5, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # Run metadata.create_all() at startup. Turn off when Alembic owns the schema.
    database_auto_create: bool = Field(default=True)

    # ── Auth ──────────────────────────────────────────────────────────────
    # Static shared secret compared by exact string equality
    auth_token: str = Field(default="mysecrettoken")
    auth_header: str = Field(default="authorization")
    login_username: str = Field(default="admin")
    login_password: str = Field(default="password")

    # ── Error Boundary ────────────────────────────────────────────────────
    # When False, the uniform error envelope hides the raw exception text
    expose_error_details: bool = Field(default=True)

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1024, le=65535)

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    @property
    def uses_database(self) -> bool:
        return self.store_backend == "database"

    def validate_required_for_production(self) -> None:
        """
        Flags settings that are fine for a demo but unsafe to deploy.

        Raises ValueError listing every problem found.
        """
        errors = []
        if self.auth_token == "mysecrettoken":
            errors.append("AUTH_TOKEN is still the demo value 'mysecrettoken'")
        if self.login_password == "password":
            errors.append("LOGIN_PASSWORD is still the demo value 'password'")
        if self.legacy_delete:
            errors.append("LEGACY_DELETE is enabled; deletes will remove two records")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


settings = Settings()
