"""
Service configuration.

Every tunable (DSN, pool bounds, request deadline, paging limits, CORS,
rate limits) is read from the environment or a .env file into one
Settings object.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        api_prefix: Path prefix for every router.
        cors_origins: Comma-separated list of allowed CORS origins.
        rate_limit_enabled: Turn per-client rate limiting on or off.
        rate_limit_default: Default rate limit for all endpoints.
        database_url: Full DSN; overrides the postgres_* parts when set.
        pool_size: Connections kept open in the pool.
        pool_max_overflow: Extra connections allowed above pool_size.
        pool_timeout_seconds: How long to wait for a free connection.
        request_timeout_seconds: Deadline applied to each request's storage work.
        default_page_size: Page size used when the client sends none.
        max_page_size: Largest page size a client may request.
        strict_writes: Raise NotFoundError when update/delete match no row.
        metrics_enabled: Serve Prometheus metrics at /metrics.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "Invoicing API"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    api_prefix: str = "/api/v1"
    cors_origins: str = "*"
    rate_limit_enabled: bool = True
    rate_limit_default: str = "120/minute"

    database_url: Optional[str] = None
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "invoices"

    pool_size: int = 10
    pool_max_overflow: int = 5
    pool_timeout_seconds: float = 5.0
    request_timeout_seconds: float = 10.0

    default_page_size: int = 50
    max_page_size: int = 500
    strict_writes: bool = False
    metrics_enabled: bool = True

    def get_database_dsn(self) -> str:
        """Return the effective PostgreSQL DSN.

        Priority:
        1. Explicit `DATABASE_URL`
        2. Build DSN from postgres_* values (useful for Docker Compose or local setups)
        """
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}@"
            f"{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    def get_cors_origins(self) -> list[str]:
        """Return the configured CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
