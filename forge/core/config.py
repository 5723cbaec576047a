"""Application configuration from environment variables."""

from functools import lru_cache
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Forge Workout API"
    debug: bool = False
    environment: str = "development"

    # API
    api_v1_prefix: str = "/api/v1"

    # Database (PostgreSQL)
    database_host: str = "localhost"
    database_port: int = 5432
    database_user: str = "forge"
    database_password: str = ""  # Set in .env - never commit
    database_name: str = "forge"
    database_ssl_mode: str = "prefer"
    # Full async DSN; overrides the host/port/user parts (e.g. sqlite+aiosqlite:// for tests)
    database_dsn: str | None = None

    # Pool (production tuning)
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Workout session
    default_rest_seconds: int = 90
    rest_timer_presets: tuple[int, ...] = (30, 60, 90, 120, 180)
    timer_tick_seconds: float = 1.0
    # IANA zone used to decide the calendar day of a workout (streaks, charts)
    user_timezone: str = "UTC"

    # Billing: entitlement for the local profile until a store integration is wired in
    premium_unlocked: bool = False

    # CORS: comma-separated list of allowed origins in production
    cors_origins: str = ""

    def _build_db_url(self, scheme: str = "postgresql", ssl_query: str = "sslmode=prefer") -> str:
        user = quote_plus(self.database_user)
        password = quote_plus(self.database_password)
        return (
            f"{scheme}://{user}:{password}@{self.database_host}:{self.database_port}"
            f"/{self.database_name}?{ssl_query}"
        )

    @property
    def database_url(self) -> str:
        """Synchronous URL for Alembic and tooling."""
        return self._build_db_url(scheme="postgresql", ssl_query=f"sslmode={self.database_ssl_mode}")

    @property
    def async_database_url(self) -> str:
        """Async URL for FastAPI (asyncpg driver)."""
        if self.database_dsn:
            return self.database_dsn
        return self._build_db_url(scheme="postgresql+asyncpg", ssl_query=f"ssl={self.database_ssl_mode}")

    @property
    def sync_database_url(self) -> str:
        """Blocking-driver URL for migrations, derived from the DSN override when one is set."""
        if not self.database_dsn:
            return self.database_url
        return self.database_dsn.replace("+aiosqlite", "").replace("+asyncpg", "+psycopg2")

    @property
    def is_sqlite(self) -> bool:
        return self.async_database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
