from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url


def _strip_concatenated_env(value: str | None) -> str | None:
    # A missing newline in .env can glue "NODE_ENV=..." onto the previous value.
    if value is None:
        return None
    text = str(value).strip()
    index = text.find("NODE_ENV=")
    if index != -1:
        text = text[:index]
    return text.strip() or None


class Settings(BaseSettings):
    app_name: str = "Hotel Outreach API"
    app_env: str = "local"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    database_url: str | None = None
    db_host: str | None = None
    db_port: int = 5432
    db_name: str | None = None
    db_user: str | None = None
    db_password: str | None = None
    db_pool_size: int = 20
    db_connect_timeout_seconds: int = 2
    db_pool_recycle_seconds: int = 30
    default_page_size: int = 10
    max_page_size: int = 200
    jwt_secret: str = "replace-me"
    jwt_algorithm: str = "HS256"
    metrics_enabled: bool = False
    otel_enabled: bool = False
    seed_reference_data: bool = False

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    @field_validator("database_url", "db_host", "db_name", "db_user", "db_password", mode="before")
    @classmethod
    def _sanitize(cls, value: str | None) -> str | None:
        return _strip_concatenated_env(value)

    @property
    def has_db_params(self) -> bool:
        return bool(self.db_host or self.db_user)

    @property
    def sqlalchemy_url(self) -> URL:
        if self.database_url:
            url = make_url(self.database_url)
            if url.drivername in {"postgres", "postgresql"}:
                url = url.set(drivername="postgresql+psycopg")
            return url
        return URL.create(
            "postgresql+psycopg",
            username=self.db_user or "postgres",
            password=self.db_password or None,
            host=self.db_host or "localhost",
            port=self.db_port,
            database=self.db_name or "marketing_db",
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
