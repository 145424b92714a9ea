from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

UPLOAD_FIELD = "file"
DEFAULT_FOLDER = "inschrijvingen"
DEFAULT_PORT = 3000


class Settings(BaseSettings):
    """
    Process-wide configuration, read once at startup from the environment
    (and a local .env file when present).

    Nothing is validated eagerly: a missing database parameter surfaces on
    the first query, missing Cloudinary credentials on the first upload.
    """

    # PostgreSQL connection parts (pg_user, pg_host, ...)
    pg_user: Optional[str] = None
    pg_host: str = "localhost"
    pg_database: Optional[str] = None
    pg_password: Optional[str] = None
    pg_port: int = 5432
    database_url: Optional[str] = Field(default=None)  # overrides the pg_* parts
    db_echo: bool = False

    # Cloudinary
    cloudinary_cloud_name: Optional[str] = None
    cloudinary_api_key: Optional[str] = None
    cloudinary_api_secret: Optional[str] = None
    cloudinary_folder: str = DEFAULT_FOLDER

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        if self.database_url:
            url = self.database_url
            # normalize legacy postgres:// to the async driver url
            if url.startswith("postgres://"):
                url = url.replace("postgres://", "postgresql+asyncpg://", 1)
            return url
        return URL.create(
            "postgresql+asyncpg",
            username=self.pg_user,
            password=self.pg_password,
            host=self.pg_host,
            port=self.pg_port,
            database=self.pg_database,
        ).render_as_string(hide_password=False)


@lru_cache
def get_settings() -> Settings:
    return Settings()
