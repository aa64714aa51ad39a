"""Config file."""
from pathlib import Path
from urllib.parse import quote_plus

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_REFRESH_PRICE_INTERVAL_MS = 10_000


class Settings(BaseSettings):
    """Application settings."""

    # PRICES
    update_every_ms: int = Field(
        DEFAULT_REFRESH_PRICE_INTERVAL_MS, alias="PRICE_UPDATE_EVERY_MS", gt=0
    )
    storage_dir: Path = Field(Path(".var"), alias="STORAGE_DIR")
    price_store_backend: str = Field("file", alias="PRICE_STORE_BACKEND")
    inclusive_block_match: bool = Field(False, alias="PRICE_INCLUSIVE_BLOCK_MATCH")

    # CHAINS
    chains_file: Path = Field(Path("chains.json"), alias="CHAINS_FILE")

    # DATABASE (only for the sqlalchemy price store backend)
    postgres_user: str | None = Field(None, alias="POSTGRES_USER")
    postgres_password: SecretStr | None = Field(None, alias="POSTGRES_PASSWORD")
    postgres_server: str | None = Field(None, alias="POSTGRES_SERVER")
    postgres_port: int = Field(5432, alias="POSTGRES_PORT")
    postgres_db: str | None = Field(None, alias="POSTGRES_DB")
    database_url: str | None = Field(None, alias="DATABASE_URL")

    @model_validator(mode="after")
    def assemble_db_url(self) -> "Settings":
        if self.database_url:
            return self

        if self.postgres_user and self.postgres_server and self.postgres_db:
            user = quote_plus(self.postgres_user)
            password = quote_plus(
                self.postgres_password.get_secret_value() if self.postgres_password else ""
            )
            host = self.postgres_server
            port = self.postgres_port
            db = self.postgres_db

            self.database_url = f"postgresql+asyncpg://{user}:{password}@{host}:{port}/{db}"

        return self

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


settings: Settings = Settings()
