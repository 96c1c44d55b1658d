"""
Application configuration using Pydantic Settings.

All settings are loaded from environment variables or .env file.
The aggregated Settings object is handed to the app factory and the
lookup service rather than read from module state inside them.
"""

from pathlib import Path
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Sponsor register database connection settings."""

    url: str = "sqlite:///./data/sponsorscope.db"

    model_config = SettingsConfigDict(env_prefix="DATABASE_")


class APISettings(BaseSettings):
    """FastAPI server settings."""

    host: str = "0.0.0.0"
    port: int = 3000
    reload: bool = False
    cors_origins: Annotated[list[str], NoDecode] = ["*"]

    model_config = SettingsConfigDict(env_prefix="API_")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_origins(cls, v: str | list[str] | None) -> list[str]:
        if v is None or v == "":
            return ["*"]
        if isinstance(v, str):
            return [o.strip() for o in v.split(",") if o.strip()]
        return v


class RegisterSettings(BaseSettings):
    """Labels and limits describing the published sponsor register."""

    data_source: str = "UK Government Licensed Sponsors Register"
    verified_on: str = "2025-11-07"
    data_freshness: str = "November 7, 2025"
    accuracy: str = "100% official data"
    search_limit: int = 10

    model_config = SettingsConfigDict(env_prefix="REGISTER_")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: str = "INFO"
    file: str = "logs/sponsorscope.log"

    model_config = SettingsConfigDict(env_prefix="LOG_")


class Settings(BaseSettings):
    """Main application settings — aggregates all sub-settings."""

    database: DatabaseSettings = DatabaseSettings()
    api: APISettings = APISettings()
    sponsor_register: RegisterSettings = RegisterSettings()
    logging: LoggingSettings = LoggingSettings()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def setup(self) -> None:
        """Initialize application: create the log and SQLite data directories."""
        Path(self.logging.file).parent.mkdir(parents=True, exist_ok=True)
        if self.database.url.startswith("sqlite:///") and ":memory:" not in self.database.url:
            db_path = Path(self.database.url.removeprefix("sqlite:///"))
            db_path.parent.mkdir(parents=True, exist_ok=True)


# Default settings instance, used when nothing is passed explicitly
settings = Settings()
