"""Runtime configuration for the availability runner, sourced from environment variables."""

from typing import Optional

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from generators.data_factory import DEFAULT_MODEL


class Settings(BaseSettings):
    """Environment-driven settings (prefix AVAILABILITY_, optional .env file)."""

    google_api_key: Optional[SecretStr] = Field(
        None, validation_alias=AliasChoices("AVAILABILITY_GOOGLE_API_KEY", "GOOGLE_API_KEY")
    )
    gemini_model: str = DEFAULT_MODEL
    cache_filename: str = "catalog_cache.json"
    use_cache: bool = True
    export_filename: str = "availability_dashboard.json"
    timezone: Optional[str] = None
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="AVAILABILITY_",
        env_file=(".env",),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def normalise_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level '{value}'")
        return value

    @property
    def api_key(self) -> Optional[str]:
        return self.google_api_key.get_secret_value() if self.google_api_key else None
