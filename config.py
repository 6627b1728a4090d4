from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Service identity, reported by the health check
    service_name: str = Field(default="phone-to-timezone", alias="SERVICE_NAME")
    service_version: str = Field(default="1.0.0", alias="SERVICE_VERSION")

    # Zone reported for valid numbers when no guess is possible
    fallback_timezone: str = Field(default="UTC", alias="FALLBACK_TIMEZONE")

    # Seconds, sent as cache-control max-age on every response
    cache_max_age: int = Field(default=300, alias="CACHE_MAX_AGE")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


# Instantiate the settings
settings = Settings()
