"""Application configuration pulled from environment variables via pydantic."""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger, mask_url
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the ride-safety service."""
    model_config = SettingsConfigDict(env_prefix="METEORIDE_", env_file=".env", extra="ignore")

    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    redis_url: str | None = None
    cache_ttl_seconds: int = Field(default=600, gt=0)
    geohash_precision: int = Field(default=6, ge=1, le=12)

    weather_provider: str = "weatherapi"  # options: weatherapi, open_meteo
    weather_api_key: str | None = None
    weather_base_url: str = "https://api.weatherapi.com/v1"
    weather_timeout_seconds: float = 10.0
    weather_retries: int = 2

    @field_validator("weather_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")


settings = Settings()


if __name__ == "__main__":
    logger.logger.setLevel("DEBUG")
    dumped = settings.model_dump(exclude={"weather_api_key"})
    if dumped.get("redis_url"):
        dumped["redis_url"] = mask_url(dumped["redis_url"])
    logger.debug(f"Loaded settings: {dumped}")
