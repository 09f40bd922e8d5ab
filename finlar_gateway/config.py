"""Configuration management using Pydantic Settings"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Billing rules
    default_closing_day: int = Field(20, ge=1, le=28)
    unclassified_category: str = "unclassified"

    # External Services
    storage_api_base: str = "http://localhost:8001"

    # Service
    service_name: str = "finlar-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0


settings = Settings()
