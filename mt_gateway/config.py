"""Configuration management using Pydantic Settings"""

from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Ledger store
    database_url: str = "sqlite:///./mt_ledger.db"
    ledger_backend: Literal["sql", "http"] = "sql"
    ledger_store_id: str = "mt-ledger"  # Backing store instance used for every gateway call
    ledger_api_base: str = "http://localhost:8003"

    # Service
    service_name: str = "mt-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0


settings = Settings()
