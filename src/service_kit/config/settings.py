# Assumptions:
# - Process-wide configuration comes from environment variables (or a .env file)
# - Values are read once and cached for the life of the process
# - Durations are expressed in milliseconds

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide settings shared by the API bootstrapper and the HTTP client"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Environment
    env: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "console"

    # Header names
    correlation_id_header_name: str = "x-correlation-id"
    global_transaction_id_header_name: str = "x-global-k8fdic-transaction-id"

    # Outbound HTTP
    http_retry_count: int = Field(default=0, ge=0)
    http_retry_delay_millis: int = Field(default=2000, ge=0)
    http_timeout_millis: int = Field(default=30000, gt=0)

    # API docs
    ingress_path: str = ""


@lru_cache()
def get_settings() -> Settings:
    """Get application settings singleton"""
    return Settings()
