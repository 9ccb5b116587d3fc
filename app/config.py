"""Application configuration loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All config from environment. Never hardcode secrets."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # App
    app_env: str = Field(default="development")
    log_level: str = Field(default="INFO")
    allowed_hosts: str = Field(default="http://localhost:3000,http://localhost:8000")

    # API authentication key for admin endpoints (set in .env)
    api_key: str = Field(default="")

    # Calendar
    calendar_cache_size: int = Field(default=128, ge=1)

    # Performance report
    performance_periods: int = Field(default=12, ge=1)


settings = Settings()
