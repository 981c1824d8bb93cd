# pxshot/config.py

from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_BASE_URL = "https://api.pxshot.com"


class Settings(BaseSettings):
    """Client settings loaded from PXSHOT_* environment variables."""

    # Credentials
    api_key: Optional[str] = Field(default=None)

    # Endpoint
    base_url: str = Field(default=DEFAULT_BASE_URL)

    # Timeouts (seconds)
    timeout: float = Field(default=30.0, gt=0)
    connect_timeout: float = Field(default=10.0, gt=0)

    # Logging
    debug: bool = Field(default=False)
    log_level: Optional[str] = Field(default=None)

    user_agent: Optional[str] = Field(default=None)

    @field_validator('base_url', mode='before')
    @classmethod
    def strip_trailing_slash(cls, v):
        """Normalize the base URL so endpoint paths can be appended."""
        if isinstance(v, str):
            return v.strip().rstrip('/')
        return v

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str) and v.strip():
            return v.strip().upper()
        return None

    model_config = {
        "env_prefix": "PXSHOT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore"  # Ignore unknown environment variables
    }


# Global settings instance
settings = Settings()
