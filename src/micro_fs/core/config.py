"""Configuration management for micro-fs."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "INFO"
    otel_enabled: bool = False
    otel_service_name: str = "micro-fs"

    default_dir_mode: int = 0o777
    encoding: str = "utf-8"
    max_concurrency: int = Field(default=16, ge=1)

    model_config = {
        "env_prefix": "MICRO_FS_",
        "case_sensitive": False,
    }


settings = Settings()
