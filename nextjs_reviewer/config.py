"""Reviewer configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseSettings):
    """Settings loaded from NEXTJS_REVIEW_* environment variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="NEXTJS_REVIEW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    base_branch: str = "develop"
    output_dir: str = "result"
    max_workers: int = 1
    log_level: str = "INFO"

    @field_validator("base_branch", mode="after")
    @classmethod
    def validate_base_branch(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("base_branch must not be empty")
        return v

    @field_validator("max_workers", mode="after")
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_workers must be at least 1")
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
