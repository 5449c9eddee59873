"""
ledgerbench - Configuration
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "ledgerbench"
    VERSION: str = "0.1.0"
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Digest
    DIGEST_ALGORITHM: str = "sha256"
    DIGEST_LENGTH: int = Field(default=32, gt=0)

    # Benchmarks
    BENCH_COUNT: int = Field(default=1_000_000, ge=0)
    BENCH_KEY_LENGTH: int = Field(default=20, gt=0)
    BENCH_VALUE_LENGTH: int = Field(default=4, gt=0)
    BENCH_SEED: Optional[int] = None

    # Storage
    STORAGE_URL: str = "sqlite:////tmp/storage.db"

    # Metrics
    METRICS_ENABLED: bool = True
    METRICS_PORT: Optional[int] = None


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
