import os
from functools import lru_cache
from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RECOVERYTRACK_",
        env_file=os.getenv("ENV_FILE", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    session_key: str = "default"
    session_backend: Literal["memory", "dynamo"] = "memory"
    dynamo_endpoint: str = "http://localhost:8000"
    dynamo_region: str = "us-east-1"
    session_table: str = "Sessions"
    narrative_enabled: bool = False
    narrative_model_id: str = "us.amazon.nova-2-lite-v1:0"
    narrative_region: str = "us-east-1"
    narrative_temperature: float = Field(default=0.3, ge=0, le=1)


@lru_cache
def get_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid RecoveryTrack configuration: {exc}") from exc
