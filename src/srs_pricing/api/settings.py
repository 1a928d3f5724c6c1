"""Service settings — environment variables (or .env) via Pydantic Settings."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    """Settings for the state / quote service."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    host: str = "0.0.0.0"
    port: int = 3000
    db_path: Path = Path("data") / "srs.db"
    state_path: Path | None = Field(
        default=None, description="JSON state file. Defaults to state.json beside db_path.",
    )
    store_backend: Literal["auto", "sqlite", "json"] = "auto"
    lock_password: str = "fluxmargins"
    config_path: Path | None = Field(
        default=None, description="Optional YAML EngineConfig used as the quote baseline",
    )
    log_level: str = "INFO"

    @property
    def data_dir(self) -> Path:
        return self.db_path.parent

    @property
    def resolved_state_path(self) -> Path:
        return self.state_path or self.data_dir / "state.json"


@lru_cache()
def get_settings() -> ServiceSettings:
    return ServiceSettings()
