"""Application settings loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "SVCRECOVERY_"}

    sc_path: str = Field(default="sc.exe", description="Service-control executable")
    db_path: Path = Field(
        default=Path.home() / ".svcrecovery" / "audit.db",
        description="SQLite audit database path",
    )
    dry_run: bool = Field(default=False, description="Global dry-run mode")
    log_level: str = Field(default="INFO", description="Logging level")
    require_confirmation: bool = Field(
        default=True, description="Ask before changing recovery settings"
    )
