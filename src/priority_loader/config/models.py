from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from priority_loader.core.models import PriorityMode


class FileRotationSettings(BaseModel):
    """
    Date-based rotation settings (daily).

    This maps cleanly to Python's standard library TimedRotatingFileHandler behavior.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    backup_count: int = 5


class FileLoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = "data/logs/priority-loader.log"
    rotation: FileRotationSettings = Field(default_factory=FileRotationSettings)


class LoggingSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    level: str = "INFO"
    file: FileLoggingSettings = Field(default_factory=FileLoggingSettings)


class LoaderSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    # Remote origin; the fetch URL is origin_base_url + key + ".json"
    origin_base_url: Optional[str] = None

    # Bundled defaults, resolved as assets_path/key.json
    assets_path: str = "assets/translations"

    # Cache root; falls back to the system temporary directory
    cache_dir: Optional[str] = None

    timeout_seconds: float = Field(default=30, gt=0)
    local_cache_duration_seconds: float = Field(default=12 * 60 * 60, ge=0)
    priority_load_type: PriorityMode = PriorityMode.CACHE

    # When the origin file was last published; overrides the cache duration
    network_file_creation_date: Optional[datetime] = None

    @property
    def timeout(self) -> timedelta:
        return timedelta(seconds=self.timeout_seconds)

    @property
    def local_cache_duration(self) -> timedelta:
        return timedelta(seconds=self.local_cache_duration_seconds)


class AppConfig(BaseModel):
    """Effective runtime configuration after applying all precedence rules."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    loader: LoaderSettings = Field(default_factory=LoaderSettings)


@dataclass(frozen=True, slots=True)
class ConfigLoadRequest:
    """
    Optional inputs for a configuration loader.

    Implementations may use these to control where configuration is read from.
    """

    yaml_path: str = "data/config/config.yaml"
    env_prefix: str = "APP__"
    dotenv_path: Optional[str] = ".env"
