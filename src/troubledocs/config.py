"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (TROUBLEDOCS__CACHE__TTL_HOURS=6)
  2. troubledocs.yaml       (searched in cwd, then ~/.config/troubledocs/)
  3. Hardcoded defaults

The config file is optional; every field has a default.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from troubledocs import __version__


def _find_config_file() -> str | None:
    """Return the path of the first troubledocs.yaml found, or None."""
    candidates = [
        Path("troubledocs.yaml"),
        Path.home() / ".config" / "troubledocs" / "troubledocs.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ServerSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    transport: Literal["stdio", "http"] = "stdio"
    host: str = "0.0.0.0"
    port: int = 8080


class FetcherSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    timeout_seconds: float = 10.0
    max_redirects: int = Field(default=3, ge=0)
    # Base domains only; subdomains of these are accepted.
    allowed_domains: list[str] = ["amazon.com"]
    user_agent: str = f"troubledocs/{__version__}"


class CacheSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    ttl_hours: float = Field(default=12, gt=0)


class SearchSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    default_max_results: int = Field(default=10, ge=1, le=50)
    max_concurrency: int = Field(default=1, ge=1)


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: TROUBLEDOCS__SERVER__PORT=9090
        env_prefix="TROUBLEDOCS__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    server: ServerSettings = ServerSettings()
    fetcher: FetcherSettings = FetcherSettings()
    cache: CacheSettings = CacheSettings()
    search: SearchSettings = SearchSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
