import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from xrefkit.core.types import DEFAULT_CONTENT_PIPELINE

CONFIG_FILENAME = ".xrefkit.toml"


def _deep_merge(destination: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and key in destination and isinstance(destination[key], Mapping):
            destination[key] = _deep_merge(dict(destination.get(key, {})), dict(value))
        else:
            destination[key] = value
    return destination


class ResolverSettings(BaseModel):
    """Configuration for xref resolution."""

    content_pipeline: str = Field(
        default=DEFAULT_CONTENT_PIPELINE,
        description="Name of the pipeline whose outputs are searched for xrefs",
    )


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Root log level")
    log_to_file: bool = Field(default=False, description="Also write logs to a file")
    log_file: Path | None = Field(
        default=None,
        description="Log file path (defaults to the XDG logs directory when log_to_file is set)",
    )


class XrefkitConfig(BaseSettings):
    """Root configuration for xrefkit.

    Supports environment variable overrides with the pattern:
    XREFKIT_SECTION__KEY (e.g., XREFKIT_RESOLVER__CONTENT_PIPELINE)
    """

    resolver: ResolverSettings = Field(default_factory=ResolverSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="XREFKIT_",
        env_nested_delimiter="__",
    )

    @classmethod
    def load(cls, site_root: Path | None = None) -> "XrefkitConfig":
        """Loads configuration from .xrefkit.toml and environment variables.

        Priority (highest to lowest):
        1. Environment variables (XREFKIT_SECTION__KEY)
        2. Config file (.xrefkit.toml in site_root)
        3. Defaults
        """
        root_path = site_root if site_root is not None else Path.cwd()
        config_file = root_path / CONFIG_FILENAME

        file_settings: dict[str, Any] = {}
        if config_file.is_file():
            with config_file.open("rb") as f:
                file_settings = tomllib.load(f)

        # Only values actually set through the environment survive exclude_unset
        env_settings = cls().model_dump(exclude_unset=True)

        merged_config = _deep_merge(file_settings, env_settings)
        return cls.model_validate(merged_config)
