"""Smart Set configuration settings."""

from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from smartset.exceptions import ConfigurationError, check_config_keys


class SmartSetSettings(BaseSettings):
    """Smart Set configuration settings.

    Settings are loaded with the following precedence (highest to lowest):
    1. CLI arguments (when provided via command flags)
       Example: smartset serve --port 9000

    2. Config file values (YAML, TOML, or JSON)
       Example: smartset --config smartset.yaml status

    3. Environment variables (prefixed with SMARTSET_)
       Example: export SMARTSET_DATABASE_PATH=/data/smartset.db

    4. .env file (in current directory)
       Example: SMARTSET_LOG_LEVEL=DEBUG in .env file

    5. Default values (defined in field declarations below)
    """

    model_config = SettingsConfigDict(
        env_prefix="SMARTSET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage settings
    database_path: Path = Field(
        default_factory=lambda: Path.cwd() / "smartset.db",
        description="Path to the SQLite file holding projects, scenes and boards",
    )
    database_timeout: float = Field(
        default=30.0,
        description="SQLite connection timeout in seconds",
        ge=0.1,
    )

    # Application settings
    app_name: str = Field(
        default="smartset",
        description="Application name",
    )
    environment: str = Field(
        default="development",
        description="Deployment environment (development, production, test)",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    api_host: str = Field(
        default="127.0.0.1",
        description="Host the REST API binds to",
    )
    api_port: int = Field(
        default=8000,
        description="Port the REST API listens on",
        ge=1,
        le=65535,
    )
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the REST API",
    )

    # Logging settings
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        pattern="^(?i)(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(
        default="console",
        description="Log output format (console, json, structured)",
        pattern="^(?i)(console|json|structured)$",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    # LLM settings
    llm_api_key: str | None = Field(
        default=None,
        description="API key for the generative language service",
        validation_alias=AliasChoices(
            "llm_api_key",
            "SMARTSET_LLM_API_KEY",
            "GEMINI_API_KEY",
            "API_KEY",
        ),
    )
    llm_endpoint: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the generative language REST API",
    )
    llm_primary_model: str = Field(
        default="gemini-2.0-flash",
        description="Model tried first for every AI call",
    )
    llm_fallback_models: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["gemini-1.5-flash"],
        description="Models tried in order when the primary model fails",
    )
    llm_timeout: float = Field(
        default=120.0,
        description="HTTP timeout in seconds for a single model call",
        ge=1.0,
    )
    llm_temperature: float = Field(
        default=0.2,
        description="Sampling temperature for extraction calls",
        ge=0.0,
        le=2.0,
    )

    # Breakdown job settings
    job_ttl_seconds: int = Field(
        default=3600,
        description="Seconds a finished or abandoned breakdown job is kept",
        ge=1,
    )
    job_poll_interval: float = Field(
        default=2.0,
        description="Seconds between status polls while waiting for a job",
        gt=0.0,
    )
    job_raw_preview_chars: int = Field(
        default=1500,
        description="Characters of raw model output kept on a job for debugging",
        ge=0,
    )

    @field_validator("database_path", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        """Expand environment variables and user home in path settings."""
        if v is None:
            return None
        if isinstance(v, str):
            expanded = os.path.expandvars(v)
            return Path(expanded).expanduser().resolve()
        if isinstance(v, Path):
            return v.resolve()
        raise ValueError(
            f"Path fields must be str or Path, got {type(v).__name__}: {v!r}"
        )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        """Normalize log level to uppercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.upper()
        raise ValueError(f"log_level must be a string, got {type(v).__name__}")

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, v: Any) -> str:
        """Normalize log format to lowercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.lower()
        raise ValueError(f"log_format must be a string, got {type(v).__name__}")

    @field_validator("llm_fallback_models", "cors_origins", mode="before")
    @classmethod
    def split_comma_list(cls, v: Any) -> Any:
        """Accept JSON arrays or comma separated strings for list settings."""
        if isinstance(v, str):
            if v.strip().startswith("["):
                return json.loads(v)
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @property
    def model_chain(self) -> list[str]:
        """Primary model followed by the distinct fallback models."""
        chain = [self.llm_primary_model]
        for model in self.llm_fallback_models:
            if model not in chain:
                chain.append(model)
        return chain

    @classmethod
    def from_env(cls) -> SmartSetSettings:
        """Create settings from environment variables."""
        return cls()

    @classmethod
    def from_file(cls, config_path: Path | str) -> SmartSetSettings:
        """Load settings from a configuration file.

        Args:
            config_path: Path to configuration file (YAML, TOML, or JSON).

        Returns:
            Settings loaded from the file.

        Raises:
            ConfigurationError: If file format is not supported.
            FileNotFoundError: If config file doesn't exist.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()

        if suffix in {".yml", ".yaml"}:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        elif suffix == ".toml":
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        elif suffix == ".json":
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise ConfigurationError(
                message=f"Unsupported configuration file format: {suffix}",
                hint="Use one of the supported formats: .yml, .yaml, .toml, or .json",
                details={
                    "file": str(config_path),
                    "detected_format": suffix,
                    "supported_formats": [".yml", ".yaml", ".toml", ".json"],
                },
            )

        check_config_keys(data)

        return cls(**data)

    @classmethod
    def from_multiple_sources(
        cls,
        config_files: list[Path | str] | None = None,
        cli_args: dict[str, Any] | None = None,
    ) -> SmartSetSettings:
        """Load settings with proper precedence from multiple sources.

        Args:
            config_files: Config files to load (later files override earlier).
            cli_args: Dictionary of CLI arguments, None values are ignored.

        Returns:
            Merged settings from all sources.
        """
        data: dict[str, Any] = {}

        for config_file in config_files or []:
            try:
                data.update(cls.from_file(config_file).model_dump())
            except FileNotFoundError:
                from smartset.config.logging import get_logger as _get_logger

                _get_logger("smartset.config.settings").warning(
                    "Configuration file not found, using defaults",
                    config_file=str(config_file),
                )

        settings = cls(**data)

        if cli_args:
            cli_data = {k: v for k, v in cli_args.items() if v is not None}
            if cli_data:
                updated_data = settings.model_dump()
                updated_data.update(cli_data)
                settings = cls(**updated_data)

        return settings


# Global settings instance
_settings: SmartSetSettings | None = None


def _get_config_paths() -> list[Path | str]:
    """Get the existing config files in priority order."""
    potential_paths = [
        Path.home() / ".config" / "smartset" / "config.yaml",
        Path.home() / ".config" / "smartset" / "config.toml",
        Path.cwd() / "smartset.yaml",
        Path.cwd() / "smartset.toml",
        Path.cwd() / "smartset.json",
    ]

    existing_paths: list[Path | str] = []
    for path in potential_paths:
        try:
            if path.is_file():
                existing_paths.append(path)
        except OSError:
            continue
    return existing_paths


def get_settings() -> SmartSetSettings:
    """Get the global settings instance.

    Returns:
        Global SmartSetSettings instance.
    """
    global _settings
    if _settings is None:
        config_paths = _get_config_paths()
        if config_paths:
            _settings = SmartSetSettings.from_multiple_sources(
                config_files=config_paths
            )
        else:
            _settings = SmartSetSettings.from_env()
    return _settings


def set_settings(settings: SmartSetSettings) -> None:
    """Set the global settings instance.

    Args:
        settings: Settings instance to use globally.
    """
    global _settings
    _settings = settings


def clear_settings_cache() -> None:
    """Force get_settings() to re-read environment and config files."""
    global _settings
    _settings = None


def reset_settings() -> None:
    """Reset the global settings instance."""
    clear_settings_cache()


def get_settings_for_cli(
    config_file: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> SmartSetSettings:
    """Get settings for CLI commands with consistent precedence.

    Args:
        config_file: Optional specific config file to load. If not provided,
                    uses standard config locations.
        cli_overrides: Dictionary of CLI argument overrides (e.g., database_path).
                      Only non-None values are applied.

    Returns:
        SmartSetSettings instance with all sources merged.

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist.
    """
    if config_file:
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        return SmartSetSettings.from_multiple_sources(
            config_files=[config_file],
            cli_args=cli_overrides,
        )

    settings = get_settings()
    if cli_overrides:
        filtered = {k: v for k, v in cli_overrides.items() if v is not None}
        if filtered:
            data = settings.model_dump()
            data.update(filtered)
            settings = SmartSetSettings(**data)
    return settings
