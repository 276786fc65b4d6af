"""Dashboard settings and the file/env loader."""

import json
from pathlib import Path
from typing import Any, Optional

import structlog
import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from nmsdash.core.domain.models import ConfigurationError
from nmsdash.core.ports.outbound.rest_client import RestClientConfig

logger = structlog.get_logger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DashboardSettings(BaseSettings):
    """
    Settings for talking to the monitoring backend.

    Environment variables prefixed with ``NMSDASH_`` override values read
    from a settings file.
    """

    model_config = SettingsConfigDict(env_prefix="NMSDASH_", extra="ignore")

    # Backend
    base_url: str = "http://localhost:8980/opennms"
    username: Optional[str] = None
    password: Optional[str] = None
    timeout: float = Field(30.0, gt=0)
    verify_ssl: bool = True

    # Queries
    default_page_size: int = Field(10, ge=1)

    # Logging
    log_level: str = "WARNING"
    log_json: bool = False

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {v!r}")
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    def rest_client_config(self) -> RestClientConfig:
        """Build the REST client configuration for these settings."""
        config = RestClientConfig(
            base_url=self.base_url,
            timeout=self.timeout,
            verify_ssl=self.verify_ssl,
        )
        if self.username:
            config.auth_type = "basic"
            config.auth_credentials = {
                "username": self.username,
                "password": self.password or "",
            }
        return config


def _read_file(path: Path) -> dict[str, Any]:
    if path.suffix in (".yaml", ".yml"):
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    elif path.suffix == ".json":
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    else:
        raise ConfigurationError(
            f"Unsupported settings file format: {path.suffix}. "
            "Use .yaml, .yml or .json"
        )

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file must contain a mapping: {path}")
    return data


def load_settings(file_path: str | Path | None = None) -> DashboardSettings:
    """
    Load settings from an optional YAML/JSON file plus the environment.

    Args:
        file_path: Settings file; None reads the environment only

    Returns:
        DashboardSettings

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the file format or values are invalid
    """
    values: dict[str, Any] = {}
    if file_path is not None:
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {file_path}")
        values = _read_file(path)
        logger.debug("settings_file_loaded", path=str(path), keys=sorted(values))

    try:
        return DashboardSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
