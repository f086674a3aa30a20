"""Configuration for the World Forge CLI.

Two sources are involved:

* ``Settings`` - process settings read from the environment (and ``.env``)
  with pydantic-settings: API URL, timeouts, logging.
* ``GlobalConfig`` - the selected organization/project and credentials that
  ``world`` login commands write to ``~/.worldcli/config.json``. This tool
  only reads that file.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from forge_status.exceptions import ConfigError

GLOBAL_CONFIG_FILE = "config.json"


class Settings(BaseSettings):
    """World Forge CLI settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    forge_url: str = Field(
        default="http://localhost:8001",
        alias="WORLD_FORGE_URL",
        description="Base URL of the Forge API",
    )
    config_dir: Path = Field(
        default=Path.home() / ".worldcli",
        alias="WORLD_CLI_CONFIG_DIR",
        description="Directory holding the global CLI config",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP request timeout in seconds",
    )

    # Logging configuration
    service_name: str = Field(
        default="world-forge",
        description="Service name for structured logging",
    )
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper_v


class Credential(BaseModel):
    token: str = ""
    id: str = ""
    name: str = ""


class GlobalConfig(BaseModel):
    """Selected organization/project and login credential."""

    organization_id: str = ""
    project_id: str = ""
    credential: Credential = Field(default_factory=Credential)


def load_global_config(config_dir: Path) -> GlobalConfig:
    """Read the global CLI config from ``config_dir``.

    Raises:
        ConfigError: If the file is missing or is not a valid config.
    """
    config_file = Path(config_dir) / GLOBAL_CONFIG_FILE
    try:
        content = config_file.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            f"Failed to read global config {config_file}: {e.strerror or e}. "
            "Run 'world login' first."
        ) from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"Failed to parse global config {config_file}: {e}") from e

    try:
        return GlobalConfig.model_validate_json(content)
    except ValidationError as e:
        raise ConfigError(f"Failed to parse global config {config_file}: {e}") from e


def get_settings() -> Settings:
    return Settings()
