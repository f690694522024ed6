"""Configuration management for shopaction using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_FILE_NAME = ".shopaction.json"


class OutputFormat(str, Enum):
    """Output format types."""
    TABLE = "table"
    JSON = "json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"

    def to_logging_level(self) -> int:
        return {
            LogLevel.ERROR: logging.ERROR,
            LogLevel.WARN: logging.WARNING,
            LogLevel.INFO: logging.INFO,
            LogLevel.DEBUG: logging.DEBUG,
        }[self]


class OutputConfig(BaseModel):
    """Output configuration section."""
    format: OutputFormat = OutputFormat.TABLE
    errors_dir: str = Field(alias="errorsDir", default=".shopaction/_errors")
    flush_errors: bool = Field(alias="flushErrors", default=True)

    @field_validator("errors_dir")
    @classmethod
    def validate_errors_dir(cls, v):
        if not v.strip():
            raise ValueError("errors_dir must not be empty")
        return v

    model_config = ConfigDict(populate_by_name=True)


class InputConfig(BaseModel):
    """Input configuration section."""
    jsonl: bool = False


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN


class ShopActionConfig(BaseModel):
    """Complete shopaction configuration model."""
    output: OutputConfig = Field(default_factory=OutputConfig)
    input: InputConfig = Field(default_factory=InputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> ShopActionConfig:
    """Load configuration, falling back to defaults when no file is found.

    Args:
        config_path: Configuration file. If None, the nearest .shopaction.json
            in the current directory or its parents is used

    Raises:
        ValueError: If the file cannot be read, is not JSON, or does not
            describe a valid configuration
    """
    path = find_config_file() if config_path is None else Path(config_path)
    if path is None or not path.exists():
        return create_default_config()

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ValueError(f"Cannot read config file {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {path}: {e}") from e

    try:
        return ShopActionConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Failed to load config from {path}: {e}") from e


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return the nearest .shopaction.json at or above start_dir (default: cwd)."""
    start = Path(start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.exists():
            return candidate
    return None


def create_default_config() -> ShopActionConfig:
    """Create default configuration."""
    return ShopActionConfig()
