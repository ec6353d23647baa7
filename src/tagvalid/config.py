"""Configuration management for tagvalid using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import CONFIG_FILENAME, DEFAULT_MAX_DEPTH


class ReportFormat(str, Enum):
    """Report format types."""
    TABLE = "table"
    JSON = "json"
    MARKDOWN = "markdown"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class ValidationConfig(BaseModel):
    """Traversal configuration section."""
    indexed_paths: bool = Field(alias="indexedPaths", default=False)
    max_depth: int = Field(alias="maxDepth", default=DEFAULT_MAX_DEPTH)

    @field_validator("max_depth")
    @classmethod
    def validate_max_depth(cls, v):
        if v < 1:
            raise ValueError("max_depth must be >= 1")
        return v

    model_config = ConfigDict(populate_by_name=True)


class OutputConfig(BaseModel):
    """Report output configuration section."""
    format: ReportFormat = ReportFormat.TABLE

    model_config = ConfigDict(use_enum_values=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(use_enum_values=True)


class TagvalidConfig(BaseModel):
    """Complete tagvalid configuration model."""
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    plugins: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> TagvalidConfig:
    """Settings for a validation run.

    An explicit path that does not exist is not an error: the run simply uses
    defaults, the same as when no ``.tagvalid.json`` is found on the way up
    from the working directory.

    Raises:
        ValueError: If the file is not JSON or its settings are rejected
            (unknown keys, a non-positive ``maxDepth``, an unknown format)
    """
    path = find_config_file() if config_path is None else Path(config_path)
    if path is None or not path.is_file():
        return create_default_config()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {path}: {e}") from e

    try:
        return TagvalidConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Failed to load config from {path}: {e}") from e


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Nearest .tagvalid.json in start_dir (default: cwd) or an ancestor."""
    start = Path(start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def create_default_config() -> TagvalidConfig:
    return TagvalidConfig()
