"""Pydantic configuration models for jot."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class PathsConfig(BaseModel):
    """File paths configuration."""

    repo_path: Path = Path("~/.jot/db")
    log_file: Optional[Path] = None

    @model_validator(mode="after")
    def expand_paths(self):
        """Expand ~ in all paths."""
        self.repo_path = self.repo_path.expanduser()
        if self.log_file is not None:
            self.log_file = self.log_file.expanduser()
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    json_mode: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v


class JotConfig(BaseModel):
    """Main configuration model."""

    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    editor: Optional[str] = None  # None = $EDITOR
    location: Optional[Path] = Field(default=None, exclude=True)

    @classmethod
    def from_dict(cls, data: dict) -> "JotConfig":
        """Create config from dict, accepting the flat `repopath` key of old configs."""
        data = dict(data)
        if "repopath" in data:
            paths = dict(data.get("paths") or {})
            paths.setdefault("repo_path", data.pop("repopath"))
            data["paths"] = paths
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        """Convert to a YAML-friendly dict."""
        return self.model_dump(mode="json", exclude_none=True)
