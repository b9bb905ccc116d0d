"""Configuration for the line-history engine."""

import logging
import os

from pydantic import BaseModel, Field, field_validator


class EngineConfig(BaseModel):
    """Settings shared by the git controller and the history engine."""

    git_binary: str = Field(default="git", description="git executable to invoke")
    command_timeout_seconds: float = Field(default=30.0, description="Timeout applied to every git invocation")
    max_workers: int = Field(default=4, description="Maximum number of commits resolved in parallel")
    log_level: str = Field(default="INFO", description="Logging level name")

    @field_validator("git_binary")
    @classmethod
    def validate_git_binary(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("git_binary must not be empty")
        return v.strip()

    @field_validator("command_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("command_timeout_seconds must be positive")
        return v

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        if not 1 <= v <= 32:
            raise ValueError("max_workers must be between 1 and 32")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid log level: {v}")
        return level

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create configuration from ``LINELORE_*`` environment variables."""
        values = {}
        env_map = {
            "git_binary": "LINELORE_GIT_BINARY",
            "command_timeout_seconds": "LINELORE_COMMAND_TIMEOUT",
            "max_workers": "LINELORE_MAX_WORKERS",
            "log_level": "LINELORE_LOG_LEVEL",
        }
        for field_name, env_var in env_map.items():
            value = os.getenv(env_var)
            if value is not None and value != "":
                values[field_name] = value
        return cls(**values)
