"""Pydantic models for proclimits configuration."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: Literal["json", "text"] = "text"
    output: Literal["stdout", "stderr"] = "stderr"


class ProcLimitsConfig(BaseModel):
    """Complete proclimits configuration."""

    proc_root: Path = Field(default=Path("/proc"), description="Mount point of procfs")
    buffer_size: int = Field(
        default=4096,
        ge=256,
        le=1048576,
        description="Capacity in bytes of the buffer a pseudo-file is read into",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("proc_root")
    @classmethod
    def proc_root_is_absolute(cls, v: Path) -> Path:
        """Validate procfs root is an absolute path."""
        if not v.is_absolute():
            raise ValueError("proc_root must be an absolute path")
        return v
