"""Configuration models."""

from typing import Literal, Optional
from pydantic import BaseModel, Field, validator


class DefaultsConfig(BaseModel):
    """Default generation options, overridden by command-line flags."""
    container_prefix: str = Field(default="container")
    pod_prefix: str = Field(default="pod")
    separator: str = Field(default="-")
    restart_policy: Optional[str] = None


class PodunitConfig(BaseModel):
    """Main configuration model."""
    executable: str = Field(default="/usr/bin/podman")
    backend: Literal["cli", "api"] = Field(default="cli")
    socket_url: str = Field(default="unix:///run/podman/podman.sock")
    output_dir: Optional[str] = None
    log_level: str = Field(default="WARNING")
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)

    @validator("log_level")
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    class Config:
        """Pydantic config."""
        extra = "ignore"
