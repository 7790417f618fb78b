"""Generation options model."""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field, ValidationError, validator

from podunit.errors import InvalidOptionError


# Restart policies accepted by systemd's Restart= directive
RESTART_POLICIES = (
    "no",
    "on-success",
    "on-failure",
    "on-abnormal",
    "on-watchdog",
    "on-abort",
    "always",
)
DEFAULT_RESTART_POLICY = "on-failure"


class GenerationOptions(BaseModel):
    """Options for one generation run."""
    recreate: bool = Field(default=False, description="Recreate the resource on start (--new)")
    use_name: bool = Field(default=False, description="Use names instead of IDs")
    files: bool = Field(default=False, description="Write unit files instead of printing")
    format: Literal["text", "json"] = Field(default="text")
    no_header: bool = Field(default=False)
    template: bool = Field(default=False, description="Generate template units")
    container_prefix: str = Field(default="container")
    pod_prefix: str = Field(default="pod")
    separator: str = Field(default="-")
    stop_timeout: Optional[int] = None
    start_timeout: Optional[int] = None
    restart_policy: Optional[str] = None
    restart_sec: Optional[int] = None
    wants: List[str] = Field(default_factory=list)
    after: List[str] = Field(default_factory=list)
    requires: List[str] = Field(default_factory=list)
    env: List[str] = Field(default_factory=list)
    executable: str = Field(default="/usr/bin/podman")
    output_dir: Optional[str] = None

    class Config:
        """Pydantic config."""
        frozen = True
        extra = "forbid"

    @validator("stop_timeout", "start_timeout")
    def validate_timeout(cls, v):
        """Reject negative timeouts."""
        if v is not None and v < 0:
            raise ValueError(f"{v} is not a valid timeout: must be 0 or greater")
        return v

    @validator("restart_sec")
    def validate_restart_sec(cls, v):
        """Reject negative restart delays."""
        if v is not None and v < 0:
            raise ValueError(f"{v} is not a valid restart delay: must be 0 or greater")
        return v

    @validator("restart_policy")
    def validate_restart_policy(cls, v):
        """Validate restart policy."""
        if v is not None and v not in RESTART_POLICIES:
            raise ValueError(f"{v} is not a valid restart policy")
        return v

    @validator("wants", "after", "requires")
    def dedupe_dependencies(cls, v):
        """Drop repeated dependencies, keeping first-seen order."""
        return list(dict.fromkeys(v))

    @classmethod
    def build(cls, **values) -> "GenerationOptions":
        """Create options, reporting invalid values as InvalidOptionError."""
        try:
            return cls(**values)
        except ValidationError as e:
            raise InvalidOptionError(
                "; ".join(_error_message(error) for error in e.errors())
            ) from e


def _error_message(error) -> str:
    msg = error["msg"]
    prefix = "Value error, "
    if msg.startswith(prefix):
        return msg[len(prefix):]
    field = ".".join(str(part) for part in error.get("loc", ()))
    return f"invalid value for {field}: {msg}"
