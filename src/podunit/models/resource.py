"""Container and pod models as reported by the runtime."""

import re
from datetime import datetime, timezone
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, validator


# Runtimes report up to nanoseconds; fromisoformat wants six digits
_FRACTION = re.compile(r"\.(\d+)")


class ResourceRef(BaseModel):
    """A container or pod to generate units for."""
    kind: Literal["container", "pod"] = Field(..., description="Resource kind")
    id: str = Field(..., description="Full resource ID")
    name: str = Field(..., description="Display name")
    pod_id: Optional[str] = Field(None, description="Owning pod ID of a container")
    stop_timeout: Optional[int] = Field(None, description="Configured stop timeout in seconds")
    create_command: List[str] = Field(default_factory=list)
    run_root: str = Field(default="/run/containers/storage")
    pid_file: Optional[str] = Field(None, description="conmon PID file")
    restart_policy: Optional[str] = None
    created: Optional[datetime] = Field(None, description="Creation time, always timezone-aware")

    # Pods only
    infra: Optional["ResourceRef"] = None
    containers: List["ResourceRef"] = Field(default_factory=list)

    class Config:
        """Pydantic config."""
        frozen = True
        extra = "ignore"

    @validator("created", pre=True)
    def parse_created(cls, v):
        """Parse RFC 3339 timestamps, treating naive times as UTC."""
        if v is None or v == "":
            return None
        if isinstance(v, str):
            text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), v.strip(), count=1)
            if text.endswith(("Z", "z")):
                text = text[:-1] + "+00:00"
            try:
                v = datetime.fromisoformat(text)
            except ValueError as e:
                raise ValueError(f"{v} is not a valid creation time") from e
        if isinstance(v, datetime) and v.tzinfo is None:
            v = v.replace(tzinfo=timezone.utc)
        return v

    def reference(self, use_name: bool) -> str:
        """Name or ID used to address the resource on the command line."""
        return self.name if use_name else self.id

    @property
    def conmon_pid_file(self) -> str:
        """PID file written by conmon for this container."""
        if self.pid_file:
            return self.pid_file
        return f"{self.run_root}/overlay-containers/{self.id}/userdata/conmon.pid"


ResourceRef.update_forward_refs()
