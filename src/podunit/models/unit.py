"""Computed unit models."""

from typing import List, Literal, Optional, Tuple
from pydantic import BaseModel, Field


Directive = Tuple[str, str]


class UnitSpec(BaseModel):
    """Renderer-ready description of one systemd unit."""
    name: str = Field(..., description="Unit name without suffix")
    kind: Literal["container", "pod"]
    template: bool = False
    header: List[str] = Field(default_factory=list)
    dependencies: List[Directive] = Field(default_factory=list)
    requires_mounts_for: str
    user_dependencies: List[Directive] = Field(default_factory=list)
    environment: List[str] = Field(default_factory=list)
    restart_policy: str
    restart_sec: Optional[int] = None
    timeout_start_sec: Optional[int] = None
    timeout_stop_sec: int
    exec_start_pre: List[str] = Field(default_factory=list)
    exec_start: str
    exec_stop: str
    exec_stop_post: str
    pid_file: Optional[str] = None
    service_type: str = "forking"
    notify_access: Optional[str] = None
    wanted_by: List[str] = Field(default_factory=lambda: ["default.target"])

    class Config:
        """Pydantic config."""
        frozen = True

    @property
    def file_name(self) -> str:
        """File name of the unit, e.g. container-foo.service."""
        if self.template:
            return f"{self.name}@.service"
        return f"{self.name}.service"


class GeneratedUnit(BaseModel):
    """Rendered unit text, optionally with the path it was written to."""
    name: str
    file_name: str
    content: str
    path: Optional[str] = None

    class Config:
        """Pydantic config."""
        frozen = True
