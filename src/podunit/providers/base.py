"""Base lookup interface and mapping of runtime inspect data."""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from podunit.models.config import PodunitConfig
from podunit.models.resource import ResourceRef


# Members without a creation time sort first
_UNKNOWN_CREATED = datetime.min.replace(tzinfo=timezone.utc)


class BaseLookup(ABC):
    """Resolves a container or pod name/ID into a ResourceRef."""
    
    @abstractmethod
    async def initialize(self, config: PodunitConfig):
        """Initialize the lookup with configuration."""
        pass
        
    @abstractmethod
    async def lookup(self, name: str) -> ResourceRef:
        """Return the container or pod, raising TargetNotFoundError if neither exists."""
        pass

    async def close(self):
        """Release any connection held by the lookup."""
        pass


def container_from_inspect(data: Dict[str, Any], run_root: str) -> ResourceRef:
    """Map `container inspect` JSON to a ResourceRef."""
    config = data.get("Config") or {}
    host_config = data.get("HostConfig") or {}
    restart = (host_config.get("RestartPolicy") or {}).get("Name") or None

    return ResourceRef(
        kind="container",
        id=data["Id"],
        name=data["Name"],
        pod_id=data.get("Pod") or None,
        stop_timeout=config.get("StopTimeout"),
        create_command=config.get("CreateCommand") or [],
        run_root=run_root,
        pid_file=data.get("ConmonPidFile") or None,
        restart_policy=restart,
        created=data.get("Created"),
    )


def pod_from_inspect(
    data: Dict[str, Any],
    run_root: str,
    infra: Optional[ResourceRef],
    containers: List[ResourceRef],
) -> ResourceRef:
    """Map `pod inspect` JSON plus its inspected containers to a ResourceRef."""
    return ResourceRef(
        kind="pod",
        id=data["Id"],
        name=data["Name"],
        stop_timeout=infra.stop_timeout if infra else None,
        create_command=data.get("CreateCommand") or [],
        run_root=run_root,
        pid_file=infra.conmon_pid_file if infra else None,
        restart_policy=infra.restart_policy if infra else None,
        created=data.get("Created"),
        infra=infra,
        containers=sorted(containers, key=lambda c: c.created or _UNKNOWN_CREATED),
    )


def pod_member_ids(data: Dict[str, Any]) -> List[str]:
    """IDs of a pod's containers, without the infra container."""
    infra_id = data.get("InfraContainerID")
    return [c["Id"] for c in data.get("Containers") or [] if c["Id"] != infra_id]
