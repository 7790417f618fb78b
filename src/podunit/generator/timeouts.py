"""Stop and start timeout calculation."""

from dataclasses import dataclass
from typing import Optional

from podunit.errors import InvalidOptionError
from podunit.models.resource import ResourceRef


# Extra seconds systemd waits beyond the runtime's own stop timeout before
# it kills the unit.
STOP_TIMEOUT_OVERHEAD = 60

# Stop timeout podman applies when a container has none configured
DEFAULT_STOP_TIMEOUT = 10


@dataclass(frozen=True)
class Timeouts:
    """Resolved timeouts for one unit."""
    stop: int
    stop_sec: int
    start_sec: Optional[int] = None


def resolve_timeouts(
    resource: ResourceRef,
    stop_timeout: Optional[int] = None,
    start_timeout: Optional[int] = None,
) -> Timeouts:
    """Resolve TimeoutStopSec/TimeoutStartSec for a resource."""
    if stop_timeout is not None and stop_timeout < 0:
        raise InvalidOptionError(f"{stop_timeout} is not a valid timeout: must be 0 or greater")
    if start_timeout is not None and start_timeout < 0:
        raise InvalidOptionError(f"{start_timeout} is not a valid timeout: must be 0 or greater")

    stop = stop_timeout
    if stop is None:
        stop = resource.stop_timeout
    if stop is None:
        stop = DEFAULT_STOP_TIMEOUT

    return Timeouts(
        stop=stop,
        stop_sec=stop + STOP_TIMEOUT_OVERHEAD,
        start_sec=start_timeout,
    )
