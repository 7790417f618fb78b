"""Dependency directives linking pod and container units."""

from typing import List, Sequence, Tuple

from podunit.generator.escape import escape_percent
from podunit.generator.naming import service_reference
from podunit.models.options import GenerationOptions
from podunit.models.resource import ResourceRef


Directive = Tuple[str, str]

# Mount root in recreate mode; the runtime's storage is found via %t.
RECREATE_MOUNTS_ROOT = "%t/containers"


def network_dependencies() -> List[Directive]:
    """Directives every generated unit carries."""
    return [
        ("Wants", "network-online.target"),
        ("After", "network-online.target"),
    ]


def pod_dependencies(member_units: Sequence[str], template: bool = False) -> List[Directive]:
    """Pull in and order the member container units of a pod."""
    if not member_units:
        return []
    members = " ".join(service_reference(name, template) for name in member_units)
    return [
        ("Wants", members),
        ("Before", members),
    ]


def member_dependencies(pod_unit: str, template: bool = False) -> List[Directive]:
    """Bind a container unit's lifecycle to its pod unit."""
    pod = service_reference(pod_unit, template)
    return [
        ("BindsTo", pod),
        ("After", pod),
    ]


def user_dependencies(options: GenerationOptions) -> List[Directive]:
    """Dependencies passed with --wants/--after/--requires, one line per kind."""
    directives = []
    for key, values in (
        ("Wants", options.wants),
        ("After", options.after),
        ("Requires", options.requires),
    ):
        if values:
            directives.append((key, " ".join(values)))
    return directives


def mounts_root(resource: ResourceRef, recreate: bool) -> str:
    """Path the unit needs mounted before it starts."""
    if recreate:
        return RECREATE_MOUNTS_ROOT
    return escape_percent(resource.run_root)
