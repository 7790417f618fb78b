"""Unit name resolution."""

from podunit.models.options import GenerationOptions
from podunit.models.resource import ResourceRef


def unit_name(prefix: str, separator: str, base: str) -> str:
    """Join prefix and base; an empty prefix drops the separator too."""
    if not prefix:
        return base
    return f"{prefix}{separator}{base}"


def resource_unit_name(resource: ResourceRef, options: GenerationOptions) -> str:
    """Unit name for a container or pod."""
    prefix = options.pod_prefix if resource.kind == "pod" else options.container_prefix
    return unit_name(prefix, options.separator, resource.reference(options.use_name))


def service_reference(name: str, template: bool = False) -> str:
    """How one unit refers to another in dependency directives."""
    if template:
        return f"{name}@%i.service"
    return f"{name}.service"
