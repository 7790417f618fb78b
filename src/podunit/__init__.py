"""
podunit - systemd unit generation for Podman containers and pods.

Turns an existing container or pod into service units that start, stop and
optionally recreate it under systemd.
"""

__version__ = "1.0.0"
__author__ = "Podunit Development Team"

# Re-export key components for easier access
from podunit.models.options import GenerationOptions
from podunit.models.resource import ResourceRef
from podunit.models.unit import GeneratedUnit, UnitSpec

__all__ = [
    "GenerationOptions",
    "ResourceRef",
    "GeneratedUnit",
    "UnitSpec",
]
