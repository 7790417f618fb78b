"""Pydantic models for resources, options and units."""

from podunit.models.config import PodunitConfig, DefaultsConfig
from podunit.models.options import GenerationOptions, RESTART_POLICIES, DEFAULT_RESTART_POLICY
from podunit.models.resource import ResourceRef
from podunit.models.unit import UnitSpec, GeneratedUnit

__all__ = [
    "PodunitConfig",
    "DefaultsConfig",
    "GenerationOptions",
    "RESTART_POLICIES",
    "DEFAULT_RESTART_POLICY",
    "ResourceRef",
    "UnitSpec",
    "GeneratedUnit",
]
