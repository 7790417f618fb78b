"""Resource lookup backends for podunit."""

from podunit.providers.base import BaseLookup
from podunit.providers.registry import LookupRegistry

__all__ = [
    "BaseLookup",
    "LookupRegistry",
]
