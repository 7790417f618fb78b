"""Registry of lookup backends."""

import logging
from typing import Dict, Type

from podunit.errors import InvalidOptionError
from podunit.models.config import PodunitConfig
from podunit.providers.api import PodmanAPILookup
from podunit.providers.base import BaseLookup
from podunit.providers.podman import PodmanLookup


logger = logging.getLogger(__name__)


class LookupRegistry:
    """Maps backend names to lookup implementations."""

    def __init__(self):
        """Initialize lookup registry."""
        self._lookup_classes: Dict[str, Type[BaseLookup]] = {
            "cli": PodmanLookup,
            "api": PodmanAPILookup,
        }

    async def create(self, name: str, config: PodunitConfig) -> BaseLookup:
        """Instantiate and initialize the named backend."""
        lookup_class = self._lookup_classes.get(name)
        if lookup_class is None:
            raise InvalidOptionError(
                f"{name} is not a valid backend: choose from {', '.join(self.list_backends())}"
            )

        lookup = lookup_class()
        await lookup.initialize(config)
        logger.debug(f"Initialized lookup backend: {name}")
        return lookup

    def list_backends(self) -> list[str]:
        """List available backend names."""
        return list(self._lookup_classes.keys())
