"""Error types raised while generating units."""

from pathlib import Path


class PodunitError(Exception):
    """Base error for unit generation."""
    pass


class TargetNotFoundError(PodunitError):
    """The name or ID does not refer to a container or pod."""

    def __init__(self, name: str):
        super().__init__(
            f"{name} does not refer to a container or pod: "
            f"no container or pod with name or ID {name} found"
        )
        self.name = name


class InvalidOptionError(PodunitError):
    """An option carries a value outside its accepted range."""
    pass


class UnsupportedCombinationError(PodunitError):
    """Options that cannot be used together, or not with this resource."""
    pass


class GenerationError(PodunitError):
    """The resource metadata cannot be turned into a unit."""
    pass


class LookupFailedError(PodunitError):
    """The runtime could not be queried."""
    pass


class ConfigError(PodunitError):
    """The configuration file is missing or invalid."""
    pass


class UnitWriteError(PodunitError):
    """A unit file could not be written."""

    def __init__(self, unit: str, path: Path, cause: Exception):
        super().__init__(f"writing unit {unit} to {path}: {cause}")
        self.unit = unit
        self.path = path
        self.cause = cause
