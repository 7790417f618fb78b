"""Selection of Environment= directives from --env entries."""

import logging
import os
from typing import Dict, List, Mapping, Optional, Sequence

from podunit.errors import InvalidOptionError
from podunit.generator.escape import Verbatim, quote_argument


logger = logging.getLogger(__name__)

# Lets the runtime know which unit manages the container
UNIT_VARIABLE = Verbatim("PODMAN_SYSTEMD_UNIT=%n")


def parse_environment(
    entries: Sequence[str],
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Resolve --env entries into variables.

    ``KEY=VALUE`` is taken as is, ``NAME`` is read from ``environ`` and
    ``PREFIX*`` expands to every variable in ``environ`` starting with
    ``PREFIX``, sorted by name. Later entries override earlier ones.
    """
    if environ is None:
        environ = os.environ

    variables: Dict[str, str] = {}
    for entry in entries:
        key, sep, value = entry.partition("=")
        if not key:
            raise InvalidOptionError(f'invalid environment variable: "{entry}"')

        if sep:
            variables[key] = value
        elif key.endswith("*"):
            prefix = key[:-1]
            matches = sorted(name for name in environ if name.startswith(prefix))
            if not matches:
                logger.debug(f"No environment variables match {key}")
            for name in matches:
                variables[name] = environ[name]
        elif key in environ:
            variables[key] = environ[key]
        else:
            logger.debug(f"Environment variable {key} is not set, skipping")

    return variables


def environment_directives(
    entries: Sequence[str],
    environ: Optional[Mapping[str, str]] = None,
) -> List[str]:
    """Escaped values for the unit's Environment= lines."""
    variables = parse_environment(entries, environ)
    return [str(UNIT_VARIABLE)] + [
        quote_argument(f"{key}={value}") for key, value in variables.items()
    ]
