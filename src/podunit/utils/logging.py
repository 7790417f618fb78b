"""Logging utilities."""

import logging
import sys


# Libraries whose debug output drowns our own
NOISY_LOGGERS = ("asyncio", "httpx", "httpcore")


def setup_logging(level: str = "WARNING"):
    """Send log records to stderr at the given level.

    stdout is reserved for unit text and JSON, so nothing may log there.
    Calling again replaces the previous configuration.
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handler = logging.StreamHandler(sys.stderr)
    if log_level <= logging.DEBUG:
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
        ))
    else:
        handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

    logging.basicConfig(level=log_level, handlers=[handler], force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
