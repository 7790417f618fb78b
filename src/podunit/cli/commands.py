"""Command implementations for CLI."""

import asyncio
import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional

import typer
from rich.console import Console
from rich.markup import escape

from podunit.config import ConfigManager
from podunit.errors import PodunitError
from podunit.generator import UnitGenerator
from podunit.models.config import PodunitConfig
from podunit.models.options import GenerationOptions
from podunit.models.unit import GeneratedUnit
from podunit.output import format_json, format_text, write_units
from podunit.providers import LookupRegistry
from podunit.utils.logging import setup_logging


logger = logging.getLogger(__name__)

stderr_console = Console(stderr=True, soft_wrap=True)


async def load_config(
    config_path: Optional[Path],
    overrides: Mapping[str, Any],
) -> PodunitConfig:
    """Load the config file and apply command-line overrides."""
    config = await ConfigManager(config_path).load()
    update = {key: value for key, value in overrides.items() if value is not None}
    if update:
        config = config.copy(update=update)
    return config


def build_options(config: PodunitConfig, **values: Any) -> GenerationOptions:
    """Merge config defaults with the generate flags.

    Flags left at None fall back to the config file.
    """
    defaults = config.defaults
    fallback = {
        "container_prefix": defaults.container_prefix,
        "pod_prefix": defaults.pod_prefix,
        "separator": defaults.separator,
        "restart_policy": defaults.restart_policy,
        "executable": config.executable,
        "output_dir": config.output_dir,
    }
    for key, value in fallback.items():
        if values.get(key) is None:
            values[key] = value

    for key in ("wants", "after", "requires", "env"):
        values[key] = list(values.get(key) or [])

    return GenerationOptions.build(**values)


async def generate_units(
    target: str,
    options: GenerationOptions,
    config: PodunitConfig,
    environ: Optional[Mapping[str, str]] = None,
) -> List[GeneratedUnit]:
    """Look up target and generate its units with the configured backend."""
    lookup = await LookupRegistry().create(config.backend, config)
    try:
        return await UnitGenerator(lookup, environ).generate(target, options)
    finally:
        await lookup.close()


def emit_units(units: List[GeneratedUnit], options: GenerationOptions) -> None:
    """Print units, or write them and print their paths in files mode."""
    failures = []
    if options.files:
        units, failures = write_units(units, options.output_dir)

    if options.format == "json":
        output = format_json(units, options.files)
    else:
        output = format_text(units, options.files)
    if output:
        typer.echo(output)

    if failures:
        for failure in failures:
            stderr_console.print(f"[red]Error:[/red] {escape(str(failure))}")
        raise PodunitError(f"{len(failures)} unit file(s) could not be written")


def generate(
    target: str,
    config_path: Optional[Path] = None,
    backend: Optional[str] = None,
    url: Optional[str] = None,
    log_level: Optional[str] = None,
    **option_values: Any,
) -> None:
    """Generate units for a container or pod and output them."""
    setup_logging(log_level or "WARNING")

    config = asyncio.run(
        load_config(
            config_path,
            {
                "backend": backend,
                "socket_url": url,
                "executable": option_values.get("executable"),
            },
        )
    )
    if log_level is None:
        setup_logging(config.log_level)

    options = build_options(config, **option_values)
    logger.debug(f"Generation options: {options}")

    units = asyncio.run(generate_units(target, options, config))
    emit_units(units, options)

