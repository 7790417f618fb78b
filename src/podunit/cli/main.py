"""Main CLI implementation using Typer."""

import sys
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence

import typer
from rich.console import Console
from rich.markup import escape

from podunit import __version__
from podunit.cli.commands import generate
from podunit.errors import InvalidOptionError, PodunitError


# Exit code of the runtime's own generate command on failure
EXIT_FAILURE = 125

# Flags that also accept an explicit --flag=true/false
BOOL_FLAGS = frozenset({"--new", "--name", "--files", "--template", "--no-header"})

TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})


# Create Typer app
app = typer.Typer(
    name="podunit",
    help="Generate systemd units for Podman containers and pods",
    add_completion=False,
)

# Errors go to stderr; stdout carries the units
stderr_console = Console(stderr=True, soft_wrap=True)


def normalize_bool_flags(argv: Sequence[str]) -> List[str]:
    """Rewrite --flag=true|false into presence or absence of --flag.

    Raises InvalidOptionError for any other value.
    """
    result = []
    for i, token in enumerate(argv):
        if token == "--":
            result.extend(argv[i:])
            break
        flag, sep, value = token.partition("=")
        if sep and flag in BOOL_FLAGS:
            if value in TRUE_VALUES:
                result.append(flag)
                continue
            if value in FALSE_VALUES:
                continue
            raise InvalidOptionError(f"invalid value \"{value}\" for {flag}: expected true or false")
        result.append(token)
    return result


def _print_error(error: Exception):
    stderr_console.print(f"[red]Error:[/red] {escape(str(error))}")


def _run_cli_command(handler: Callable[..., Any], **kwargs: Any):
    """Helper to run a CLI command with error handling."""
    try:
        handler(**kwargs)
    except PodunitError as e:
        _print_error(e)
        raise typer.Exit(EXIT_FAILURE) from e


def _version_callback(value: bool):
    if value:
        typer.echo(f"podunit {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True,
        help="Show version and exit",
    ),
):
    """Generate systemd units for Podman containers and pods."""


@app.command("generate")
def generate_command(
    target: str = typer.Argument(..., help="Container or pod name or ID"),
    new: bool = typer.Option(
        False, "--new", help="Create a new container or pod instead of starting an existing one"
    ),
    files: bool = typer.Option(
        False, "--files", "-f", help="Write unit files instead of printing them"
    ),
    output_format: str = typer.Option(
        "text", "--format", help="Output format (text, json)"
    ),
    no_header: bool = typer.Option(
        False, "--no-header", help="Omit the generator header"
    ),
    stop_timeout: Optional[int] = typer.Option(
        None, "--time", "-t", "--stop-timeout", help="Stop timeout in seconds"
    ),
    start_timeout: Optional[int] = typer.Option(
        None, "--start-timeout", help="Start timeout in seconds"
    ),
    restart_policy: Optional[str] = typer.Option(
        None, "--restart-policy", help="systemd restart policy"
    ),
    restart_sec: Optional[int] = typer.Option(
        None, "--restart-sec", help="Seconds to wait before restarting"
    ),
    container_prefix: Optional[str] = typer.Option(
        None, "--container-prefix", help="Unit name prefix for containers"
    ),
    pod_prefix: Optional[str] = typer.Option(
        None, "--pod-prefix", help="Unit name prefix for pods"
    ),
    separator: Optional[str] = typer.Option(
        None, "--separator", help="Separator between prefix and name"
    ),
    wants: Optional[List[str]] = typer.Option(
        None, "--wants", help="Add a Wants= dependency (repeatable)"
    ),
    after: Optional[List[str]] = typer.Option(
        None, "--after", help="Add an After= dependency (repeatable)"
    ),
    requires: Optional[List[str]] = typer.Option(
        None, "--requires", help="Add a Requires= dependency (repeatable)"
    ),
    env: Optional[List[str]] = typer.Option(
        None, "--env", "-e", help="Environment variable: KEY=VALUE, NAME or PREFIX*"
    ),
    name: bool = typer.Option(
        False, "--name", "-n", help="Use names instead of IDs"
    ),
    template: bool = typer.Option(
        False, "--template", help="Generate template units (requires --new)"
    ),
    executable: Optional[str] = typer.Option(
        None, "--executable", help="Path of the podman executable"
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", help="Directory for --files (default: current directory)"
    ),
    backend: Optional[str] = typer.Option(
        None, "--backend", help="Lookup backend (cli, api)"
    ),
    url: Optional[str] = typer.Option(
        None, "--url", help="Service URL for the api backend"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)"
    ),
):
    """Generate systemd units for a container or pod."""
    _run_cli_command(
        generate,
        target=target,
        config_path=config,
        backend=backend,
        url=url,
        log_level=log_level,
        recreate=new,
        use_name=name,
        files=files,
        format=output_format,
        no_header=no_header,
        template=template,
        stop_timeout=stop_timeout,
        start_timeout=start_timeout,
        restart_policy=restart_policy,
        restart_sec=restart_sec,
        container_prefix=container_prefix,
        pod_prefix=pod_prefix,
        separator=separator,
        wants=wants,
        after=after,
        requires=requires,
        env=env,
        executable=executable,
        output_dir=str(output_dir) if output_dir else None,
    )


def main(argv: Optional[Sequence[str]] = None):
    """Main entry point for CLI."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        args = normalize_bool_flags(argv)
    except PodunitError as e:
        _print_error(e)
        sys.exit(EXIT_FAILURE)
    app(args=args, prog_name="podunit")
