"""Exec*= command construction for the reuse and recreate modes.

Reuse mode starts and stops a resource that already exists. Recreate mode
(``--new``) embeds the original create command so the unit works on a host
where the resource does not exist yet. Both builders return
:class:`Commands` and are picked by :func:`get_command_builder`.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from podunit.errors import GenerationError, UnsupportedCombinationError
from podunit.generator.argv import (
    CreateCommand,
    has_flag,
    insert_tokens,
    map_flag_value,
    remove_flags,
    split_create_command,
)
from podunit.generator.escape import Verbatim, escape_dollar, escape_percent, join_command
from podunit.generator.timeouts import Timeouts
from podunit.models.options import GenerationOptions
from podunit.models.resource import ResourceRef


logger = logging.getLogger(__name__)

CONTAINER_ID_FILE = Verbatim("%t/%n.ctr-id")

# Flags recreate mode manages itself and drops from the original command
MANAGED_CONTAINER_FLAGS = frozenset({
    "--cgroups",
    "--cidfile",
    "--conmon-pidfile",
    "--rm",
})
MANAGED_POD_MEMBER_FLAGS = frozenset({"--pod", "--pod-id-file"})
MANAGED_POD_FLAGS = frozenset({"--infra-conmon-pidfile", "--pod-id-file"})


@dataclass(frozen=True)
class Commands:
    """Service commands and process tracking for one unit."""
    exec_start: str
    exec_stop: str
    exec_stop_post: str
    exec_start_pre: List[str] = field(default_factory=list)
    pid_file: Optional[str] = None
    service_type: str = "forking"
    notify_access: Optional[str] = None


def pod_runtime_file(pod_unit: str, suffix: str, template: bool = False) -> Verbatim:
    """Path below $XDG_RUNTIME_DIR (%t) holding a pod unit's PID or ID."""
    instance = "@%i" if template else ""
    return Verbatim(f"%t/{escape_percent(pod_unit)}{instance}.{suffix}")


class ReuseCommandBuilder:
    """Start and stop an existing container or pod by reference."""

    def __init__(self, options: GenerationOptions):
        self.options = options

    def container(
        self,
        resource: ResourceRef,
        unit: str,
        timeouts: Timeouts,
        pod_unit: Optional[str] = None,
    ) -> Commands:
        """Commands for a container unit."""
        return self._commands(resource, timeouts)

    def pod(self, pod: ResourceRef, unit: str, timeouts: Timeouts) -> Commands:
        """Commands for a pod unit, driven through its infra container."""
        if pod.infra is None:
            raise GenerationError(
                f"pod {pod.name} has no infra container: "
                "units for pods without infra can only be generated with --new"
            )
        return self._commands(pod.infra, timeouts)

    def _commands(self, target: ResourceRef, timeouts: Timeouts) -> Commands:
        executable = self.options.executable
        ref = target.reference(self.options.use_name)
        return Commands(
            exec_start=join_command([executable, "start", ref]),
            exec_stop=join_command([executable, "stop", "-t", str(timeouts.stop), ref]),
            exec_stop_post=join_command([executable, "stop", "-t", "0", ref]),
            pid_file=escape_percent(target.conmon_pid_file),
            service_type="forking",
        )


class RecreateCommandBuilder:
    """Recreate the container or pod from its original create command."""

    def __init__(self, options: GenerationOptions):
        self.options = options

    def container(
        self,
        resource: ResourceRef,
        unit: str,
        timeouts: Timeouts,
        pod_unit: Optional[str] = None,
    ) -> Commands:
        """Commands for a container unit."""
        create = self._split(resource, pod=False)
        runtime = [self.options.executable] + create.global_flags

        managed_flags = MANAGED_CONTAINER_FLAGS
        if pod_unit:
            managed_flags = managed_flags | MANAGED_POD_MEMBER_FLAGS
        args = remove_flags(create.arguments, managed_flags)
        if self.options.template:
            args = map_flag_value(args, "--name", _instance_name)

        inserted: List[Union[str, Verbatim]] = [
            Verbatim(f"--cidfile={CONTAINER_ID_FILE}"),
            "--cgroups=no-conmon",
            "--rm",
        ]
        if pod_unit:
            inserted += ["--pod-id-file", pod_runtime_file(pod_unit, "pod-id", self.options.template)]
        if not has_flag(args, {"--sdnotify"}):
            inserted.append("--sdnotify=conmon")
        if not has_flag(args, {"--detach"}, short="d"):
            inserted.append("-d")
        if not has_flag(args, {"--replace"}):
            inserted.append("--replace")

        # Inserted ahead of the original arguments so their order is kept
        start = runtime + ["run"] + insert_tokens(args, 0, inserted)
        logger.debug(f"Recreate command for {resource.name}: {start}")

        return Commands(
            exec_start_pre=[join_command(["/bin/rm", "-f", CONTAINER_ID_FILE])],
            exec_start=join_command(start),
            exec_stop=join_command(
                runtime + ["stop", "--ignore", Verbatim(f"--cidfile={CONTAINER_ID_FILE}"),
                           "-t", str(timeouts.stop)]
            ),
            exec_stop_post=join_command(
                runtime + ["rm", "-f", "--ignore", Verbatim(f"--cidfile={CONTAINER_ID_FILE}")]
            ),
            service_type="notify",
            notify_access="all",
        )

    def pod(self, pod: ResourceRef, unit: str, timeouts: Timeouts) -> Commands:
        """Commands for a pod unit."""
        create = self._split(pod, pod=True)
        runtime = [self.options.executable] + create.global_flags
        pid_file = pod_runtime_file(unit, "pid", self.options.template)
        id_file = pod_runtime_file(unit, "pod-id", self.options.template)

        args = remove_flags(create.arguments, MANAGED_POD_FLAGS)
        if self.options.template:
            args = map_flag_value(args, "--name", _instance_name)
        inserted: List[Union[str, Verbatim]] = ["--infra-conmon-pidfile", pid_file, "--pod-id-file", id_file]
        if not has_flag(args, {"--replace"}):
            inserted.append("--replace")
        args = insert_tokens(args, 0, inserted)

        return Commands(
            exec_start_pre=[
                join_command(["/bin/rm", "-f", pid_file, id_file]),
                join_command(runtime + ["pod", "create"] + args),
            ],
            exec_start=join_command(runtime + ["pod", "start", "--pod-id-file", id_file]),
            exec_stop=join_command(
                runtime + ["pod", "stop", "--ignore", "--pod-id-file", id_file, "-t", str(timeouts.stop)]
            ),
            exec_stop_post=join_command(
                runtime + ["pod", "rm", "--ignore", "-f", "--pod-id-file", id_file]
            ),
            pid_file=str(pid_file),
            service_type="forking",
        )

    def _split(self, resource: ResourceRef, pod: bool) -> CreateCommand:
        if not resource.create_command:
            raise UnsupportedCombinationError(
                f"{resource.kind} {resource.name} has no create command: "
                "cannot generate units with --new"
            )
        try:
            create = split_create_command(resource.create_command)
        except ValueError as e:
            raise GenerationError(f"cannot parse create command of {resource.kind} {resource.name}: {e}") from e

        is_pod_command = create.verb == ["pod", "create"]
        if pod != is_pod_command:
            expected = "pod create" if pod else "container create or run"
            raise GenerationError(
                f"create command of {resource.kind} {resource.name} is not a {expected} command"
            )
        return create


def _instance_name(value: str) -> Verbatim:
    """Append the template instance to a --name value."""
    return Verbatim(f"{escape_dollar(escape_percent(value))}-%i")


CommandBuilder = Union[ReuseCommandBuilder, RecreateCommandBuilder]


def get_command_builder(options: GenerationOptions) -> CommandBuilder:
    """Pick the builder for the requested mode."""
    if options.recreate:
        return RecreateCommandBuilder(options)
    return ReuseCommandBuilder(options)
