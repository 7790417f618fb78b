"""Unit generation for containers and pods."""

import logging
from typing import List, Mapping, Optional

from podunit.errors import GenerationError, UnsupportedCombinationError
from podunit.generator.commands import CommandBuilder, Commands, get_command_builder
from podunit.generator.dependencies import (
    member_dependencies,
    mounts_root,
    network_dependencies,
    pod_dependencies,
    user_dependencies,
)
from podunit.generator.environment import environment_directives
from podunit.generator.naming import resource_unit_name
from podunit.generator.render import header_lines, render_unit
from podunit.generator.timeouts import Timeouts, resolve_timeouts
from podunit.models.options import DEFAULT_RESTART_POLICY, RESTART_POLICIES, GenerationOptions
from podunit.models.resource import ResourceRef
from podunit.models.unit import GeneratedUnit, UnitSpec
from podunit.providers.base import BaseLookup


logger = logging.getLogger(__name__)


class UnitGenerator:
    """Generates the units for one container or pod."""

    def __init__(self, lookup: BaseLookup, environ: Optional[Mapping[str, str]] = None):
        """Initialize with a resource lookup and an optional environment for --env."""
        self.lookup = lookup
        self.environ = environ

    async def generate(self, target: str, options: GenerationOptions) -> List[GeneratedUnit]:
        """Generate units for the container or pod named target.

        Any error aborts the whole batch; nothing is returned partially.
        """
        self._check_options(options)
        environment = environment_directives(options.env, self.environ)

        resource = await self.lookup.lookup(target)
        logger.info(f"Generating units for {resource.kind} {resource.name}")

        specs = self.build_specs(resource, options, environment)
        return [
            GeneratedUnit(name=spec.name, file_name=spec.file_name, content=render_unit(spec))
            for spec in specs
        ]

    def build_specs(
        self,
        resource: ResourceRef,
        options: GenerationOptions,
        environment: List[str],
    ) -> List[UnitSpec]:
        """Compute the unit specs for a resource, members before their pod."""
        builder = get_command_builder(options)

        if resource.kind == "pod":
            specs = self._pod_specs(resource, options, environment, builder)
        else:
            specs = [self._container_spec(resource, options, environment, builder)]

        seen = set()
        for spec in specs:
            if spec.file_name in seen:
                raise GenerationError(f"duplicate unit name {spec.file_name}")
            seen.add(spec.file_name)

        return specs

    def _check_options(self, options: GenerationOptions) -> None:
        if options.template and not options.recreate:
            raise UnsupportedCombinationError("--template requires --new")

    def _container_spec(
        self,
        resource: ResourceRef,
        options: GenerationOptions,
        environment: List[str],
        builder: CommandBuilder,
        pod_unit: Optional[str] = None,
    ) -> UnitSpec:
        name = resource_unit_name(resource, options)
        timeouts = resolve_timeouts(resource, options.stop_timeout, options.start_timeout)
        commands = builder.container(resource, name, timeouts, pod_unit=pod_unit)

        dependencies = network_dependencies()
        if pod_unit:
            dependencies += member_dependencies(pod_unit, options.template)

        return self._unit_spec(
            name, resource, options, environment, timeouts, commands, dependencies
        )

    def _pod_specs(
        self,
        pod: ResourceRef,
        options: GenerationOptions,
        environment: List[str],
        builder: CommandBuilder,
    ) -> List[UnitSpec]:
        pod_unit = resource_unit_name(pod, options)

        # Members first: the pod's Wants= needs all their names
        members = [
            self._container_spec(container, options, environment, builder, pod_unit=pod_unit)
            for container in pod.containers
        ]

        timeouts = resolve_timeouts(pod, options.stop_timeout, options.start_timeout)
        commands = builder.pod(pod, pod_unit, timeouts)
        dependencies = network_dependencies() + pod_dependencies(
            [member.name for member in members], options.template
        )

        pod_spec = self._unit_spec(
            pod_unit, pod, options, environment, timeouts, commands, dependencies
        )
        return members + [pod_spec]

    def _unit_spec(
        self,
        name: str,
        resource: ResourceRef,
        options: GenerationOptions,
        environment: List[str],
        timeouts: Timeouts,
        commands: Commands,
        dependencies: list,
    ) -> UnitSpec:
        return UnitSpec(
            name=name,
            kind=resource.kind,
            template=options.template,
            header=header_lines(options.no_header),
            dependencies=dependencies,
            requires_mounts_for=mounts_root(resource, options.recreate),
            user_dependencies=user_dependencies(options),
            environment=environment,
            restart_policy=restart_policy(resource, options),
            restart_sec=options.restart_sec,
            timeout_start_sec=timeouts.start_sec,
            timeout_stop_sec=timeouts.stop_sec,
            exec_start_pre=commands.exec_start_pre,
            exec_start=commands.exec_start,
            exec_stop=commands.exec_stop,
            exec_stop_post=commands.exec_stop_post,
            pid_file=commands.pid_file,
            service_type=commands.service_type,
            notify_access=commands.notify_access,
        )


def restart_policy(resource: ResourceRef, options: GenerationOptions) -> str:
    """Restart= value: the option, else the resource's own policy, else on-failure."""
    if options.restart_policy:
        return options.restart_policy
    policy = resource.restart_policy
    if policy == "unless-stopped":
        return "always"
    # "no" is the runtime default, not a choice
    if policy in RESTART_POLICIES and policy != "no":
        return policy
    return DEFAULT_RESTART_POLICY
