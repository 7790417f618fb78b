"""Shared fixtures for podunit tests."""

import pytest

from podunit.errors import TargetNotFoundError
from podunit.models.config import PodunitConfig
from podunit.models.resource import ResourceRef
from podunit.providers.base import BaseLookup


RUN_ROOT = "/run/containers/storage"


class FakeLookup(BaseLookup):
    """In-memory lookup keyed by name and ID."""

    def __init__(self, *resources):
        self.resources = {}
        for resource in resources:
            self.resources[resource.name] = resource
            self.resources[resource.id] = resource
        self.closed = False

    async def initialize(self, config):
        pass

    async def lookup(self, name):
        if name not in self.resources:
            raise TargetNotFoundError(name)
        return self.resources[name]

    async def close(self):
        self.closed = True


def make_container(name="foo", id="abc123", **kwargs):
    """Build a container ResourceRef with sensible defaults."""
    values = {
        "kind": "container",
        "id": id,
        "name": name,
        "stop_timeout": 10,
        "create_command": ["/usr/bin/podman", "create", "--name", name, "alpine", "top"],
        "run_root": RUN_ROOT,
        "created": "2024-01-01T10:00:00Z",
    }
    values.update(kwargs)
    return ResourceRef(**values)


@pytest.fixture
def container():
    """A plain container named foo."""
    return make_container()


@pytest.fixture
def pod():
    """Pod foo with an infra container and two members."""
    infra = make_container(
        name="1a2b3c4d5e6f-infra",
        id="infra123",
        pod_id="pod123",
        create_command=[],
        pid_file=f"{RUN_ROOT}/overlay-containers/infra123/userdata/conmon.pid",
    )
    members = [
        make_container(
            name=name,
            id=f"{name}-id",
            pod_id="pod123",
            created=created,
            create_command=[
                "/usr/bin/podman", "create", "--pod", "foo", "--name", name, "alpine", "top",
            ],
        )
        for name, created in (
            ("con-foo", "2024-01-01T10:00:01Z"),
            ("con-bar", "2024-01-01T10:00:02Z"),
        )
    ]
    return ResourceRef(
        kind="pod",
        id="pod123",
        name="foo",
        stop_timeout=10,
        create_command=["/usr/bin/podman", "pod", "create", "--name", "foo"],
        run_root=RUN_ROOT,
        pid_file=infra.pid_file,
        created="2024-01-01T10:00:00Z",
        infra=infra,
        containers=members,
    )


@pytest.fixture
def config():
    """Default configuration."""
    return PodunitConfig()


@pytest.fixture
def container_factory():
    """Factory for container ResourceRefs."""
    return make_container


@pytest.fixture
def container_lookup(container):
    """Lookup that knows the container foo."""
    return FakeLookup(container)


@pytest.fixture
def pod_lookup(pod):
    """Lookup that knows the pod foo."""
    return FakeLookup(pod)


@pytest.fixture
def lookup_factory():
    """Factory for in-memory lookups."""
    return FakeLookup
