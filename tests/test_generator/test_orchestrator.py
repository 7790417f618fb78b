"""Tests for the unit generator."""

import pytest

from podunit.errors import (
    GenerationError,
    InvalidOptionError,
    TargetNotFoundError,
    UnsupportedCombinationError,
)
from podunit.generator.orchestrator import UnitGenerator, restart_policy
from podunit.models.options import GenerationOptions


@pytest.mark.asyncio
class TestContainerUnits:
    """Test unit generation for a standalone container."""

    async def test_reuse(self, container_lookup):
        """Test a single unit for an existing container."""
        units = await UnitGenerator(container_lookup).generate("foo", GenerationOptions(use_name=True))

        assert len(units) == 1
        unit = units[0]
        assert unit.name == "container-foo"
        assert unit.file_name == "container-foo.service"
        assert unit.path is None
        assert unit.content.startswith("# container-foo.service\n# autogenerated by podunit")
        assert "TimeoutStopSec=70" in unit.content
        assert "RequiresMountsFor=/run/containers/storage" in unit.content
        assert "Restart=on-failure" in unit.content
        assert "PIDFile=/run/containers/storage/overlay-containers/abc123/userdata/conmon.pid" in unit.content

    async def test_stop_timeout(self, container_lookup):
        """Test the stop timeout adds the overhead."""
        units = await UnitGenerator(container_lookup).generate(
            "foo", GenerationOptions(stop_timeout=42)
        )

        assert "TimeoutStopSec=102" in units[0].content
        assert "stop -t 42 abc123" in units[0].content

    async def test_recreate(self, container_lookup):
        """Test the --new unit keeps the original arguments contiguous."""
        units = await UnitGenerator(container_lookup).generate(
            "foo", GenerationOptions(recreate=True, use_name=True, no_header=True)
        )
        content = units[0].content

        assert "autogenerated by" not in content
        assert "RequiresMountsFor=%t/containers" in content
        assert " --replace " in content
        assert " -d " in content
        assert " --name foo alpine top" in content
        assert "Type=notify" in content
        assert "NotifyAccess=all" in content
        assert " --runroot" not in content

    async def test_environment(self, container_lookup):
        """Test Environment= lines are rendered in order after the unit variable."""
        generator = UnitGenerator(container_lookup, environ={"FOO1": "a", "FOO2": "b"})
        units = await generator.generate(
            "foo", GenerationOptions(env=["BAR=my test", "USER=%a", "FOO*"])
        )

        assert (
            "Environment=PODMAN_SYSTEMD_UNIT=%n\n"
            'Environment="BAR=my test"\n'
            "Environment=USER=%%a\n"
            "Environment=FOO1=a\n"
            "Environment=FOO2=b\n"
        ) in units[0].content

    async def test_invalid_environment_before_lookup(self, container_lookup):
        """Test a bad --env entry fails before any lookup."""
        generator = UnitGenerator(container_lookup)

        with pytest.raises(InvalidOptionError):
            await generator.generate("missing", GenerationOptions(env=["=bar"]))

    async def test_user_dependencies(self, container_lookup):
        """Test user dependencies are rendered under their comment."""
        units = await UnitGenerator(container_lookup).generate(
            "foo", GenerationOptions(wants=["a.service"], after=["b.target"], requires=["c.service"])
        )
        content = units[0].content

        assert "# User-defined dependencies\nWants=a.service\nAfter=b.target\nRequires=c.service\n" in content

    async def test_not_found(self, container_lookup):
        """Test unknown targets raise TargetNotFoundError."""
        with pytest.raises(TargetNotFoundError) as exc_info:
            await UnitGenerator(container_lookup).generate("bar", GenerationOptions())

        assert "bar does not refer to a container or pod" in str(exc_info.value)

    async def test_template_requires_recreate(self, container_lookup):
        """Test --template without --new."""
        with pytest.raises(UnsupportedCombinationError):
            await UnitGenerator(container_lookup).generate("foo", GenerationOptions(template=True))

    async def test_template(self, container_lookup):
        """Test template unit naming."""
        units = await UnitGenerator(container_lookup).generate(
            "foo", GenerationOptions(recreate=True, template=True, use_name=True)
        )

        assert units[0].file_name == "container-foo@.service"
        assert "--name foo-%i alpine top" in units[0].content


@pytest.mark.asyncio
class TestPodUnits:
    """Test unit generation for a pod and its members."""

    async def test_reuse(self, pod_lookup):
        """Test one unit per member plus the pod unit last."""
        units = await UnitGenerator(pod_lookup).generate("foo", GenerationOptions(use_name=True))

        assert [unit.name for unit in units] == ["container-con-foo", "container-con-bar", "pod-foo"]

        pod_content = units[-1].content
        assert "Wants=network-online.target\n" in pod_content
        assert "Wants=container-con-foo.service container-con-bar.service\n" in pod_content
        assert "Before=container-con-foo.service container-con-bar.service\n" in pod_content
        assert "-infra" in pod_content
        assert "PIDFile=" in pod_content
        assert "/userdata/conmon.pid" in pod_content

        for member in units[:-1]:
            assert "BindsTo=pod-foo.service\n" in member.content
            assert "After=pod-foo.service\n" in member.content

        assert sum(unit.content.count("RequiresMountsFor=") for unit in units) == 3

    async def test_recreate(self, pod_lookup):
        """Test pod units recreate the pod and its members."""
        units = await UnitGenerator(pod_lookup).generate(
            "foo", GenerationOptions(recreate=True, use_name=True)
        )
        pod_content = units[-1].content

        assert (
            "pod create --infra-conmon-pidfile %t/pod-foo.pid "
            "--pod-id-file %t/pod-foo.pod-id --replace --name foo"
        ) in pod_content
        assert "ExecStartPre=/bin/rm -f %t/pod-foo.pid %t/pod-foo.pod-id\n" in pod_content
        assert "pod stop --ignore --pod-id-file %t/pod-foo.pod-id -t 10" in pod_content
        assert "pod rm --ignore -f --pod-id-file %t/pod-foo.pod-id" in pod_content

        for member in units[:-1]:
            assert "--pod-id-file %t/pod-foo.pod-id" in member.content

    async def test_template(self, pod_lookup):
        """Test template pods reference member instances."""
        units = await UnitGenerator(pod_lookup).generate(
            "foo", GenerationOptions(recreate=True, template=True, use_name=True)
        )

        assert [unit.file_name for unit in units] == [
            "container-con-foo@.service",
            "container-con-bar@.service",
            "pod-foo@.service",
        ]
        assert "BindsTo=pod-foo@%i.service" in units[0].content
        assert "Wants=container-con-foo@%i.service container-con-bar@%i.service" in units[-1].content

    async def test_empty_prefix_collision(self, pod, container_factory, lookup_factory):
        """Test duplicate unit names abort the batch."""
        twin = pod.copy(update={
            "containers": [container_factory(name="foo", id="x1", pod_id="pod123")],
        })
        options = GenerationOptions(use_name=True, container_prefix="", pod_prefix="")

        with pytest.raises(GenerationError):
            await UnitGenerator(lookup_factory(twin)).generate("foo", options)


def test_restart_policy_fallback(container_factory):
    """Test the restart policy falls back to the resource's own policy."""
    assert restart_policy(container_factory(), GenerationOptions()) == "on-failure"
    assert restart_policy(container_factory(restart_policy="always"), GenerationOptions()) == "always"
    assert restart_policy(container_factory(restart_policy="unless-stopped"), GenerationOptions()) == "always"
    assert restart_policy(container_factory(restart_policy="no"), GenerationOptions()) == "on-failure"
    assert restart_policy(
        container_factory(restart_policy="always"), GenerationOptions(restart_policy="on-abort")
    ) == "on-abort"
