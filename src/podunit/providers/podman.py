"""Lookup through the podman command line."""

import asyncio
import json
import logging
import subprocess
from typing import Any, Dict, Optional

from podunit.errors import LookupFailedError, TargetNotFoundError
from podunit.models.config import PodunitConfig
from podunit.models.resource import ResourceRef
from podunit.providers.base import (
    BaseLookup,
    container_from_inspect,
    pod_from_inspect,
    pod_member_ids,
)
from podunit.utils.process import run_command


logger = logging.getLogger(__name__)


class PodmanLookup(BaseLookup):
    """Resolve containers and pods with `podman inspect`."""

    def __init__(self):
        """Initialize podman lookup."""
        self.executable = "podman"
        self._run_root: Optional[str] = None

    async def initialize(self, config: PodunitConfig):
        """Use the configured podman executable."""
        self.executable = config.executable

    async def lookup(self, name: str) -> ResourceRef:
        """Resolve name as a container first, then as a pod."""
        data = await self._inspect("container", name)
        if data is not None:
            return container_from_inspect(data, await self.run_root())

        data = await self._inspect("pod", name)
        if data is None:
            raise TargetNotFoundError(name)
        return await self._pod(data)

    async def run_root(self) -> str:
        """Runtime state root reported by `podman info`."""
        if self._run_root is None:
            result = await self._run(["info", "--format", "json"])
            if not result.ok:
                raise LookupFailedError(f"podman info failed: {result.stderr.strip()}")
            info = _parse_json(result.stdout)
            self._run_root = info["store"]["runRoot"]
            logger.debug(f"Using run root {self._run_root}")
        return self._run_root

    async def _pod(self, data: Dict[str, Any]) -> ResourceRef:
        run_root = await self.run_root()

        infra = None
        infra_id = data.get("InfraContainerID")
        if infra_id:
            infra = container_from_inspect(await self._require("container", infra_id), run_root)

        members = await asyncio.gather(
            *(self._require("container", ctr_id) for ctr_id in pod_member_ids(data))
        )
        containers = [container_from_inspect(member, run_root) for member in members]

        return pod_from_inspect(data, run_root, infra, containers)

    async def _require(self, kind: str, name: str) -> Dict[str, Any]:
        data = await self._inspect(kind, name)
        if data is None:
            raise TargetNotFoundError(name)
        return data

    async def _inspect(self, kind: str, name: str) -> Optional[Dict[str, Any]]:
        """Inspect a container or pod; None if it does not exist."""
        result = await self._run([kind, "inspect", "--format", "json", name])

        if not result.ok:
            if "no such" in result.stderr.lower():
                logger.debug(f"No {kind} named {name}")
                return None
            raise LookupFailedError(
                f"{self.executable} {kind} inspect {name} failed: {result.stderr.strip()}"
            )

        data = _parse_json(result.stdout)
        # Container inspect returns a list, pod inspect a single object
        # (a list on newer releases).
        if isinstance(data, list):
            return data[0] if data else None
        return data

    async def _run(self, args):
        try:
            return await run_command([self.executable] + args, check=False)
        except FileNotFoundError as e:
            raise LookupFailedError(f"podman executable not found: {self.executable}") from e
        except subprocess.TimeoutExpired as e:
            raise LookupFailedError(f"{self.executable} timed out after {e.timeout}s") from e


def _parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise LookupFailedError(f"unexpected podman output: {e}") from e
