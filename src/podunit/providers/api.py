"""Lookup through the libpod REST API."""

import asyncio
import logging
import urllib.parse
from typing import Any, Dict, Optional

import httpx

from podunit.errors import LookupFailedError, TargetNotFoundError
from podunit.models.config import PodunitConfig
from podunit.models.resource import ResourceRef
from podunit.providers.base import (
    BaseLookup,
    container_from_inspect,
    pod_from_inspect,
    pod_member_ids,
)


logger = logging.getLogger(__name__)

API_VERSION = "v4.0.0"


class PodmanAPILookup(BaseLookup):
    """Resolve containers and pods via `podman system service`."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize API lookup; transport may be injected for testing."""
        self.transport = transport
        self.base_url = "http://localhost"
        self.client: Optional[httpx.AsyncClient] = None
        self._run_root: Optional[str] = None

    async def initialize(self, config: PodunitConfig):
        """Connect to the socket or TCP address in config.socket_url."""
        url = urllib.parse.urlparse(config.socket_url)

        if url.scheme == "unix":
            if self.transport is None:
                self.transport = httpx.AsyncHTTPTransport(uds=url.path)
            self.base_url = "http://localhost"
        elif url.scheme in ("tcp", "http"):
            self.base_url = f"http://{url.netloc}"
        else:
            raise LookupFailedError(f"unsupported service URL: {config.socket_url}")

        self.client = httpx.AsyncClient(
            transport=self.transport,
            base_url=f"{self.base_url}/{API_VERSION}/libpod",
            timeout=10.0,
        )

    async def close(self):
        """Close the HTTP client."""
        if self.client:
            await self.client.aclose()

    async def lookup(self, name: str) -> ResourceRef:
        """Resolve name as a container first, then as a pod."""
        quoted = urllib.parse.quote(name, safe="")

        data = await self._get(f"/containers/{quoted}/json")
        if data is not None:
            return container_from_inspect(data, await self.run_root())

        data = await self._get(f"/pods/{quoted}/json")
        if data is None:
            raise TargetNotFoundError(name)
        return await self._pod(data)

    async def run_root(self) -> str:
        """Runtime state root reported by the service."""
        if self._run_root is None:
            info = await self._get("/info")
            if info is None:
                raise LookupFailedError("service did not return runtime info")
            self._run_root = info["store"]["runRoot"]
        return self._run_root

    async def _pod(self, data: Dict[str, Any]) -> ResourceRef:
        run_root = await self.run_root()

        infra = None
        infra_id = data.get("InfraContainerID")
        if infra_id:
            infra = container_from_inspect(await self._require(infra_id), run_root)

        members = await asyncio.gather(
            *(self._require(ctr_id) for ctr_id in pod_member_ids(data))
        )
        containers = [container_from_inspect(member, run_root) for member in members]

        return pod_from_inspect(data, run_root, infra, containers)

    async def _require(self, ctr_id: str) -> Dict[str, Any]:
        data = await self._get(f"/containers/{ctr_id}/json")
        if data is None:
            raise TargetNotFoundError(ctr_id)
        return data

    async def _get(self, path: str) -> Optional[Dict[str, Any]]:
        """GET a JSON document; None on 404."""
        if self.client is None:
            raise LookupFailedError("API lookup used before initialize()")

        try:
            response = await self.client.get(path)
        except httpx.RequestError as e:
            raise LookupFailedError(f"Connection error: {e}") from e

        if response.status_code == 404:
            logger.debug(f"{path} not found")
            return None

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise LookupFailedError(
                f"HTTP error {e.response.status_code}: {e.response.text}"
            ) from e

        return response.json()
