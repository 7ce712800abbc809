"""Server API endpoints (client side, keyed by short identifier)."""

from __future__ import annotations

import asyncio

from dactyl.api.client import PanelClient
from dactyl.api.handle import Handle, page_path
from dactyl.api.models import ClientServer, Usage, Utilization

CLIENT_PATH = "/client"

POWER_SIGNALS = ("start", "stop", "restart", "kill")


class ClientServerHandle(Handle[ClientServer]):
    model = ClientServer

    @property
    def path(self) -> str:
        return f"{CLIENT_PATH}/servers/{self.record.identifier}"

    @property
    def database_limit(self) -> int | None:
        limits = self.record.feature_limits
        return limits.databases if limits else None

    @property
    def allocation_limit(self) -> int | None:
        limits = self.record.feature_limits
        return limits.allocations if limits else None

    async def resource_utilization(self) -> Utilization:
        """Current CPU, memory and disk usage next to the server's limits.

        Reads the live stats and the server details; the two requests are
        independent and run concurrently. Both are awaited before the
        first failure, if any, is raised.
        """
        results = await asyncio.gather(
            self._client.call(f"{self.path}/resources"),
            self._client.call(self.path),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        stats, details = results
        resources = stats.data["attributes"]["resources"]
        limits = details.data["attributes"].get("limits") or {}
        return Utilization(
            cpu=Usage(total=limits.get("cpu"), current=resources.get("cpu_absolute")),
            memory=Usage(total=limits.get("memory"), current=resources.get("memory_bytes")),
            disk=Usage(total=limits.get("disk"), current=resources.get("disk_bytes")),
        )

    async def power_state(self) -> str:
        response = await self._client.call(f"{self.path}/resources")
        return response.data["attributes"]["current_state"]

    async def power_action(self, signal: str) -> None:
        if signal not in POWER_SIGNALS:
            raise ValueError(f"Unknown power signal {signal!r}, expected one of {POWER_SIGNALS}")
        await self._client.call(f"{self.path}/power", "POST", {"signal": signal}, True)

    async def start(self) -> None:
        await self.power_action("start")

    async def stop(self) -> None:
        await self.power_action("stop")

    async def restart(self) -> None:
        await self.power_action("restart")

    async def kill(self) -> None:
        await self.power_action("kill")

    async def send_command(self, command: str) -> None:
        await self._client.call(f"{self.path}/command", "POST", {"command": command}, True)


class ClientServersAPI:
    def __init__(self, client: PanelClient) -> None:
        self._client = client

    async def list(self, page: int | None = None) -> list[ClientServerHandle]:
        response = await self._client.call(page_path(CLIENT_PATH, page))
        return ClientServerHandle.from_list(self._client, response)

    async def get(self, identifier: str) -> ClientServerHandle:
        response = await self._client.call(f"{CLIENT_PATH}/servers/{identifier}")
        return ClientServerHandle.from_item(self._client, response.data)
