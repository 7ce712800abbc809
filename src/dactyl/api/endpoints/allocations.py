"""Node allocation API endpoints."""

from __future__ import annotations

from typing import Any

from dactyl.api.client import PanelClient
from dactyl.api.handle import Handle, page_path
from dactyl.api.models import NodeAllocation


def allocations_path(node_id: int) -> str:
    return f"/application/nodes/{node_id}/allocations"


class AllocationHandle(Handle[NodeAllocation]):
    model = NodeAllocation

    async def delete(self) -> None:
        await self._client.call(
            f"{allocations_path(self.record.node)}/{self.record.id}", "DELETE"
        )


class AllocationsAPI:
    def __init__(self, client: PanelClient) -> None:
        self._client = client

    async def list(self, node_id: int, page: int | None = None) -> list[AllocationHandle]:
        response = await self._client.call(page_path(allocations_path(node_id), page))
        return AllocationHandle.from_list(self._client, response, node=node_id)

    async def create(
        self,
        node_id: int,
        ip: str,
        ports: list[str],
        alias: str | None = None,
    ) -> None:
        """Create allocations for each port (or ``"25565-25570"`` range) on ``ip``.

        The panel answers with no body, so there is nothing to hydrate.
        """
        payload: dict[str, Any] = {"ip": ip, "ports": ports}
        if alias:
            payload["alias"] = alias
        await self._client.call(allocations_path(node_id), "POST", payload, True)
