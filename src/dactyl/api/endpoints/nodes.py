"""Node API endpoints."""

from __future__ import annotations

from typing import Any

from dactyl.api.client import PanelClient
from dactyl.api.endpoints.allocations import AllocationHandle, AllocationsAPI
from dactyl.api.handle import Handle, PendingUpdate, page_path
from dactyl.api.models import NewNode, Node
from dactyl.api.payloads import create_body, node_request

NODES_PATH = "/application/nodes"


class NodeHandle(Handle[Node]):
    model = Node

    @property
    def path(self) -> str:
        return f"{NODES_PATH}/{self.record.id}"

    def update(self, changes: dict[str, Any]) -> PendingUpdate[NodeHandle]:
        """Patch node fields given by their panel names."""
        self._assign(changes)
        return self._patch(self.path, node_request(self.record, changes))

    def set_public(self, public: bool) -> PendingUpdate[NodeHandle]:
        return self.update({"public": public})

    def set_name(self, name: str) -> PendingUpdate[NodeHandle]:
        return self.update({"name": name})

    def set_description(self, description: str) -> PendingUpdate[NodeHandle]:
        return self.update({"description": description})

    def set_location(self, location_id: int) -> PendingUpdate[NodeHandle]:
        return self.update({"location_id": location_id})

    def set_fqdn(self, fqdn: str) -> PendingUpdate[NodeHandle]:
        return self.update({"fqdn": fqdn})

    def set_scheme(self, scheme: str) -> PendingUpdate[NodeHandle]:
        return self.update({"scheme": scheme})

    def set_behind_proxy(self, behind_proxy: bool) -> PendingUpdate[NodeHandle]:
        return self.update({"behind_proxy": behind_proxy})

    def set_maintenance_mode(self, maintenance_mode: bool) -> PendingUpdate[NodeHandle]:
        return self.update({"maintenance_mode": maintenance_mode})

    def set_upload_size(self, size: int) -> PendingUpdate[NodeHandle]:
        return self.update({"upload_size": size})

    def set_memory(self, memory: int) -> PendingUpdate[NodeHandle]:
        return self.update({"memory": memory})

    def set_memory_overallocate(self, percent: int) -> PendingUpdate[NodeHandle]:
        return self.update({"memory_overallocate": percent})

    def set_disk(self, disk: int) -> PendingUpdate[NodeHandle]:
        return self.update({"disk": disk})

    def set_disk_overallocate(self, percent: int) -> PendingUpdate[NodeHandle]:
        return self.update({"disk_overallocate": percent})

    def set_daemon_port(self, port: int) -> PendingUpdate[NodeHandle]:
        return self.update({"daemon_listen": port})

    def set_daemon_sftp_port(self, port: int) -> PendingUpdate[NodeHandle]:
        return self.update({"daemon_sftp": port})

    def set_daemon_base(self, base_directory: str) -> PendingUpdate[NodeHandle]:
        return self.update({"daemon_base": base_directory})

    async def get_allocations(self, page: int | None = None) -> list[AllocationHandle]:
        return await AllocationsAPI(self._client).list(self.record.id, page)

    async def create_allocations(self, ip: str, ports: list[str], alias: str | None = None) -> None:
        await AllocationsAPI(self._client).create(self.record.id, ip, ports, alias)

    async def delete(self) -> None:
        await self._client.call(self.path, "DELETE")


class NodesAPI:
    def __init__(self, client: PanelClient) -> None:
        self._client = client

    async def list(self, page: int | None = None) -> list[NodeHandle]:
        response = await self._client.call(page_path(NODES_PATH, page))
        return NodeHandle.from_list(self._client, response)

    async def get(self, node_id: int) -> NodeHandle:
        response = await self._client.call(f"{NODES_PATH}/{node_id}")
        return NodeHandle.from_item(self._client, response.data)

    async def create(self, options: NewNode) -> NodeHandle:
        response = await self._client.call(NODES_PATH, "POST", create_body(options))
        return NodeHandle.from_item(self._client, response.data)
