"""Server API endpoints (application side)."""

from __future__ import annotations

from typing import Any

from dactyl.api.client import PanelClient
from dactyl.api.endpoints.databases import DatabaseHandle, DatabasesAPI
from dactyl.api.handle import Handle, PendingUpdate, page_path
from dactyl.api.models import Container, FeatureLimits, Limits, NewServer, Server
from dactyl.api.payloads import (
    create_body,
    server_build_request,
    server_details_request,
    server_startup_request,
)

SERVERS_PATH = "/application/servers"


class ServerHandle(Handle[Server]):
    """An application-side server.

    Updates go to one of three endpoints, each with its own required base:
    ``details`` (name, user), ``build`` (allocation, limits, feature_limits)
    and ``startup`` (startup, egg, image).
    """

    model = Server

    @property
    def path(self) -> str:
        return f"{SERVERS_PATH}/{self.record.id}"

    @property
    def is_suspended(self) -> bool:
        return bool(self.record.suspended)

    def update_details(self, changes: dict[str, Any]) -> PendingUpdate[ServerHandle]:
        self._assign(changes)
        return self._patch(f"{self.path}/details", server_details_request(self.record, changes))

    def update_build(self, changes: dict[str, Any]) -> PendingUpdate[ServerHandle]:
        """Patch build settings.

        A ``limits`` or ``feature_limits`` dict replaces the whole group, both
        locally and in the request.
        """
        self._assign(changes)
        return self._patch(f"{self.path}/build", server_build_request(self.record, changes))

    def update_startup(self, changes: dict[str, Any]) -> PendingUpdate[ServerHandle]:
        self._assign(changes)
        container = self._container()
        if "startup" in changes:
            container.startup_command = changes["startup"]
        if "image" in changes:
            container.image = changes["image"]
        if "environment" in changes:
            container.environment = changes["environment"]
        return self._patch(f"{self.path}/startup", server_startup_request(self.record, changes))

    def _container(self) -> Container:
        if self.record.container is None:
            self.record.container = Container()
        return self.record.container

    def _set_limit(self, key: str, value: int) -> PendingUpdate[ServerHandle]:
        if self.record.limits is None:
            self.record.limits = Limits()
        setattr(self.record.limits, key, value)
        return self._patch(f"{self.path}/build", server_build_request(self.record, {"limits": {key: value}}))

    def _set_feature_limit(self, key: str, value: int) -> PendingUpdate[ServerHandle]:
        if self.record.feature_limits is None:
            self.record.feature_limits = FeatureLimits()
        setattr(self.record.feature_limits, key, value)
        return self._patch(
            f"{self.path}/build",
            server_build_request(self.record, {"feature_limits": {key: value}}),
        )

    def set_name(self, name: str) -> PendingUpdate[ServerHandle]:
        return self.update_details({"name": name})

    def set_description(self, description: str) -> PendingUpdate[ServerHandle]:
        return self.update_details({"description": description})

    def set_user(self, user_id: int) -> PendingUpdate[ServerHandle]:
        return self.update_details({"user": user_id})

    # The single-limit setters send only their own key inside the group.
    def set_memory(self, memory: int) -> PendingUpdate[ServerHandle]:
        return self._set_limit("memory", memory)

    def set_cpu(self, cpu: int) -> PendingUpdate[ServerHandle]:
        return self._set_limit("cpu", cpu)

    def set_disk(self, disk: int) -> PendingUpdate[ServerHandle]:
        return self._set_limit("disk", disk)

    def set_io(self, io: int) -> PendingUpdate[ServerHandle]:
        return self._set_limit("io", io)

    def set_swap(self, swap: int) -> PendingUpdate[ServerHandle]:
        return self._set_limit("swap", swap)

    def set_database_limit(self, amount: int) -> PendingUpdate[ServerHandle]:
        return self._set_feature_limit("databases", amount)

    def set_allocation_limit(self, amount: int) -> PendingUpdate[ServerHandle]:
        return self._set_feature_limit("allocations", amount)

    def set_startup_command(self, command: str) -> PendingUpdate[ServerHandle]:
        return self.update_startup({"startup": command})

    def set_egg(self, egg_id: int) -> PendingUpdate[ServerHandle]:
        return self.update_startup({"egg": egg_id})

    def set_pack(self, pack_id: int) -> PendingUpdate[ServerHandle]:
        return self.update_startup({"pack": pack_id})

    def set_image(self, image: str) -> PendingUpdate[ServerHandle]:
        """Set the Docker image the server runs in."""
        return self.update_startup({"image": image})

    async def suspend(self) -> None:
        self.record.suspended = True
        await self._client.call(f"{self.path}/suspend", "POST", None, True)

    async def unsuspend(self) -> None:
        self.record.suspended = False
        await self._client.call(f"{self.path}/unsuspend", "POST", None, True)

    async def reinstall(self) -> None:
        await self._client.call(f"{self.path}/reinstall", "POST", None, True)

    async def rebuild(self) -> None:
        """Recreate the server's container with its current build settings."""
        await self._client.call(f"{self.path}/rebuild", "POST", None, True)

    async def create_database(self, name: str, remote: str = "%", host: int = 1) -> DatabaseHandle:
        return await DatabasesAPI(self._client).create(self.record.id, name, remote, host)

    async def databases(self) -> list[DatabaseHandle]:
        return await DatabasesAPI(self._client).list(self.record.id)

    async def get_database(self, database_id: int) -> DatabaseHandle:
        return await DatabasesAPI(self._client).get(self.record.id, database_id)

    async def delete(self, force: bool = False) -> None:
        """Delete the server. ``force`` skips the daemon-side cleanup check."""
        path = f"{self.path}/force" if force else self.path
        await self._client.call(path, "DELETE")


class ServersAPI:
    def __init__(self, client: PanelClient) -> None:
        self._client = client

    async def list(self, page: int | None = None) -> list[ServerHandle]:
        response = await self._client.call(page_path(SERVERS_PATH, page))
        return ServerHandle.from_list(self._client, response)

    async def get(self, server_id: int) -> ServerHandle:
        response = await self._client.call(f"{SERVERS_PATH}/{server_id}")
        return ServerHandle.from_item(self._client, response.data)

    async def get_by_external_id(self, external_id: str) -> ServerHandle:
        response = await self._client.call(f"{SERVERS_PATH}/external/{external_id}")
        return ServerHandle.from_item(self._client, response.data)

    async def create(self, options: NewServer) -> ServerHandle:
        """Create a server. It is not started unless ``start_when_installed``."""
        response = await self._client.call(SERVERS_PATH, "POST", create_body(options))
        return ServerHandle.from_item(self._client, response.data)
