"""Server database API endpoints."""

from __future__ import annotations

from dactyl.api.client import PanelClient
from dactyl.api.handle import Handle
from dactyl.api.models import ServerDatabase


def databases_path(server_id: int) -> str:
    return f"/application/servers/{server_id}/databases"


class DatabaseHandle(Handle[ServerDatabase]):
    model = ServerDatabase

    @property
    def path(self) -> str:
        return f"{databases_path(self.record.server)}/{self.record.id}"

    async def reset_password(self) -> None:
        await self._client.call(f"{self.path}/reset-password", "POST", None, True)

    async def delete(self) -> None:
        await self._client.call(self.path, "DELETE")


class DatabasesAPI:
    def __init__(self, client: PanelClient) -> None:
        self._client = client

    async def list(self, server_id: int) -> list[DatabaseHandle]:
        response = await self._client.call(databases_path(server_id))
        return DatabaseHandle.from_list(self._client, response, server=server_id)

    async def get(self, server_id: int, database_id: int) -> DatabaseHandle:
        response = await self._client.call(f"{databases_path(server_id)}/{database_id}")
        return DatabaseHandle.from_item(self._client, response.data, server=server_id)

    async def create(self, server_id: int, database: str, remote: str = "%", host: int = 1) -> DatabaseHandle:
        response = await self._client.call(
            databases_path(server_id),
            "POST",
            {"database": database, "remote": remote, "host": host},
        )
        return DatabaseHandle.from_item(self._client, response.data, server=server_id)
