"""Nest API endpoints."""

from __future__ import annotations

from dactyl.api.client import PanelClient
from dactyl.api.endpoints.eggs import EggHandle, EggsAPI
from dactyl.api.handle import Handle, page_path
from dactyl.api.models import Nest

NESTS_PATH = "/application/nests"


class NestHandle(Handle[Nest]):
    model = Nest

    async def get_eggs(self) -> list[EggHandle]:
        return await EggsAPI(self._client).list(self.record.id)

    async def get_egg(self, egg_id: int) -> EggHandle:
        return await EggsAPI(self._client).get(self.record.id, egg_id)


class NestsAPI:
    def __init__(self, client: PanelClient) -> None:
        self._client = client

    async def list(self, page: int | None = None) -> list[NestHandle]:
        response = await self._client.call(page_path(NESTS_PATH, page))
        return NestHandle.from_list(self._client, response)

    async def get(self, nest_id: int) -> NestHandle:
        response = await self._client.call(f"{NESTS_PATH}/{nest_id}")
        return NestHandle.from_item(self._client, response.data)
