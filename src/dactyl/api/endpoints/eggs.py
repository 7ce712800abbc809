"""Egg API endpoints."""

from __future__ import annotations

from dactyl.api.client import PanelClient
from dactyl.api.handle import Handle
from dactyl.api.models import Egg


def eggs_path(nest_id: int) -> str:
    return f"/application/nests/{nest_id}/eggs"


class EggHandle(Handle[Egg]):
    model = Egg


class EggsAPI:
    def __init__(self, client: PanelClient) -> None:
        self._client = client

    async def list(self, nest_id: int) -> list[EggHandle]:
        response = await self._client.call(eggs_path(nest_id))
        return EggHandle.from_list(self._client, response)

    async def get(self, nest_id: int, egg_id: int) -> EggHandle:
        response = await self._client.call(f"{eggs_path(nest_id)}/{egg_id}")
        return EggHandle.from_item(self._client, response.data)
