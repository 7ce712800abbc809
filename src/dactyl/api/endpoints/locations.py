"""Location API endpoints."""

from __future__ import annotations

from typing import Any

from dactyl.api.client import PanelClient
from dactyl.api.handle import Handle, PendingUpdate, page_path
from dactyl.api.models import Location, NewLocation
from dactyl.api.payloads import create_body, location_request

LOCATIONS_PATH = "/application/locations"


class LocationHandle(Handle[Location]):
    model = Location

    @property
    def path(self) -> str:
        return f"{LOCATIONS_PATH}/{self.record.id}"

    def update(self, changes: dict[str, Any]) -> PendingUpdate[LocationHandle]:
        """Patch ``short`` and/or ``long``; the other is sent unchanged."""
        self._assign(changes)
        return self._patch(self.path, location_request(self.record, changes))

    def set_short_code(self, short_code: str) -> PendingUpdate[LocationHandle]:
        return self.update({"short": short_code})

    def set_description(self, description: str) -> PendingUpdate[LocationHandle]:
        return self.update({"long": description})

    async def delete(self) -> None:
        await self._client.call(self.path, "DELETE")


class LocationsAPI:
    def __init__(self, client: PanelClient) -> None:
        self._client = client

    async def list(self, page: int | None = None) -> list[LocationHandle]:
        response = await self._client.call(page_path(LOCATIONS_PATH, page))
        return LocationHandle.from_list(self._client, response)

    async def get(self, location_id: int) -> LocationHandle:
        response = await self._client.call(f"{LOCATIONS_PATH}/{location_id}")
        return LocationHandle.from_item(self._client, response.data)

    async def create(self, options: NewLocation) -> LocationHandle:
        response = await self._client.call(LOCATIONS_PATH, "POST", create_body(options))
        return LocationHandle.from_item(self._client, response.data)
