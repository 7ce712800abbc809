"""Admin and user entry points.

Construction does no I/O. Use ``await AdminClient.connect(url, key)`` (or
``UserClient.connect``) to build a client and run the connectivity check in
one step, or construct one around an existing PanelClient and call
``check_connection()`` yourself.
"""

from __future__ import annotations

import logging
from typing import TypeVar

from dactyl.api.client import PanelClient
from dactyl.api.endpoints.client_servers import ClientServerHandle, ClientServersAPI
from dactyl.api.endpoints.eggs import EggHandle, EggsAPI
from dactyl.api.endpoints.locations import LocationHandle, LocationsAPI
from dactyl.api.endpoints.nests import NestHandle, NestsAPI
from dactyl.api.endpoints.nodes import NodeHandle, NodesAPI
from dactyl.api.endpoints.servers import ServerHandle, ServersAPI
from dactyl.api.endpoints.users import UserHandle, UsersAPI
from dactyl.api.exceptions import ConnectionCheckError, PanelAPIError
from dactyl.api.models import NewLocation, NewNode, NewServer, NewUser

logger = logging.getLogger(__name__)

SOLUTIONS = {
    0: "Most likely the hostname is configured wrong, so the request never reached the panel.",
    401: "Authorization header either missing or not provided.",
    403: "Double check the API key (application key for admin, client key for user).",
    404: "Result not found.",
    422: "Validation error.",
    500: "Panel errored, check panel logs.",
}

ClientT = TypeVar("ClientT", bound="_PanelFacade")


class _PanelFacade:
    CHECK_PATH = "/"

    def __init__(self, client: PanelClient) -> None:
        self._client = client

    @property
    def client(self) -> PanelClient:
        return self._client

    @classmethod
    async def connect(cls: type[ClientT], url: str, api_key: str) -> ClientT:
        """Build a client and verify the panel accepts the key.

        Raises ValueError for a malformed URL and ConnectionCheckError when
        the check fails; the transport is closed in that case.
        """
        facade = cls(PanelClient(url, api_key))
        try:
            await facade.check_connection()
        except Exception:
            await facade.close()
            raise
        return facade

    async def check_connection(self) -> None:
        try:
            response = await self._client.call(self.CHECK_PATH)
        except PanelAPIError as exc:
            logger.debug("Connection check against %s failed: %s", self._client.url, exc)
            raise ConnectionCheckError(exc.status_code, SOLUTIONS.get(exc.status_code)) from exc
        if response.status_code != 200:
            raise ConnectionCheckError(response.status_code, SOLUTIONS.get(response.status_code))

    async def close(self) -> None:
        await self._client.close()

    async def __aenter__(self: ClientT) -> ClientT:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


class AdminClient(_PanelFacade):
    """Application API, authenticated with an application key."""

    CHECK_PATH = "/application/servers"

    def __init__(self, client: PanelClient) -> None:
        super().__init__(client)
        self.users = UsersAPI(client)
        self.nodes = NodesAPI(client)
        self.locations = LocationsAPI(client)
        self.servers = ServersAPI(client)
        self.nests = NestsAPI(client)
        self.eggs = EggsAPI(client)

    async def get_users(self, page: int | None = None) -> list[UserHandle]:
        return await self.users.list(page)

    async def get_nodes(self, page: int | None = None) -> list[NodeHandle]:
        return await self.nodes.list(page)

    async def get_locations(self, page: int | None = None) -> list[LocationHandle]:
        return await self.locations.list(page)

    async def get_servers(self, page: int | None = None) -> list[ServerHandle]:
        return await self.servers.list(page)

    async def get_nests(self, page: int | None = None) -> list[NestHandle]:
        return await self.nests.list(page)

    async def get_user(self, user_id: int) -> UserHandle:
        return await self.users.get(user_id)

    async def get_node(self, node_id: int) -> NodeHandle:
        return await self.nodes.get(node_id)

    async def get_location(self, location_id: int) -> LocationHandle:
        return await self.locations.get(location_id)

    async def get_server(self, server_id: int) -> ServerHandle:
        return await self.servers.get(server_id)

    async def get_nest(self, nest_id: int) -> NestHandle:
        return await self.nests.get(nest_id)

    async def get_egg(self, nest_id: int, egg_id: int) -> EggHandle:
        return await self.eggs.get(nest_id, egg_id)

    async def create_user(self, options: NewUser) -> UserHandle:
        return await self.users.create(options)

    async def create_node(self, options: NewNode) -> NodeHandle:
        return await self.nodes.create(options)

    async def create_location(self, options: NewLocation) -> LocationHandle:
        return await self.locations.create(options)

    async def create_server(self, options: NewServer) -> ServerHandle:
        return await self.servers.create(options)


class UserClient(_PanelFacade):
    """Client API, authenticated with a user's client key."""

    CHECK_PATH = "/client"

    def __init__(self, client: PanelClient) -> None:
        super().__init__(client)
        self.servers = ClientServersAPI(client)

    async def get_client_servers(self, page: int | None = None) -> list[ClientServerHandle]:
        return await self.servers.list(page)

    async def get_client_server(self, identifier: str) -> ClientServerHandle:
        return await self.servers.get(identifier)
