"""User API endpoints."""

from __future__ import annotations

from typing import Any

from dactyl.api.client import PanelClient
from dactyl.api.handle import Handle, PendingUpdate, page_path
from dactyl.api.models import NewUser, User
from dactyl.api.payloads import create_body, user_request

USERS_PATH = "/application/users"


class UserHandle(Handle[User]):
    model = User

    @property
    def path(self) -> str:
        return f"{USERS_PATH}/{self.record.id}"

    def update(self, changes: dict[str, Any]) -> PendingUpdate[UserHandle]:
        """Patch user fields given by their panel names.

        The panel requires username, email and both names on every update,
        so those are sent from the current record unless overridden.
        """
        self._assign(changes)
        return self._patch(self.path, user_request(self.record, changes))

    def set_external_id(self, external_id: str) -> PendingUpdate[UserHandle]:
        return self.update({"external_id": external_id})

    def set_username(self, username: str) -> PendingUpdate[UserHandle]:
        return self.update({"username": username})

    def set_email(self, email: str) -> PendingUpdate[UserHandle]:
        return self.update({"email": email})

    def set_first_name(self, first_name: str) -> PendingUpdate[UserHandle]:
        return self.update({"first_name": first_name})

    def set_last_name(self, last_name: str) -> PendingUpdate[UserHandle]:
        return self.update({"last_name": last_name})

    def set_password(self, password: str) -> PendingUpdate[UserHandle]:
        # Write-only on the panel; nothing to keep locally.
        return self.update({"password": password})

    def set_admin(self, admin: bool) -> PendingUpdate[UserHandle]:
        return self.update({"root_admin": admin})

    def set_language(self, language: str) -> PendingUpdate[UserHandle]:
        return self.update({"language": language})

    async def delete(self) -> None:
        await self._client.call(self.path, "DELETE")


class UsersAPI:
    def __init__(self, client: PanelClient) -> None:
        self._client = client

    async def list(self, page: int | None = None) -> list[UserHandle]:
        response = await self._client.call(page_path(USERS_PATH, page))
        return UserHandle.from_list(self._client, response)

    async def get(self, user_id: int) -> UserHandle:
        response = await self._client.call(f"{USERS_PATH}/{user_id}")
        return UserHandle.from_item(self._client, response.data)

    async def get_by_external_id(self, external_id: str) -> UserHandle:
        response = await self._client.call(f"{USERS_PATH}/external/{external_id}")
        return UserHandle.from_item(self._client, response.data)

    async def create(self, options: NewUser) -> UserHandle:
        response = await self._client.call(USERS_PATH, "POST", create_body(options))
        return UserHandle.from_item(self._client, response.data)
