"""API-bound handles around plain records.

A handle pairs a record from :mod:`dactyl.api.models` with the client it came
from and, for list results, the page it was on. Reads fall through to the
record (``handle.name`` is ``handle.record.name``). Mutations go through
:class:`PendingUpdate`.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Generator
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

from dactyl.api.client import PanelClient, Response
from dactyl.api.models import Pagination, dehydrate, hydrate

RecordT = TypeVar("RecordT", bound=BaseModel)
HandleT = TypeVar("HandleT", bound="Handle")


def page_path(path: str, page: int | None) -> str:
    """Append the page query. ``None`` and ``0`` both mean page 1."""
    return f"{path}?page={page or 1}"


class PendingUpdate(Generic[HandleT]):
    """An update already applied to the local record but not yet confirmed.

    ``optimistic`` is the handle that was mutated in place. Awaiting the
    pending update sends the request and returns a new handle built from the
    panel's response, which is the one to trust when the two disagree.
    Each await sends the request again.
    """

    def __init__(self, optimistic: HandleT, send: Callable[[], Awaitable[HandleT]]) -> None:
        self.optimistic = optimistic
        self._send = send

    async def confirm(self) -> HandleT:
        return await self._send()

    def __await__(self) -> Generator[Any, None, HandleT]:
        return self.confirm().__await__()

    def __repr__(self) -> str:
        return f"PendingUpdate({self.optimistic!r})"


class Handle(Generic[RecordT]):
    model: ClassVar[type[BaseModel]]

    def __init__(
        self,
        client: PanelClient,
        record: RecordT,
        pagination: Pagination | None = None,
    ) -> None:
        self._client = client
        self.record = record
        self.pagination = pagination

    def __getattr__(self, name: str) -> Any:
        record = self.__dict__.get("record")
        if record is None or name.startswith("_"):
            raise AttributeError(name)
        return getattr(record, name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.record!r})"

    @classmethod
    def from_item(
        cls: type[HandleT],
        client: PanelClient,
        item: dict[str, Any],
        pagination: Pagination | None = None,
        **extra: Any,
    ) -> HandleT:
        """Hydrate one ``{"object": ..., "attributes": {...}}`` item."""
        return cls(client, hydrate(cls.model, {**item["attributes"], **extra}), pagination)

    @classmethod
    def from_list(cls: type[HandleT], client: PanelClient, response: Response, **extra: Any) -> list[HandleT]:
        """Hydrate a list response in panel order, sharing one cursor."""
        pagination = None
        if isinstance(response.pagination, dict):
            pagination = Pagination.model_validate(response.pagination)
        return [cls.from_item(client, item, pagination, **extra) for item in response.data]

    def _assign(self, changes: dict[str, Any]) -> None:
        """Apply panel-named ``changes`` to the local record.

        Top level only, like the request merge. Keys that are not record
        fields (``password``, ``startup``) are skipped.
        """
        model = type(self.record)
        merged = hydrate(model, {**dehydrate(self.record), **changes})
        for name, field in model.model_fields.items():
            if (field.alias or name) in changes:
                setattr(self.record, name, getattr(merged, name))

    def _patch(self: HandleT, path: str, body: dict[str, Any]) -> PendingUpdate[HandleT]:
        client = self._client

        async def send() -> HandleT:
            response = await client.call(path, "PATCH", body)
            return type(self).from_item(client, response.data)

        return PendingUpdate(self, send)
