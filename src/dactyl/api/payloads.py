"""Request bodies for create and partial-update calls.

Partial updates start from a base seeded with the record's current values for
the fields the target endpoint requires, then overlay the caller's changes.
The merge is shallow: a nested dict in ``changes`` (``limits``,
``feature_limits``) replaces the base's nested dict outright, so
``{"limits": {"memory": 1024}}`` sends no other limit even though the base
held them. Single-field setters of a nested group lose the sibling values.
Known issue, kept as is until it is settled whether the panel wants the full
group on every call.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from dactyl.api.models import Location, Node, Server, User


def merge_request(base: dict[str, Any], changes: dict[str, Any]) -> dict[str, Any]:
    """Overlay ``changes`` on ``base`` at the top level only."""
    return {**base, **changes}


def create_body(options: BaseModel) -> dict[str, Any]:
    """Translate a create-options model to the panel's field names."""
    return options.model_dump(by_alias=True, exclude_none=True)


def _seed(**fields: Any) -> dict[str, Any]:
    return {key: value for key, value in fields.items() if value is not None}


def _nested(group: BaseModel | None) -> dict[str, Any] | None:
    return group.model_dump(exclude_none=True) if group is not None else None


def user_request(user: User, changes: dict[str, Any]) -> dict[str, Any]:
    base = _seed(
        username=user.username,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
    )
    return merge_request(base, changes)


def node_request(node: Node, changes: dict[str, Any]) -> dict[str, Any]:
    base = _seed(
        name=node.name,
        location_id=node.location_id,
        fqdn=node.fqdn,
        scheme=node.scheme,
        memory=node.memory,
        memory_overallocate=node.memory_overallocate,
        disk=node.disk,
        disk_overallocate=node.disk_overallocate,
        daemon_sftp=node.daemon_sftp,
        daemon_listen=node.daemon_listen,
    )
    return merge_request(base, changes)


def location_request(location: Location, changes: dict[str, Any]) -> dict[str, Any]:
    base = _seed(short=location.short_code, long=location.description)
    return merge_request(base, changes)


def server_details_request(server: Server, changes: dict[str, Any]) -> dict[str, Any]:
    base = _seed(name=server.name, user=server.user)
    return merge_request(base, changes)


def server_build_request(server: Server, changes: dict[str, Any]) -> dict[str, Any]:
    base = _seed(
        allocation=server.allocation,
        limits=_nested(server.limits),
        feature_limits=_nested(server.feature_limits),
    )
    return merge_request(base, changes)


def server_startup_request(server: Server, changes: dict[str, Any]) -> dict[str, Any]:
    container = server.container
    base = _seed(
        startup=container.startup_command if container else None,
        egg=server.egg,
        image=container.image if container else None,
    )
    return merge_request(base, changes)
