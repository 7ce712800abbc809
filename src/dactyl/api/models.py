"""Pydantic models for panel API resources.

Records mirror the panel's attribute bags. Where the panel's field name is not
a good Python name (``root_admin``, ``2fa``, ``short``, ``long``) the record
uses a local name and keeps the remote one as its alias. Every other field
keeps the panel's snake_case name.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _PanelModel(BaseModel):
    """Base model that ignores extra fields and accepts local or remote names."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


RecordT = TypeVar("RecordT", bound=_PanelModel)


def hydrate(model: type[RecordT], attributes: dict[str, Any]) -> RecordT:
    """Build a record from a raw attribute bag. Absent fields stay unset."""
    return model.model_validate(attributes)


def dehydrate(record: _PanelModel) -> dict[str, Any]:
    """Inverse of :func:`hydrate`: remote names, unset fields omitted."""
    return record.model_dump(by_alias=True, exclude_unset=True)


def _to_int(v: Any, default: int | None) -> int | None:
    """Coerce a count from the API, falling back to ``default`` for null or junk."""
    if isinstance(v, bool):
        return default
    try:
        return int(v)
    except (TypeError, ValueError, OverflowError):
        return default


class Pagination(BaseModel):
    """One page of a list response. A value object; it never fetches.

    Any shape is accepted: missing, null or non-numeric counts take their
    defaults.
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    current_page: int = 1
    total_pages: int = 1
    total_items: int = Field(default=0, alias="total")
    items_per_page: int = Field(default=0, alias="per_page")
    count: int | None = None

    @field_validator("current_page", "total_pages", mode="before")
    @classmethod
    def _coerce_pages(cls, v):
        return _to_int(v, 1)

    @field_validator("total_items", "items_per_page", mode="before")
    @classmethod
    def _coerce_totals(cls, v):
        return _to_int(v, 0)

    @field_validator("count", mode="before")
    @classmethod
    def _coerce_count(cls, v):
        return _to_int(v, None)

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages


# Nested groups


class Limits(_PanelModel):
    memory: int | None = None
    swap: int | None = None
    disk: int | None = None
    io: int | None = None
    cpu: int | None = None
    threads: str | None = None
    oom_disabled: bool | None = None


class FeatureLimits(_PanelModel):
    databases: int | None = None
    allocations: int | None = None
    backups: int | None = None


class Container(_PanelModel):
    startup_command: str | None = None
    image: str | None = None
    installed: int | bool | None = None
    environment: dict[str, Any] | None = None


class SftpDetails(_PanelModel):
    ip: str | None = None
    port: int | None = None


# Application API records


class User(_PanelModel):
    id: int
    external_id: str | None = None
    uuid: str | None = None
    username: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    language: str | None = None
    admin: bool | None = Field(default=None, alias="root_admin")
    two_factor: bool | None = Field(default=None, alias="2fa")
    created_at: str | None = None
    updated_at: str | None = None


class Node(_PanelModel):
    id: int
    uuid: str | None = None
    public: bool | None = None
    name: str | None = None
    description: str | None = None
    location_id: int | None = None
    fqdn: str | None = None
    scheme: str | None = None
    behind_proxy: bool | None = None
    maintenance_mode: bool | None = None
    memory: int | None = None
    memory_overallocate: int | None = None
    disk: int | None = None
    disk_overallocate: int | None = None
    upload_size: int | None = None
    daemon_listen: int | None = None
    daemon_sftp: int | None = None
    daemon_base: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class NodeAllocation(_PanelModel):
    id: int
    ip: str | None = None
    alias: str | None = None
    port: int | None = None
    notes: str | None = None
    assigned: bool | None = None
    # Owning node's ID. Not sent by the panel; filled in at hydration.
    node: int | None = None


class Location(_PanelModel):
    id: int
    short_code: str | None = Field(default=None, alias="short")
    description: str | None = Field(default=None, alias="long")
    created_at: str | None = None
    updated_at: str | None = None


class Server(_PanelModel):
    id: int
    external_id: str | None = None
    uuid: str | None = None
    identifier: str | None = None
    name: str | None = None
    description: str | None = None
    suspended: bool | None = None
    limits: Limits | None = None
    feature_limits: FeatureLimits | None = None
    user: int | None = None
    node: int | None = None
    allocation: int | None = None
    nest: int | None = None
    egg: int | None = None
    pack: int | None = None
    container: Container | None = None
    created_at: str | None = None
    updated_at: str | None = None


class ServerDatabase(_PanelModel):
    id: int
    server: int | None = None
    host: int | None = None
    database: str | None = None
    username: str | None = None
    remote: str | None = None
    max_connections: int | None = None
    created_at: str | None = None
    updated_at: str | None = None


class Nest(_PanelModel):
    id: int
    uuid: str | None = None
    author: str | None = None
    name: str | None = None
    description: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class Egg(_PanelModel):
    id: int
    uuid: str | None = None
    name: str | None = None
    nest: int | None = None
    author: str | None = None
    description: str | None = None
    docker_image: str | None = None
    docker_images: dict[str, str] | None = None
    startup: str | None = None
    config: dict[str, Any] | None = None
    script: dict[str, Any] | None = None
    created_at: str | None = None
    updated_at: str | None = None


# Client API records


class ClientServer(_PanelModel):
    identifier: str
    internal_id: int | None = None
    uuid: str | None = None
    server_owner: bool | None = None
    name: str | None = None
    node: str | None = None
    description: str | None = None
    sftp_details: SftpDetails | None = None
    limits: Limits | None = None
    feature_limits: FeatureLimits | None = None
    invocation: str | None = None
    docker_image: str | None = None
    egg_features: list[str] | None = None
    status: str | None = None
    suspended: bool | None = Field(default=None, alias="is_suspended")
    is_installing: bool | None = None
    is_transferring: bool | None = None


class Usage(BaseModel):
    total: int | float | None = None
    current: int | float | None = None


class Utilization(BaseModel):
    """Current usage against the server's limits."""
    cpu: Usage
    memory: Usage
    disk: Usage


# Create options: friendly names in, remote names out via ``by_alias``.


class NewUser(_PanelModel):
    username: str
    email: str
    first_name: str
    last_name: str
    external_id: str | None = None
    password: str | None = None
    admin: bool | None = Field(default=None, alias="root_admin")
    language: str | None = None


class NewLocation(_PanelModel):
    short_code: str = Field(alias="short")
    description: str | None = Field(default=None, alias="long")


class NewNode(_PanelModel):
    name: str
    location_id: int
    fqdn: str
    memory: int
    disk: int
    description: str | None = None
    public: bool | None = None
    scheme: str = "https"
    behind_proxy: bool | None = None
    memory_overallocate: int = 0
    disk_overallocate: int = 0
    daemon_base: str | None = None
    daemon_port: int = Field(default=8080, alias="daemon_listen")
    daemon_sftp_port: int = Field(default=2022, alias="daemon_sftp")
    maintenance_mode: bool | None = None
    upload_size: int | None = None


class AllocationOptions(_PanelModel):
    default: int
    additional: list[int] | None = None


class DeployOptions(_PanelModel):
    locations: list[int]
    dedicated_ip: bool = False
    port_range: list[str] = Field(default_factory=list)


class NewServer(_PanelModel):
    name: str
    user: int
    egg: int
    image: str = Field(alias="docker_image")
    startup: str
    limits: Limits
    feature_limits: FeatureLimits
    environment: dict[str, Any] = Field(default_factory=dict)
    external_id: str | None = None
    description: str | None = None
    pack: int | None = None
    start_when_installed: bool | None = Field(default=None, alias="start_on_completion")
    skip_scripts: bool | None = None
    oom_disabled: bool | None = None
    allocation: AllocationOptions | None = None
    deploy: DeployOptions | None = None
