"""Shared test fixtures for dactyl."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from dactyl.api.client import PanelClient, Response


def item_response(obj: str, attributes: dict) -> Response:
    """A single-object reply as returned by PanelClient.call."""
    return Response(200, {"object": obj, "attributes": attributes})


def list_response(obj: str, attributes: list[dict], pagination: dict | None = None) -> Response:
    """A list reply as returned by PanelClient.call."""
    return Response(200, [{"object": obj, "attributes": a} for a in attributes], pagination)


@pytest.fixture
def mock_client():
    """A PanelClient with a mocked call()."""
    client = PanelClient("https://panel.example.com", "test-api-key")
    client.call = AsyncMock(return_value=Response(204))
    return client


@pytest.fixture
def sample_pagination():
    return {
        "total": 27,
        "count": 3,
        "per_page": 25,
        "current_page": 2,
        "total_pages": 2,
        "links": {"previous": "https://panel.example.com/api/application/users?page=1"},
    }


@pytest.fixture
def sample_user_data():
    """Raw user attributes."""
    return {
        "id": 1,
        "external_id": None,
        "uuid": "c4022c6c-9bf1-4a23-bff9-519cceb38335",
        "username": "codeco",
        "email": "codeco@file.properties",
        "first_name": "Rihan",
        "last_name": "Arfan",
        "language": "en",
        "root_admin": True,
        "2fa": False,
        "created_at": "2020-06-12T20:18:43+00:00",
        "updated_at": "2020-06-12T20:18:43+00:00",
    }


@pytest.fixture
def sample_node_data():
    """Raw node attributes."""
    return {
        "id": 1,
        "uuid": "1046d1d1-b8ef-4771-82b1-2b5946d33397",
        "public": True,
        "name": "Test",
        "description": "Test",
        "location_id": 1,
        "fqdn": "pterodactyl.file.properties",
        "scheme": "https",
        "behind_proxy": False,
        "maintenance_mode": False,
        "memory": 2048,
        "memory_overallocate": 0,
        "disk": 5000,
        "disk_overallocate": 0,
        "upload_size": 100,
        "daemon_listen": 8080,
        "daemon_sftp": 2022,
        "daemon_base": "/var/lib/pterodactyl/volumes",
    }


@pytest.fixture
def sample_server_data():
    """Raw application server attributes."""
    return {
        "id": 5,
        "external_id": "ext-5",
        "uuid": "1a7ce997-259b-452e-8b4e-cecc464142ca",
        "identifier": "1a7ce997",
        "name": "Gaming",
        "description": "Matt from Wii Sports",
        "suspended": False,
        "limits": {"memory": 512, "swap": 0, "disk": 1024, "io": 500, "cpu": 100, "threads": None},
        "feature_limits": {"databases": 5, "allocations": 5, "backups": 2},
        "user": 1,
        "node": 1,
        "allocation": 1,
        "nest": 1,
        "egg": 5,
        "container": {
            "startup_command": "java -Xms128M -Xmx{{SERVER_MEMORY}}M -jar {{SERVER_JARFILE}}",
            "image": "quay.io/pterodactyl/core:java",
            "installed": 1,
            "environment": {"SERVER_JARFILE": "server.jar"},
        },
    }


@pytest.fixture
def sample_client_server_data():
    """Raw client server attributes."""
    return {
        "server_owner": True,
        "identifier": "d3aac109",
        "internal_id": 5,
        "uuid": "d3aac109-e5a0-4331-b03e-3454f7e136dc",
        "name": "Survival",
        "node": "Test",
        "sftp_details": {"ip": "pterodactyl.file.properties", "port": 2022},
        "description": "",
        "limits": {"memory": 1024, "swap": 0, "disk": 5120, "io": 500, "cpu": 200},
        "invocation": "java -Xms128M -Xmx1024M -jar server.jar",
        "docker_image": "ghcr.io/pterodactyl/yolks:java_17",
        "egg_features": ["eula"],
        "feature_limits": {"databases": 2, "allocations": 3, "backups": 1},
        "status": None,
        "is_suspended": False,
        "is_installing": False,
        "is_transferring": False,
    }
