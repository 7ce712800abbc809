"""Tests for the panel HTTP client."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from dactyl.api.client import PanelClient, Response, normalize_url
from dactyl.api.exceptions import (
    PanelAPIError,
    PanelAuthenticationError,
    PanelConnectionError,
    PanelForbiddenError,
    PanelNotFoundError,
    PanelRateLimitError,
    PanelValidationError,
)


@pytest.fixture
def client():
    return PanelClient("https://panel.example.com", "test-key")


def _mock_http(client, response=None, side_effect=None):
    mock_http = AsyncMock()
    mock_http.is_closed = False
    if side_effect is not None:
        mock_http.request.side_effect = side_effect
    else:
        mock_http.request.return_value = response
    client._client = mock_http
    return mock_http


def _ok(status_code=200, json_data=None):
    response = MagicMock()
    response.status_code = status_code
    response.is_success = True
    response.content = b"" if json_data is None else b"{...}"
    response.json.return_value = json_data
    return response


class TestNormalizeUrl:
    def test_strips_trailing_slash(self):
        assert normalize_url("https://panel.example.com/") == "https://panel.example.com"

    def test_strips_api_suffix(self):
        assert normalize_url("https://panel.example.com/api") == "https://panel.example.com"

    def test_keeps_port(self):
        assert normalize_url("http://10.0.0.5:8080") == "http://10.0.0.5:8080"

    @pytest.mark.parametrize("url", ["panel.example.com", "ftp://panel.example.com", "", "https://"])
    def test_rejects_invalid(self, url):
        with pytest.raises(ValueError):
            normalize_url(url)

    def test_constructor_validates(self):
        with pytest.raises(ValueError):
            PanelClient("not a url", "key")


class TestClientInit:
    def test_stores_key_and_url(self, client):
        assert client.api_key == "test-key"
        assert client.url == "https://panel.example.com"

    def test_lazy_client_starts_none(self, client):
        assert client._client is None

    def test_get_client_creates_client(self, client):
        http_client = client._get_client()
        assert isinstance(http_client, httpx.AsyncClient)
        assert str(http_client.base_url).rstrip("/") == "https://panel.example.com/api"
        assert http_client.headers["Authorization"] == "Bearer test-key"

    def test_get_client_reuses_client(self, client):
        assert client._get_client() is client._get_client()


class TestErrorHandling:
    def _make_response(self, status_code, json_data=None, text=""):
        response = MagicMock(spec=httpx.Response)
        response.status_code = status_code
        response.is_success = 200 <= status_code < 300
        response.text = text
        response.url = "https://panel.example.com/api/application/users/9"
        if json_data is not None:
            response.json.return_value = json_data
        else:
            response.json.side_effect = Exception("no json")
        return response

    def _panel_error(self, status, detail):
        return {"errors": [{"code": "SomeException", "status": str(status), "detail": detail}]}

    def test_success_no_error(self, client):
        client._handle_errors(self._make_response(200))

    def test_401_raises_auth_error(self, client):
        with pytest.raises(PanelAuthenticationError, match="Invalid API key") as info:
            client._handle_errors(self._make_response(401, self._panel_error(401, "Unauthenticated.")))
        assert info.value.status_code == 401

    def test_403_raises_forbidden(self, client):
        with pytest.raises(PanelForbiddenError, match="not authorized") as info:
            client._handle_errors(
                self._make_response(403, self._panel_error(403, "This action is not authorized."))
            )
        assert info.value.status_code == 403

    def test_404_raises_not_found(self, client):
        with pytest.raises(PanelNotFoundError, match="Resource not found") as info:
            client._handle_errors(self._make_response(404))
        assert info.value.status_code == 404

    def test_422_raises_validation_error(self, client):
        errors = [{"code": "required", "detail": "The name field is required.", "source": {"field": "name"}}]
        with pytest.raises(PanelValidationError) as info:
            client._handle_errors(self._make_response(422, json_data={"errors": errors}))
        assert info.value.details == errors
        assert info.value.status_code == 422

    def test_422_with_no_json(self, client):
        with pytest.raises(PanelValidationError) as info:
            client._handle_errors(self._make_response(422, text="validation failed"))
        assert info.value.details == {"error": "validation failed"}

    def test_429_raises_rate_limit(self, client):
        with pytest.raises(PanelRateLimitError, match="Rate limit"):
            client._handle_errors(self._make_response(429))

    def test_500_uses_message(self, client):
        with pytest.raises(PanelAPIError, match="500.*Server error") as info:
            client._handle_errors(self._make_response(500, json_data={"message": "Server error"}))
        assert info.value.status_code == 500

    def test_500_with_no_json(self, client):
        with pytest.raises(PanelAPIError, match="500.*Internal Server Error"):
            client._handle_errors(self._make_response(500, text="Internal Server Error"))

    def test_error_list_of_strings(self, client):
        with pytest.raises(PanelAPIError, match="500.*boom") as info:
            client._handle_errors(self._make_response(500, json_data={"errors": ["boom"]}))
        assert info.value.status_code == 500


class TestCall:
    @pytest.mark.asyncio
    async def test_single_object(self, client):
        body = {"object": "user", "attributes": {"id": 1}}
        mock_http = _mock_http(client, _ok(json_data=body))

        result = await client.call("/application/users/1")
        assert result == Response(200, body, None)
        mock_http.request.assert_called_once_with("GET", "/application/users/1", json=None)

    @pytest.mark.asyncio
    async def test_list_object_splits_pagination(self, client):
        pagination = {"total": 1, "count": 1, "per_page": 50, "current_page": 1, "total_pages": 1}
        items = [{"object": "user", "attributes": {"id": 1}}]
        body = {"object": "list", "data": items, "meta": {"pagination": pagination}}
        _mock_http(client, _ok(json_data=body))

        result = await client.call("/application/users?page=1")
        assert result.data == items
        assert result.pagination == pagination

    @pytest.mark.asyncio
    async def test_list_without_meta(self, client):
        body = {"object": "list", "data": []}
        _mock_http(client, _ok(json_data=body))

        result = await client.call("/application/nests/1/eggs")
        assert result.data == []
        assert result.pagination is None

    @pytest.mark.asyncio
    async def test_sends_method_and_body(self, client):
        mock_http = _mock_http(client, _ok(json_data={"object": "user", "attributes": {"id": 1}}))

        await client.call("/application/users/1", "PATCH", {"username": "x"})
        mock_http.request.assert_called_once_with("PATCH", "/application/users/1", json={"username": "x"})

    @pytest.mark.asyncio
    async def test_204_returns_no_data(self, client):
        _mock_http(client, _ok(status_code=204))

        result = await client.call("/application/servers/1/suspend", "POST", None, True)
        assert result == Response(204)

    @pytest.mark.asyncio
    async def test_expect_no_body_ignores_content(self, client):
        response = _ok(json_data={"ignored": True})
        _mock_http(client, response)

        result = await client.call("/client/servers/abc/power", "POST", {"signal": "start"}, True)
        assert result.data is None
        response.json.assert_not_called()

    @pytest.mark.asyncio
    async def test_error_status_raises(self, client):
        response = MagicMock(spec=httpx.Response)
        response.status_code = 404
        response.is_success = False
        response.text = ""
        response.url = "https://panel.example.com/api/application/users/9"
        response.json.side_effect = Exception("no json")
        _mock_http(client, response)

        with pytest.raises(PanelNotFoundError):
            await client.call("/application/users/9")

    @pytest.mark.asyncio
    async def test_network_failure_is_status_zero(self, client):
        _mock_http(client, side_effect=httpx.ConnectError("Name or service not known"))

        with pytest.raises(PanelConnectionError) as info:
            await client.call("/application/servers")
        assert info.value.status_code == 0


class TestClose:
    @pytest.mark.asyncio
    async def test_close_when_no_client(self, client):
        await client.close()

    @pytest.mark.asyncio
    async def test_close_calls_aclose(self, client):
        mock_http = _mock_http(client)
        await client.close()
        mock_http.aclose.assert_called_once()

    @pytest.mark.asyncio
    async def test_close_when_already_closed(self, client):
        mock_http = _mock_http(client)
        mock_http.is_closed = True
        await client.close()
        mock_http.aclose.assert_not_called()
