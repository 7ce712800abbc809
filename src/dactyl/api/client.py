"""Async HTTP client for the Pterodactyl panel API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from dactyl.api.exceptions import (
    PanelAPIError,
    PanelAuthenticationError,
    PanelConnectionError,
    PanelForbiddenError,
    PanelNotFoundError,
    PanelRateLimitError,
    PanelValidationError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Response:
    """Decoded panel response.

    ``data`` is the item list for list objects and the whole body otherwise.
    ``pagination`` is the raw ``meta.pagination`` block of list objects.
    """

    status_code: int
    data: Any = None
    pagination: dict[str, Any] | None = None


def normalize_url(url: str) -> str:
    """Validate a panel URL and strip any trailing slash or ``/api``."""
    try:
        parsed = httpx.URL(url.strip())
    except httpx.InvalidURL as exc:
        raise ValueError(f"Invalid panel URL: {url!r}") from exc
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise ValueError(f"Invalid panel URL: {url!r}")
    base = str(parsed).rstrip("/")
    if base.endswith("/api"):
        base = base[: -len("/api")]
    return base


class PanelClient:
    """Async API client for a Pterodactyl panel.

    Works for both application (admin) keys and client (user) keys; the key
    type only decides which endpoints the panel will accept.
    Uses a single long-lived httpx.AsyncClient, lazily created on first call.
    """

    def __init__(self, url: str, api_key: str) -> None:
        self._url = normalize_url(url)
        self._api_key = api_key
        self._client: httpx.AsyncClient | None = None

    @property
    def url(self) -> str:
        return self._url

    @property
    def api_key(self) -> str:
        return self._api_key

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=f"{self._url}/api",
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Accept": "application/json",
                    "Content-Type": "application/json",
                },
                timeout=httpx.Timeout(30.0, connect=10.0),
            )
        return self._client

    async def call(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        expect_no_body: bool = False,
    ) -> Response:
        """Issue one request and decode the panel's reply.

        Raises a PanelAPIError subclass for any non-2xx status and
        PanelConnectionError when the panel could not be reached.
        """
        client = self._get_client()
        logger.debug("%s %s", method, path)
        try:
            response = await client.request(method, path, json=body)
        except httpx.TransportError as exc:
            raise PanelConnectionError(f"Could not reach {self._url}: {exc}") from exc
        logger.debug("%s %s -> %s", method, path, response.status_code)
        self._handle_errors(response)

        if expect_no_body or response.status_code == 204 or not response.content:
            return Response(response.status_code)
        payload = response.json()
        if isinstance(payload, dict) and payload.get("object") == "list":
            pagination = (payload.get("meta") or {}).get("pagination")
            return Response(response.status_code, payload.get("data", []), pagination)
        return Response(response.status_code, payload)

    def _handle_errors(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        status = response.status_code
        detail = self._error_detail(response)
        logger.debug("Panel error %s: %s", status, detail)
        if status == 401:
            raise PanelAuthenticationError(f"Invalid API key: {detail}", status)
        if status == 403:
            raise PanelForbiddenError(f"Forbidden: {detail}", status)
        if status == 404:
            raise PanelNotFoundError(f"Resource not found: {response.url}", status)
        if status == 422:
            try:
                details = response.json().get("errors", [])
            except Exception:
                details = {"error": response.text}
            raise PanelValidationError(details)
        if status == 429:
            raise PanelRateLimitError("Rate limit exceeded", status)
        raise PanelAPIError(f"API error {status}: {detail}", status)

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            body = response.json()
        except Exception:
            return response.text
        errors = body.get("errors") if isinstance(body, dict) else None
        if errors:
            first = errors[0]
            if not isinstance(first, dict):
                return str(first)
            return first.get("detail") or first.get("code") or response.text
        if isinstance(body, dict) and "message" in body:
            return body["message"]
        return response.text

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
