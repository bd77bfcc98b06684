"""Client for the headless-browser PDF export service."""

from __future__ import annotations

from typing import Any

import httpx


class RendererClientError(Exception):
    """Raised when the PDF export service cannot produce a report."""


class RendererClient:
    """HTTP client for the PDF export service."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def render_pdf(self, bundle: dict[str, Any], origin: str | None = None) -> bytes:
        """Send a report bundle to the export service and return the PDF bytes."""
        payload = dict(bundle)
        if origin:
            payload["origin"] = origin
        try:
            async with self._client() as client:
                response = await client.post(f"{self.base_url}/api/export/pdf", json=payload)
        except httpx.HTTPError as exc:
            raise RendererClientError(f"Export service unreachable: {exc}") from exc

        if response.status_code != 200:
            raise RendererClientError(
                f"PDF export failed: {response.status_code} {response.text[:200]}"
            )
        content_type = response.headers.get("content-type", "")
        if not content_type.startswith("application/pdf"):
            raise RendererClientError(f"Unexpected content type from export service: {content_type!r}")
        return response.content

    async def health(self) -> None:
        """Raise RendererClientError unless the export service reports ok."""
        try:
            async with self._client() as client:
                response = await client.get(f"{self.base_url}/api/health")
        except httpx.HTTPError as exc:
            raise RendererClientError(f"Export service unreachable: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = None
        if response.status_code != 200 or not isinstance(body, dict) or not body.get("ok"):
            raise RendererClientError(f"Export service unhealthy: {response.status_code}")

    async def test_connection(self) -> bool:
        """Test if the export service is reachable and healthy."""
        try:
            await self.health()
            return True
        except RendererClientError:
            return False
