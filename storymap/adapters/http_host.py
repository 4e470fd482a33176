"""Canvas host backed by the story map server's REST API.

Lets the engine run in one process against a canvas owned by another:

    async with HttpCanvasHost("http://localhost:8000") as host:
        await dispatch(host, CollapseCommand(node_id="..."))
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from storymap.errors import HostError
from storymap.models.canvas import Connector, Endpoint, Node

logger = logging.getLogger(__name__)


class HttpCanvasHost:
    """CanvasHost implementation talking to /api/nodes and /api/connectors."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: Base URL of the story map server
            timeout: HTTP request timeout in seconds
            transport: Optional transport override (e.g. httpx.ASGITransport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=f"{self.base_url}/api",
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> HttpCanvasHost:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            raise HostError(
                f"{method} {path} failed with {e.response.status_code}: {e.response.text}"
            ) from e
        except httpx.RequestError as e:
            raise HostError(f"Failed to connect to canvas at {self.base_url}: {e}") from e

    async def get_node(self, node_id: str) -> Node | None:
        try:
            response = await self._client.get(f"/nodes/{node_id}")
        except httpx.RequestError as e:
            raise HostError(f"Failed to connect to canvas at {self.base_url}: {e}") from e

        if response.status_code == 404:
            return None
        if response.is_error:
            raise HostError(f"GET /nodes/{node_id} failed with {response.status_code}")
        return Node.model_validate(response.json())

    async def clone_node(
        self,
        source_id: str,
        *,
        x: float,
        y: float,
        state: dict[str, Any],
    ) -> Node:
        response = await self._request(
            "POST",
            f"/nodes/{source_id}/clone",
            json={"x": x, "y": y, "state": state},
        )
        return Node.model_validate(response.json())

    async def _patch(self, node_id: str, **fields: Any) -> None:
        await self._request("PATCH", f"/nodes/{node_id}", json=fields)

    async def move_node(self, node_id: str, x: float, y: float) -> None:
        await self._patch(node_id, x=x, y=y)

    async def resize_node(self, node_id: str, width: float, height: float) -> None:
        await self._patch(node_id, width=width, height=height)

    async def set_hidden(self, node_id: str, hidden: bool) -> None:
        await self._patch(node_id, hidden=hidden)

    async def set_state(self, node_id: str, state: dict[str, Any]) -> None:
        await self._patch(node_id, state=state)

    async def list_connectors(self) -> list[Connector]:
        response = await self._request("GET", "/connectors")
        return [Connector.model_validate(item) for item in response.json()]

    async def create_connector(self, start: Endpoint, end: Endpoint) -> Connector:
        response = await self._request(
            "POST",
            "/connectors",
            json={"start": start.model_dump(mode="json"), "end": end.model_dump(mode="json")},
        )
        return Connector.model_validate(response.json())

    async def update_connector(
        self,
        connector_id: str,
        start: Endpoint,
        end: Endpoint,
    ) -> Connector:
        response = await self._request(
            "PUT",
            f"/connectors/{connector_id}",
            json={"start": start.model_dump(mode="json"), "end": end.model_dump(mode="json")},
        )
        return Connector.model_validate(response.json())
