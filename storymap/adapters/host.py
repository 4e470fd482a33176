"""Canvas host protocol and an in-memory canvas.

The host owns every node and connector. The engine only ever sees copies,
and every change goes back through one of these calls.
"""

import logging
from typing import Any, Protocol

from storymap.errors import HostError
from storymap.models.canvas import Connector, Endpoint, Node
from storymap.utils.identifiers import generate_connector_id, generate_node_id

logger = logging.getLogger(__name__)


class CanvasHost(Protocol):
    """Protocol for the canvas that owns nodes and connectors."""

    async def get_node(self, node_id: str) -> Node | None:
        """Look a node up by id; None when it does not exist (any more)."""
        ...

    async def clone_node(
        self,
        source_id: str,
        *,
        x: float,
        y: float,
        state: dict[str, Any],
    ) -> Node:
        """Copy a node under a fresh id, at (x, y), with its state replaced."""
        ...

    async def move_node(self, node_id: str, x: float, y: float) -> None:
        ...

    async def resize_node(self, node_id: str, width: float, height: float) -> None:
        ...

    async def set_hidden(self, node_id: str, hidden: bool) -> None:
        ...

    async def set_state(self, node_id: str, state: dict[str, Any]) -> None:
        """Replace a node's state bag."""
        ...

    async def list_connectors(self) -> list[Connector]:
        """Every connector currently on the page."""
        ...

    async def create_connector(self, start: Endpoint, end: Endpoint) -> Connector:
        ...

    async def update_connector(
        self,
        connector_id: str,
        start: Endpoint,
        end: Endpoint,
    ) -> Connector:
        ...


class InMemoryCanvas:
    """A canvas page kept in dictionaries.

    Used by the server and by tests. Connectors are returned in creation
    order, matching how a page enumerates its children.
    """

    def __init__(self) -> None:
        self.nodes: dict[str, Node] = {}
        self.connectors: dict[str, Connector] = {}

    def _require_node(self, node_id: str) -> Node:
        node = self.nodes.get(node_id)
        if node is None:
            raise HostError(f"Unknown node: {node_id}")
        return node

    def add_node(
        self,
        *,
        x: float = 0.0,
        y: float = 0.0,
        width: float = 400.0,
        height: float = 160.0,
        state: dict[str, Any] | None = None,
        node_id: str | None = None,
    ) -> Node:
        """Place a new card on the page (host-level creation)."""
        node = Node(
            id=node_id or generate_node_id(),
            x=x,
            y=y,
            width=width,
            height=height,
            state=dict(state or {}),
        )
        if node.id in self.nodes:
            raise HostError(f"Node already exists: {node.id}")
        self.nodes[node.id] = node
        return node.model_copy(deep=True)

    def delete_node(self, node_id: str) -> None:
        """Remove a node; connectors that referenced it are left dangling."""
        self.nodes.pop(node_id, None)

    async def get_node(self, node_id: str) -> Node | None:
        node = self.nodes.get(node_id)
        return node.model_copy(deep=True) if node else None

    async def clone_node(
        self,
        source_id: str,
        *,
        x: float,
        y: float,
        state: dict[str, Any],
    ) -> Node:
        source = self._require_node(source_id)
        clone = source.model_copy(
            update={
                "id": generate_node_id(),
                "x": x,
                "y": y,
                "hidden": False,
                "state": dict(state),
            },
            deep=True,
        )
        self.nodes[clone.id] = clone
        logger.debug("cloned node %s -> %s", source_id, clone.id)
        return clone.model_copy(deep=True)

    async def move_node(self, node_id: str, x: float, y: float) -> None:
        node = self._require_node(node_id)
        node.x = x
        node.y = y

    async def resize_node(self, node_id: str, width: float, height: float) -> None:
        node = self._require_node(node_id)
        node.width = width
        node.height = height

    async def set_hidden(self, node_id: str, hidden: bool) -> None:
        self._require_node(node_id).hidden = hidden

    async def set_state(self, node_id: str, state: dict[str, Any]) -> None:
        self._require_node(node_id).state = dict(state)

    async def list_connectors(self) -> list[Connector]:
        return [c.model_copy(deep=True) for c in self.connectors.values()]

    async def create_connector(self, start: Endpoint, end: Endpoint) -> Connector:
        self._require_node(start.node_id)
        self._require_node(end.node_id)
        connector = Connector(id=generate_connector_id(), start=start, end=end)
        self.connectors[connector.id] = connector
        return connector.model_copy(deep=True)

    async def update_connector(
        self,
        connector_id: str,
        start: Endpoint,
        end: Endpoint,
    ) -> Connector:
        if connector_id not in self.connectors:
            raise HostError(f"Unknown connector: {connector_id}")
        connector = Connector(id=connector_id, start=start, end=end)
        self.connectors[connector_id] = connector
        return connector.model_copy(deep=True)
