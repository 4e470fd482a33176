"""Topology reader: the tree as seen through connectors.

Nothing here is cached. Every call re-scans the page's connectors, so
callers always see the topology as it is right now.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator

from storymap.adapters.host import CanvasHost
from storymap.errors import TopologyCycleError
from storymap.models.canvas import Connection, Connections, Connector, LayoutContext, Node

logger = logging.getLogger(__name__)


async def find_connections(
    host: CanvasHost,
    node: Node,
    context: LayoutContext | None = None,
) -> Connections:
    """Split the connectors touching `node` into parents and children.

    A connector ending at the node is a parent edge, one starting at it is a
    child edge. Edges whose far node no longer exists are left out.
    """
    parents: list[Connection] = []
    children: list[Connection] = []

    for connector in await host.list_connectors():
        if connector.end.node_id == node.id:
            far_id, bucket = connector.start.node_id, parents
        elif connector.start.node_id == node.id:
            far_id, bucket = connector.end.node_id, children
        else:
            continue

        far = await host.get_node(far_id)
        if far is None:
            logger.debug("connector %s references missing node %s", connector.id, far_id)
            continue
        bucket.append(Connection(connector=connector, node=far))

    return Connections(parents=tuple(parents), children=tuple(children))


async def find_topmost_parent(
    host: CanvasHost,
    node: Node,
    context: LayoutContext | None = None,
) -> Node:
    """Climb first-parent links until a node without parents is reached.

    Raises:
        TopologyCycleError: if the climb comes back to a node it has seen.
    """
    path = [node.id]
    visited = {node.id}
    current = node

    while True:
        connections = await find_connections(host, current, context)
        if not connections.parents:
            return current

        if len(connections.parents) > 1:
            # first reported parent wins; malformed graphs are not repaired
            logger.warning(
                "node %s has %d parents, following %s",
                current.id,
                len(connections.parents),
                connections.parents[0].node.id,
            )

        current = connections.parents[0].node
        path.append(current.id)
        if current.id in visited:
            raise TopologyCycleError(path)
        visited.add(current.id)


async def walk_tree(
    host: CanvasHost,
    root: Node,
    context: LayoutContext | None = None,
    *,
    include_collapsed: bool = True,
) -> AsyncIterator[tuple[Node, Connector | None, int]]:
    """Depth-first, pre-order walk below `root`.

    Yields (node, connector from its parent, depth); the root comes with no
    connector at depth 0. Children are re-read from the host when their
    parent is reached, after the caller has handled the parent, so writes
    made to a parent are visible to its children.

    With include_collapsed=False the walk does not descend below collapsed
    nodes and skips hidden ones.
    """
    visited: set[str] = set()
    stack: list[tuple[Node, Connector | None, int]] = [(root, None, 0)]

    while stack:
        node, via, depth = stack.pop()
        if node.id in visited:
            logger.warning("node %s reached twice, skipping", node.id)
            continue
        visited.add(node.id)

        yield node, via, depth

        # re-read so the walk sees whatever the caller just wrote
        fresh = await host.get_node(node.id)
        if fresh is None:
            continue
        if not include_collapsed and fresh.card.collapsed:
            continue
        connections = await find_connections(host, fresh, context)
        # reversed so children pop in the order the host reported them
        for child in reversed(connections.children):
            if not include_collapsed and child.node.hidden:
                continue
            stack.append((child.node, child.connector, depth + 1))
