"""Exceptions raised by the story map engine.

Dangling connectors and missing card relations are normal outcomes and are
never raised; only the conditions below abort an operation.
"""


class StoryMapError(Exception):
    """Base class for engine failures."""
    pass


class NodeNotFoundError(StoryMapError):
    """A node id handed to an operation does not resolve on the canvas."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Node not found: {node_id}")
        self.node_id = node_id


class TopologyError(StoryMapError):
    """The connector graph is not a tree."""
    pass


class TopologyCycleError(TopologyError):
    """Ascending parent links revisited a node."""

    def __init__(self, path: list[str]) -> None:
        super().__init__(f"Cycle detected while ascending: {' -> '.join(path)}")
        self.path = path


class HostError(StoryMapError):
    """The canvas host failed to clone, connect, or update an element."""
    pass
