"""Snapshots of host canvas objects.

These are plain values returned by a CanvasHost. They are never live: the
engine writes through the host and re-reads whatever it needs afterwards.
"""

from typing import Any, Self

from pydantic import BaseModel, Field

from storymap.models.card import CardState, LayoutType, Side


class Node(BaseModel):
    """A positioned, sized card on the canvas."""

    id: str
    x: float = 0.0
    y: float = 0.0
    width: float = 400.0
    height: float = 160.0
    hidden: bool = False
    state: dict[str, Any] = Field(default_factory=dict)

    @property
    def card(self) -> CardState:
        """Typed view of the state bag."""
        return CardState.from_state(self.state)

    def extent(self, layout_type: LayoutType) -> float:
        """Size along the primary (parent -> child) axis."""
        return self.height if layout_type == LayoutType.vertical else self.width

    def breadth(self, layout_type: LayoutType) -> float:
        """Size along the sibling axis."""
        return self.width if layout_type == LayoutType.vertical else self.height


class Endpoint(BaseModel):
    """One end of a connector, glued to a side of a node."""

    node_id: str
    side: Side


class Connector(BaseModel):
    """A directed parent -> child edge between two nodes."""

    id: str
    start: Endpoint
    end: Endpoint


class LayoutContext(BaseModel):
    """Orientation before and after the triggering command."""

    model_config = {"frozen": True}

    previous: LayoutType
    current: LayoutType

    @classmethod
    def steady(cls, layout_type: LayoutType) -> Self:
        """Context for commands that leave the orientation unchanged."""
        return cls(previous=layout_type, current=layout_type)

    @property
    def changed(self) -> bool:
        return self.previous != self.current


class Connection(BaseModel):
    """A connector together with the node at its far end."""

    model_config = {"frozen": True}

    connector: Connector
    node: Node


class Connections(BaseModel):
    """Read-only snapshot of the edges touching one node."""

    model_config = {"frozen": True}

    parents: tuple[Connection, ...] = ()
    children: tuple[Connection, ...] = ()
