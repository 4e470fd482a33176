"""Shared fixtures: an empty canvas and a helper for wiring cards together."""

import pytest

from storymap.adapters.host import InMemoryCanvas
from storymap.config import LayoutSettings
from storymap.models.canvas import Connector, Endpoint, Node
from storymap.models.card import LayoutType, canonical_sides
from storymap.utils.identifiers import generate_connector_id


@pytest.fixture
def canvas() -> InMemoryCanvas:
    return InMemoryCanvas()


@pytest.fixture
def settings() -> LayoutSettings:
    """Default gaps, independent of any STORYMAP_* variables in the env."""
    return LayoutSettings()


@pytest.fixture
def link(canvas: InMemoryCanvas):
    """Draw a parent -> child connector directly on the canvas."""

    def _link(parent: Node, child: Node, layout_type: LayoutType = LayoutType.vertical) -> Connector:
        start_side, end_side = canonical_sides(layout_type)
        connector = Connector(
            id=generate_connector_id(),
            start=Endpoint(node_id=parent.id, side=start_side),
            end=Endpoint(node_id=child.id, side=end_side),
        )
        canvas.connectors[connector.id] = connector
        return connector

    return _link
