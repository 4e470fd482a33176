"""Spatial tree engine: topology, growth, orientation, collapse, layout."""

from storymap.layout.collapse import collapse, expand
from storymap.layout.factory import (
    clone_widget,
    connect_widgets,
    create_child,
    create_parent,
    create_sibling,
)
from storymap.layout.orientation import propagate_layout_type
from storymap.layout.positioner import auto_layout, cascade_layout_change
from storymap.layout.topology import find_connections, find_topmost_parent, walk_tree

__all__ = [
    # Topology reader
    "find_connections",
    "find_topmost_parent",
    "walk_tree",
    # Node factory
    "clone_widget",
    "connect_widgets",
    "create_child",
    "create_parent",
    "create_sibling",
    # Orientation
    "propagate_layout_type",
    # Collapse / expand
    "collapse",
    "expand",
    # Positioner
    "auto_layout",
    "cascade_layout_change",
]
