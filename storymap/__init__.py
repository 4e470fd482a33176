"""Story map cards - spatial tree engine for cards linked by connectors."""

from storymap.adapters import CanvasHost, HttpCanvasHost, InMemoryCanvas
from storymap.commands import dispatch
from storymap.config import LayoutSettings, get_layout_settings
from storymap.errors import (
    HostError,
    NodeNotFoundError,
    StoryMapError,
    TopologyCycleError,
    TopologyError,
)
from storymap.layout import (
    auto_layout,
    cascade_layout_change,
    collapse,
    create_child,
    create_parent,
    create_sibling,
    expand,
    find_connections,
    propagate_layout_type,
)
from storymap.models import (
    CardState,
    CardType,
    Command,
    CommandResult,
    LayoutContext,
    LayoutType,
    Node,
)

__all__ = [
    # Hosts
    "CanvasHost",
    "HttpCanvasHost",
    "InMemoryCanvas",
    # Models
    "CardState",
    "CardType",
    "Command",
    "CommandResult",
    "LayoutContext",
    "LayoutType",
    "Node",
    # Engine operations
    "auto_layout",
    "cascade_layout_change",
    "collapse",
    "create_child",
    "create_parent",
    "create_sibling",
    "expand",
    "find_connections",
    "propagate_layout_type",
    "dispatch",
    # Configuration
    "LayoutSettings",
    "get_layout_settings",
    # Errors
    "HostError",
    "NodeNotFoundError",
    "StoryMapError",
    "TopologyCycleError",
    "TopologyError",
]
