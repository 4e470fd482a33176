"""Core data models for the story map engine."""

from storymap.models.card import (
    CARD_RELATIONS,
    CardLink,
    CardRelation,
    CardState,
    CardStatus,
    CardType,
    LayoutType,
    Side,
    canonical_sides,
    child_type_of,
    parent_type_of,
)
from storymap.models.canvas import (
    Connection,
    Connections,
    Connector,
    Endpoint,
    LayoutContext,
    Node,
)
from storymap.models.commands import (
    AutoLayoutCommand,
    ChangeLayout,
    CollapseCommand,
    Command,
    CommandResult,
    CreateRelative,
    ExpandCommand,
    SetCardType,
    SetLinks,
    SetStatus,
)

__all__ = [
    # Cards
    "CARD_RELATIONS",
    "CardLink",
    "CardRelation",
    "CardState",
    "CardStatus",
    "CardType",
    "LayoutType",
    "Side",
    "canonical_sides",
    "child_type_of",
    "parent_type_of",
    # Canvas snapshots
    "Connection",
    "Connections",
    "Connector",
    "Endpoint",
    "LayoutContext",
    "Node",
    # Commands
    "AutoLayoutCommand",
    "ChangeLayout",
    "CollapseCommand",
    "Command",
    "CommandResult",
    "CreateRelative",
    "ExpandCommand",
    "SetCardType",
    "SetLinks",
    "SetStatus",
]
