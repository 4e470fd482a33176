"""Command dispatch.

Turns a UI command into calls on the engine. Structural commands always
end with a reflow of the affected tree. Errors propagate to the caller,
which decides how to tell the user.
"""

import logging

from storymap.adapters.host import CanvasHost
from storymap.config import LayoutSettings
from storymap.errors import NodeNotFoundError
from storymap.layout import (
    auto_layout,
    cascade_layout_change,
    collapse,
    create_child,
    create_parent,
    create_sibling,
    expand,
    propagate_layout_type,
)
from storymap.models.canvas import LayoutContext, Node
from storymap.models.card import LayoutType
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

logger = logging.getLogger(__name__)

# (relation, x offset, y offset) for each menu arrow, per orientation
_RELATIVE_ACTIONS: dict[LayoutType, dict[str, tuple[str, float, float]]] = {
    LayoutType.vertical: {
        "top": ("parent", 0, -50),
        "bottom": ("child", 0, 50),
        "left": ("sibling", -100, 0),
        "right": ("sibling", 100, 0),
    },
    LayoutType.horizontal: {
        "top": ("sibling", 0, -50),
        "bottom": ("sibling", 0, 50),
        "left": ("parent", -100, 0),
        "right": ("child", 100, 0),
    },
}


async def _create_relative(
    host: CanvasHost,
    node: Node,
    command: CreateRelative,
    settings: LayoutSettings | None,
) -> CommandResult:
    layout_type = node.card.layout_type
    relation, dx, dy = _RELATIVE_ACTIONS[layout_type][command.direction]

    if relation == "parent":
        created = await create_parent(host, node.id, dx, dy)
    elif relation == "child":
        created = await create_child(host, node.id, dx, dy)
    else:
        created = await create_sibling(host, node.id, dx, dy)

    anchor = created or node
    moved = await cascade_layout_change(host, anchor, LayoutContext.steady(layout_type), settings)
    return CommandResult(
        node_id=node.id,
        created_id=created.id if created else None,
        moved=moved,
    )


async def _update_card(host: CanvasHost, node: Node, **changes) -> CommandResult:
    # content-only edits; nothing moves
    await host.set_state(node.id, node.card.model_copy(update=changes).to_state())
    return CommandResult(node_id=node.id)


async def dispatch(
    host: CanvasHost,
    command: Command,
    settings: LayoutSettings | None = None,
) -> CommandResult:
    """Run one command against the canvas."""
    node = await host.get_node(command.node_id)
    if node is None:
        raise NodeNotFoundError(command.node_id)
    steady = LayoutContext.steady(node.card.layout_type)

    match command:
        case ChangeLayout(layout_type=layout_type):
            context = LayoutContext(previous=node.card.layout_type, current=layout_type)
            result = CommandResult(
                node_id=node.id,
                moved=await propagate_layout_type(host, node, context, settings),
            )
        case CreateRelative():
            result = await _create_relative(host, node, command, settings)
        case AutoLayoutCommand():
            result = CommandResult(
                node_id=node.id,
                moved=await auto_layout(host, node, steady, settings),
            )
        case CollapseCommand():
            result = CommandResult(
                node_id=node.id,
                moved=await collapse(host, node, steady, settings),
            )
        case ExpandCommand(all=expand_all):
            result = CommandResult(
                node_id=node.id,
                moved=await expand(host, node, steady, all=expand_all, settings=settings),
            )
        case SetCardType(card_type=card_type):
            result = await _update_card(host, node, card_type=card_type)
        case SetStatus(status=status):
            result = await _update_card(host, node, status=status)
        case SetLinks(links=links):
            result = await _update_card(host, node, links=links)
        case _:
            raise TypeError(f"Unsupported command: {type(command).__name__}")

    logger.info("%s on %s: created=%s moved=%d", command.kind, node.id, result.created_id, len(result.moved))
    return result
