"""Collapse / expand of subtrees.

A collapsed card hides every card below it and grows an expand tip; its
height before collapsing is kept in the state bag so expanding can put it
back exactly. Hidden cards always have a collapsed ancestor.
"""

import logging

from storymap.adapters.host import CanvasHost
from storymap.config import LayoutSettings, get_layout_settings
from storymap.errors import NodeNotFoundError
from storymap.layout.positioner import cascade_layout_change
from storymap.layout.topology import find_connections, walk_tree
from storymap.models.canvas import LayoutContext, Node

logger = logging.getLogger(__name__)


async def _mark_collapsed(host: CanvasHost, node: Node, settings: LayoutSettings) -> None:
    card = node.card
    await host.set_state(
        node.id,
        card.model_copy(update={"collapsed": True, "pre_collapse_height": node.height}).to_state(),
    )
    await host.resize_node(node.id, node.width, node.height + settings.collapse_tip_size)


async def _mark_expanded(host: CanvasHost, node: Node, settings: LayoutSettings) -> None:
    card = node.card
    height = card.pre_collapse_height or node.height - settings.collapse_tip_size
    await host.set_state(
        node.id,
        card.model_copy(update={"collapsed": False, "pre_collapse_height": 0.0}).to_state(),
    )
    await host.resize_node(node.id, node.width, height)


async def collapse(
    host: CanvasHost,
    node: Node,
    context: LayoutContext,
    settings: LayoutSettings | None = None,
) -> list[str]:
    """Hide everything below `node` and reflow the tree.

    Collapsing a collapsed card does nothing. Returns the ids moved by the
    reflow.
    """
    settings = settings or get_layout_settings()
    fresh = await host.get_node(node.id)
    if fresh is None:
        raise NodeNotFoundError(node.id)
    if fresh.card.collapsed:
        return []

    hidden = 0
    async for descendant, _via, depth in walk_tree(host, fresh, context):
        if depth == 0:
            continue
        if not descendant.hidden:
            await host.set_hidden(descendant.id, True)
            hidden += 1

    await _mark_collapsed(host, fresh, settings)
    logger.info("collapsed %s, hid %d cards", fresh.id, hidden)
    return await cascade_layout_change(host, fresh, context, settings)


async def expand(
    host: CanvasHost,
    node: Node,
    context: LayoutContext,
    all: bool = False,
    settings: LayoutSettings | None = None,
) -> list[str]:
    """Reveal the cards below `node` and reflow the tree.

    One level by default: direct children reappear, and any of them that
    still hides cards shows up collapsed. With all=True the whole subtree
    is expanded. Expanding something with nothing hidden does nothing.
    """
    settings = settings or get_layout_settings()
    fresh = await host.get_node(node.id)
    if fresh is None:
        raise NodeNotFoundError(node.id)

    if all:
        changed = await _expand_subtree(host, fresh, context, settings)
    else:
        changed = await _expand_one_level(host, fresh, context, settings)

    if not changed:
        return []
    logger.info("expanded %s%s", fresh.id, " (all)" if all else "")
    return await cascade_layout_change(host, fresh, context, settings)


async def _expand_one_level(
    host: CanvasHost,
    node: Node,
    context: LayoutContext,
    settings: LayoutSettings,
) -> bool:
    if not node.card.collapsed:
        return False

    await _mark_expanded(host, node, settings)
    connections = await find_connections(host, node, context)
    for child in connections.children:
        await host.set_hidden(child.node.id, False)
        if child.node.card.collapsed:
            continue
        grandchildren = await find_connections(host, child.node, context)
        if any(g.node.hidden for g in grandchildren.children):
            await _mark_collapsed(host, child.node, settings)
    return True


async def _expand_subtree(
    host: CanvasHost,
    root: Node,
    context: LayoutContext,
    settings: LayoutSettings,
) -> bool:
    changed = False
    async for current, _via, depth in walk_tree(host, root, context):
        fresh = await host.get_node(current.id)
        if fresh is None:
            continue
        if depth > 0 and fresh.hidden:
            await host.set_hidden(fresh.id, False)
            changed = True
        if fresh.card.collapsed:
            await _mark_expanded(host, fresh, settings)
            changed = True
    return changed
