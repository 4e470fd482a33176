"""Orientation propagation.

Orientation is a property of the whole tree but every card keeps its own
copy, so changing it on one card means rewriting all of them: climb to the
root, then walk down writing the new layout type into each card and
re-gluing the connector from its parent onto the matching sides.
"""

import logging

from storymap.adapters.host import CanvasHost
from storymap.config import LayoutSettings
from storymap.layout.positioner import cascade_layout_change
from storymap.layout.topology import find_topmost_parent, walk_tree
from storymap.models.canvas import Endpoint, LayoutContext, Node
from storymap.models.card import canonical_sides

logger = logging.getLogger(__name__)


async def propagate_layout_type(
    host: CanvasHost,
    node: Node,
    context: LayoutContext,
    settings: LayoutSettings | None = None,
) -> list[str]:
    """Apply context.current to every card in `node`'s tree, then reflow it.

    The climb to the root happens before any write, so a cycle aborts the
    command with the tree untouched.

    Returns:
        ids of the cards moved by the final reflow.

    Raises:
        TopologyCycleError: if the parent links loop.
    """
    layout_type = context.current
    start_side, end_side = canonical_sides(layout_type)

    root = await find_topmost_parent(host, node, context)

    updated = 0
    async for current, via, _depth in walk_tree(host, root, context):
        fresh = await host.get_node(current.id)
        if fresh is None:
            continue
        card = fresh.card
        if card.layout_type != layout_type:
            await host.set_state(
                fresh.id,
                card.model_copy(update={"layout_type": layout_type}).to_state(),
            )
        if via is not None:
            await host.update_connector(
                via.id,
                Endpoint(node_id=via.start.node_id, side=start_side),
                Endpoint(node_id=fresh.id, side=end_side),
            )
        updated += 1

    logger.info(
        "layout %s -> %s applied to %d cards under %s",
        context.previous.value,
        layout_type.value,
        updated,
        root.id,
    )

    return await cascade_layout_change(host, root, context, settings)
