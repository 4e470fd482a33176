"""Cascading positioner.

Re-derives the visible tree below the topmost parent and moves every card
so that nothing overlaps:

- children sit one level gap past their parent's far edge along the
  primary axis (down for Vertical, right for Horizontal);
- siblings spread along the other axis, each owning a slot as wide as its
  own subtree, and the group of slots is centered on the parent;
- a collapsed card takes up only its own footprint.

The root never moves, so running the pass on a settled tree moves nothing.
"""

import logging
from dataclasses import dataclass, field

from storymap.adapters.host import CanvasHost
from storymap.config import LayoutSettings, get_layout_settings
from storymap.layout.topology import find_topmost_parent, walk_tree
from storymap.models.canvas import LayoutContext, Node
from storymap.models.card import LayoutType

logger = logging.getLogger(__name__)

_EPSILON = 1e-6


@dataclass
class _TreeSnapshot:
    """Visible tree for one layout pass, discarded afterwards."""

    order: list[Node] = field(default_factory=list)  # pre-order, root first
    children: dict[str, list[str]] = field(default_factory=dict)
    nodes: dict[str, Node] = field(default_factory=dict)


async def _snapshot(host: CanvasHost, root: Node, context: LayoutContext) -> _TreeSnapshot:
    tree = _TreeSnapshot()
    async for node, via, _depth in walk_tree(host, root, context, include_collapsed=False):
        tree.order.append(node)
        tree.nodes[node.id] = node
        tree.children[node.id] = []
        if via is not None and via.start.node_id in tree.children:
            tree.children[via.start.node_id].append(node.id)
    return tree


def _subtree_spans(tree: _TreeSnapshot, layout_type: LayoutType, gap: float) -> dict[str, float]:
    """Breadth each subtree needs along the sibling axis."""
    spans: dict[str, float] = {}
    for node in reversed(tree.order):
        kids = tree.children[node.id]
        own = node.breadth(layout_type)
        if not kids:
            spans[node.id] = own
            continue
        group = sum(spans[k] for k in kids) + gap * (len(kids) - 1)
        spans[node.id] = max(own, group)
    return spans


def _place(
    tree: _TreeSnapshot,
    layout_type: LayoutType,
    settings: LayoutSettings,
) -> dict[str, tuple[float, float]]:
    level_gap = settings.level_gap(layout_type)
    sibling_gap = settings.sibling_gap(layout_type)
    spans = _subtree_spans(tree, layout_type, sibling_gap)
    vertical = layout_type == LayoutType.vertical

    root = tree.order[0]
    targets: dict[str, tuple[float, float]] = {root.id: (root.x, root.y)}

    for node in tree.order:
        kids = tree.children[node.id]
        if not kids:
            continue
        x, y = targets[node.id]
        if vertical:
            primary = y + node.height + level_gap
            center = x + node.width / 2
        else:
            primary = x + node.width + level_gap
            center = y + node.height / 2

        group = sum(spans[k] for k in kids) + sibling_gap * (len(kids) - 1)
        cursor = center - group / 2
        for kid_id in kids:
            kid = tree.nodes[kid_id]
            secondary = cursor + (spans[kid_id] - kid.breadth(layout_type)) / 2
            targets[kid_id] = (secondary, primary) if vertical else (primary, secondary)
            cursor += spans[kid_id] + sibling_gap

    return targets


async def _reflow(
    host: CanvasHost,
    root: Node,
    context: LayoutContext,
    settings: LayoutSettings,
) -> list[str]:
    # callers may hold a copy read before their own resize
    root = await host.get_node(root.id) or root
    tree = await _snapshot(host, root, context)
    targets = _place(tree, context.current, settings)

    moved: list[str] = []
    for node in tree.order:
        x, y = targets[node.id]
        if abs(node.x - x) > _EPSILON or abs(node.y - y) > _EPSILON:
            await host.move_node(node.id, x, y)
            moved.append(node.id)

    logger.debug("reflowed tree %s: %d nodes, %d moved", root.id, len(tree.order), len(moved))
    return moved


async def cascade_layout_change(
    host: CanvasHost,
    node: Node,
    context: LayoutContext,
    settings: LayoutSettings | None = None,
) -> list[str]:
    """Reflow the whole tree containing `node`.

    Returns the ids of the cards that were moved.
    """
    root = await find_topmost_parent(host, node, context)
    return await _reflow(host, root, context, settings or get_layout_settings())


async def auto_layout(
    host: CanvasHost,
    node: Node,
    context: LayoutContext,
    settings: LayoutSettings | None = None,
) -> list[str]:
    """User-triggered reflow of the tree containing `node`."""
    moved = await cascade_layout_change(host, node, context, settings)
    logger.info("auto layout from %s moved %d cards", node.id, len(moved))
    return moved
