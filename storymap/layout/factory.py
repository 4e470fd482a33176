"""Node factory: grow the tree by cloning cards and wiring connectors.

New cards are always clones of an existing card, given a fresh state so
they start out in the right role. Nothing here repositions the tree;
callers run the cascade afterwards.
"""

import logging

from storymap.adapters.host import CanvasHost
from storymap.errors import NodeNotFoundError
from storymap.models.canvas import Connector, Endpoint, Node
from storymap.models.card import (
    CardState,
    CardType,
    LayoutType,
    canonical_sides,
    child_type_of,
    parent_type_of,
)

logger = logging.getLogger(__name__)


def _offset(origin: float, size: float, delta: float) -> float:
    # 0 stacks on the source, otherwise go past the far edge plus the delta
    if delta == 0:
        return origin
    return origin + delta + (size if delta > 0 else -size)


async def _require(host: CanvasHost, node_id: str) -> Node:
    node = await host.get_node(node_id)
    if node is None:
        raise NodeNotFoundError(node_id)
    return node


async def _hide_below(host: CanvasHost, parent: Node, widget: Node) -> Node:
    # a card under a collapsed or hidden parent starts hidden too
    if not (parent.card.collapsed or parent.hidden):
        return widget
    await host.set_hidden(widget.id, True)
    logger.debug("%s created under collapsed %s, hidden", widget.id, parent.id)
    return await _require(host, widget.id)


async def clone_widget(
    host: CanvasHost,
    widget_id: str,
    state: CardState,
    x_offset: float,
    y_offset: float,
) -> Node:
    """Clone a card next to itself with `state` replacing the copied state.

    Offsets are raw gaps measured from the source's far edge in that
    direction; 0 keeps the clone on the source's coordinate.
    """
    source = await _require(host, widget_id)
    clone = await host.clone_node(
        source.id,
        x=_offset(source.x, source.width, x_offset),
        y=_offset(source.y, source.height, y_offset),
        state=state.to_state(),
    )

    # the copy must not inherit the expand tip of a collapsed source
    source_card = source.card
    if source_card.collapsed and source_card.pre_collapse_height:
        await host.resize_node(clone.id, clone.width, source_card.pre_collapse_height)
        clone = await _require(host, clone.id)
    return clone


async def connect_widgets(
    host: CanvasHost,
    start_widget_id: str,
    end_widget_id: str,
    layout_type: LayoutType,
) -> Connector:
    """Draw a parent -> child connector on the canonical sides."""
    start_side, end_side = canonical_sides(layout_type)
    return await host.create_connector(
        Endpoint(node_id=start_widget_id, side=start_side),
        Endpoint(node_id=end_widget_id, side=end_side),
    )


async def create_parent(
    host: CanvasHost,
    widget_id: str,
    x_offset: float,
    y_offset: float,
) -> Node | None:
    """Create the legal parent card for `widget_id`.

    Returns None, touching nothing, when the card's type has no legal parent.
    The source card's parent_id is pointed at the new card.
    """
    source = await _require(host, widget_id)
    card = source.card
    parent_type = parent_type_of(card.card_type)
    if parent_type is None:
        logger.info("card type %s has no parent type, nothing created", card.card_type.value)
        return None

    new_widget = await clone_widget(
        host,
        source.id,
        CardState(card_type=parent_type, layout_type=card.layout_type),
        x_offset,
        y_offset,
    )
    await connect_widgets(host, new_widget.id, source.id, card.layout_type)
    await host.set_state(
        source.id,
        card.model_copy(update={"parent_id": new_widget.id}).to_state(),
    )
    return new_widget


async def create_child(
    host: CanvasHost,
    widget_id: str,
    x_offset: float,
    y_offset: float,
) -> Node | None:
    """Create the legal child card for `widget_id`, or None for leaf types.

    A child of a collapsed card is created hidden.
    """
    source = await _require(host, widget_id)
    card = source.card
    child_type = child_type_of(card.card_type)
    if child_type is None:
        logger.info("card type %s has no child type, nothing created", card.card_type.value)
        return None

    new_widget = await clone_widget(
        host,
        source.id,
        CardState(card_type=child_type, layout_type=card.layout_type, parent_id=source.id),
        x_offset,
        y_offset,
    )
    await connect_widgets(host, source.id, new_widget.id, card.layout_type)
    return await _hide_below(host, source, new_widget)


async def create_sibling(
    host: CanvasHost,
    widget_id: str,
    x_offset: float,
    y_offset: float,
    card_type: CardType | None = None,
) -> Node:
    """Create a card sharing `widget_id`'s parent.

    The sibling is connected from the recorded parent when that card still
    exists; otherwise it is left unconnected. Under a collapsed parent it
    is created hidden.
    """
    source = await _require(host, widget_id)
    card = source.card
    new_widget = await clone_widget(
        host,
        source.id,
        CardState(
            card_type=card_type or card.card_type,
            layout_type=card.layout_type,
            parent_id=card.parent_id,
        ),
        x_offset,
        y_offset,
    )

    if card.parent_id:
        parent = await host.get_node(card.parent_id)
        if parent is not None:
            await connect_widgets(host, card.parent_id, new_widget.id, card.layout_type)
            new_widget = await _hide_below(host, parent, new_widget)
        else:
            logger.warning(
                "parent %s of %s no longer exists, sibling %s left unconnected",
                card.parent_id,
                source.id,
                new_widget.id,
            )
    return new_widget
