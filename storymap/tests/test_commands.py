"""Tests for dispatching menu commands."""

import asyncio

import pytest

from storymap.commands import dispatch
from storymap.errors import NodeNotFoundError
from storymap.models.card import CardLink, CardState, CardStatus, CardType, LayoutType, Side
from storymap.models.commands import (
    AutoLayoutCommand,
    ChangeLayout,
    CollapseCommand,
    CreateRelative,
    ExpandCommand,
    SetCardType,
    SetLinks,
    SetStatus,
)


def _card(card_type: CardType, layout_type: LayoutType = LayoutType.vertical, **extra) -> dict:
    return CardState(card_type=card_type, layout_type=layout_type, **extra).to_state()


class TestCreateRelative:
    """Test arrow commands map to the right relation per orientation."""

    def test_vertical_bottom_creates_child_below(self, canvas, settings):
        """An Objective's child is a Key Result, one level gap below."""
        root = canvas.add_node(x=0, y=0, state=_card(CardType.objective))

        result = asyncio.run(dispatch(canvas, CreateRelative(node_id=root.id, direction="bottom"), settings))

        child = canvas.nodes[result.created_id]
        assert child.card.card_type == CardType.key_result
        assert (child.x, child.y) == (0, root.y + root.height + settings.vertical_level_gap)
        (connector,) = canvas.connectors.values()
        assert (connector.start.node_id, connector.start.side) == (root.id, Side.bottom)
        assert (connector.end.node_id, connector.end.side) == (child.id, Side.top)
        assert result.moved == []

    def test_vertical_top_on_root_type_creates_nothing(self, canvas, settings):
        root = canvas.add_node(state=_card(CardType.objective))

        result = asyncio.run(dispatch(canvas, CreateRelative(node_id=root.id, direction="top"), settings))

        assert result.created_id is None
        assert len(canvas.nodes) == 1

    def test_vertical_right_creates_sibling(self, canvas, settings):
        root = canvas.add_node(state=_card(CardType.objective))
        child_id = asyncio.run(
            dispatch(canvas, CreateRelative(node_id=root.id, direction="bottom"), settings)
        ).created_id

        result = asyncio.run(dispatch(canvas, CreateRelative(node_id=child_id, direction="right"), settings))

        sibling = canvas.nodes[result.created_id]
        assert sibling.card.card_type == CardType.key_result
        assert sibling.card.parent_id == root.id
        # both children re-centered under the root
        assert canvas.nodes[child_id].x == -250
        assert sibling.x == 250

    def test_horizontal_right_creates_child(self, canvas, settings):
        root = canvas.add_node(state=_card(CardType.objective, LayoutType.horizontal))

        result = asyncio.run(dispatch(canvas, CreateRelative(node_id=root.id, direction="right"), settings))

        child = canvas.nodes[result.created_id]
        assert child.card.card_type == CardType.key_result
        assert child.x == root.width + settings.horizontal_level_gap
        (connector,) = canvas.connectors.values()
        assert connector.start.side == Side.right

    def test_horizontal_left_creates_parent(self, canvas, settings):
        source = canvas.add_node(state=_card(CardType.key_result, LayoutType.horizontal))

        result = asyncio.run(dispatch(canvas, CreateRelative(node_id=source.id, direction="left"), settings))

        parent = canvas.nodes[result.created_id]
        assert parent.card.card_type == CardType.objective
        assert canvas.nodes[source.id].card.parent_id == parent.id

    def test_horizontal_bottom_creates_unconnected_sibling_for_root(self, canvas, settings):
        root = canvas.add_node(state=_card(CardType.objective, LayoutType.horizontal))

        result = asyncio.run(dispatch(canvas, CreateRelative(node_id=root.id, direction="bottom"), settings))

        assert canvas.nodes[result.created_id].card.card_type == CardType.objective
        assert canvas.connectors == {}


class TestOtherCommands:
    """Test layout, collapse, and expand commands."""

    def test_change_layout_uses_card_orientation_as_previous(self, canvas, link, settings):
        root = canvas.add_node(state=_card(CardType.objective))
        child = canvas.add_node(state=_card(CardType.key_result, parent_id=root.id))
        link(root, child)

        asyncio.run(dispatch(canvas, ChangeLayout(node_id=child.id, layout_type=LayoutType.horizontal), settings))

        assert canvas.nodes[root.id].card.layout_type == LayoutType.horizontal
        assert (canvas.nodes[child.id].x, canvas.nodes[child.id].y) == (500, 0)

    def test_auto_layout(self, canvas, link, settings):
        root = canvas.add_node(state=_card(CardType.objective))
        child = canvas.add_node(x=600, y=600, state=_card(CardType.key_result))
        link(root, child)

        result = asyncio.run(dispatch(canvas, AutoLayoutCommand(node_id=root.id), settings))

        assert result.moved == [child.id]

    def test_collapse_then_expand(self, canvas, link, settings):
        root = canvas.add_node(state=_card(CardType.objective))
        child = canvas.add_node(y=210, state=_card(CardType.key_result))
        link(root, child)

        asyncio.run(dispatch(canvas, CollapseCommand(node_id=root.id), settings))
        assert canvas.nodes[child.id].hidden is True

        asyncio.run(dispatch(canvas, ExpandCommand(node_id=root.id, all=True), settings))
        assert canvas.nodes[child.id].hidden is False

    def test_unknown_node_raises(self, canvas):
        with pytest.raises(NodeNotFoundError):
            asyncio.run(dispatch(canvas, AutoLayoutCommand(node_id="missing")))


class TestCardContentCommands:
    """Test commands that edit a card without moving anything."""

    def test_set_card_type_changes_what_can_grow(self, canvas, settings):
        card = canvas.add_node(state=_card(CardType.solution))

        result = asyncio.run(dispatch(canvas, SetCardType(node_id=card.id, card_type=CardType.objective), settings))
        assert result.moved == []
        assert canvas.nodes[card.id].card.card_type == CardType.objective

        created = asyncio.run(dispatch(canvas, CreateRelative(node_id=card.id, direction="bottom"), settings))
        assert canvas.nodes[created.created_id].card.card_type == CardType.key_result

    def test_set_status_keeps_other_state(self, canvas, settings):
        card = canvas.add_node(state=_card(CardType.key_result, parent_id="p", text="Churn < 2%"))

        asyncio.run(dispatch(canvas, SetStatus(node_id=card.id, status=CardStatus.in_progress), settings))

        state = canvas.nodes[card.id].card
        assert state.status == CardStatus.in_progress
        assert state.parent_id == "p"
        assert state.text == "Churn < 2%"

    def test_set_links_replaces_list(self, canvas, settings):
        card = canvas.add_node(state=_card(CardType.experiment))
        links = [CardLink(key="1", text="Brief", url="https://example.com/brief")]

        asyncio.run(dispatch(canvas, SetLinks(node_id=card.id, links=links), settings))
        assert canvas.nodes[card.id].card.links == links

        asyncio.run(dispatch(canvas, SetLinks(node_id=card.id), settings))
        assert canvas.nodes[card.id].card.links == []

    def test_status_parsed_from_json_value(self, canvas, settings):
        card = canvas.add_node()
        command = SetStatus.model_validate({"node_id": card.id, "status": "Blocked"})

        asyncio.run(dispatch(canvas, command, settings))

        assert canvas.nodes[card.id].state["status"] == "Blocked"
