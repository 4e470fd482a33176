"""Tests for card models, the relation table, and command parsing."""

import pytest
from pydantic import TypeAdapter, ValidationError

from storymap.models.canvas import LayoutContext, Node
from storymap.models.card import (
    CARD_RELATIONS,
    CardState,
    CardStatus,
    CardType,
    LayoutType,
    Side,
    canonical_sides,
    child_type_of,
    parent_type_of,
)
from storymap.models.commands import (
    ChangeLayout,
    Command,
    CreateRelative,
    ExpandCommand,
)


class TestRelationTable:
    """Test the card type relation table."""

    def test_every_card_type_has_an_entry(self):
        """Lookups must be total over CardType."""
        assert set(CARD_RELATIONS) == set(CardType)

    def test_root_types_have_no_parent(self):
        """Objective and Business Outcome start a tree."""
        assert parent_type_of(CardType.objective) is None
        assert parent_type_of(CardType.business_outcome) is None

    def test_experiment_has_no_child(self):
        assert child_type_of(CardType.experiment) is None

    def test_objective_child_is_key_result(self):
        assert child_type_of(CardType.objective) == CardType.key_result

    def test_relations_are_symmetric(self):
        """A card type's legal parent lists it as its legal child."""
        for card_type, relation in CARD_RELATIONS.items():
            if relation.parent is not None:
                assert child_type_of(relation.parent) == card_type


class TestCanonicalSides:
    """Test connector side conventions."""

    def test_vertical_runs_bottom_to_top(self):
        assert canonical_sides(LayoutType.vertical) == (Side.bottom, Side.top)

    def test_horizontal_runs_right_to_left(self):
        assert canonical_sides(LayoutType.horizontal) == (Side.right, Side.left)


class TestCardState:
    """Test the typed view over a node's state bag."""

    def test_defaults_from_empty_bag(self):
        """An empty bag reads as an expanded vertical Solution card."""
        card = CardState.from_state({})
        assert card.card_type == CardType.solution
        assert card.layout_type == LayoutType.vertical
        assert card.parent_id == ""
        assert card.collapsed is False
        assert card.status == CardStatus.none

    def test_round_trip_uses_enum_values(self):
        """Serialized state holds plain strings, like the host stores them."""
        state = CardState(card_type=CardType.key_result, layout_type=LayoutType.horizontal).to_state()
        assert state["card_type"] == "Key Result"
        assert state["layout_type"] == "Horizontal"
        assert CardState.from_state(state).card_type == CardType.key_result

    def test_unknown_keys_survive(self):
        """Keys the engine does not know about are kept on round-trip."""
        state = CardState.from_state({"card_type": "Objective", "color": "#fff"}).to_state()
        assert state["color"] == "#fff"

    def test_invalid_card_type_rejected(self):
        with pytest.raises(ValidationError):
            CardState.from_state({"card_type": "Epic"})

    def test_node_card_property(self):
        node = Node(id="n1", state={"card_type": "Assumption", "collapsed": True})
        assert node.card.card_type == CardType.assumption
        assert node.card.collapsed is True


class TestLayoutContext:
    """Test layout context helpers."""

    def test_steady_context(self):
        context = LayoutContext.steady(LayoutType.vertical)
        assert context.previous == context.current == LayoutType.vertical
        assert context.changed is False

    def test_changed_context(self):
        context = LayoutContext(previous=LayoutType.vertical, current=LayoutType.horizontal)
        assert context.changed is True


class TestCommandParsing:
    """Test the command union discriminates on kind."""

    adapter = TypeAdapter(Command)

    def test_parses_change_layout(self):
        command = self.adapter.validate_python(
            {"kind": "change_layout", "node_id": "n1", "layout_type": "Horizontal"}
        )
        assert isinstance(command, ChangeLayout)
        assert command.layout_type == LayoutType.horizontal

    def test_parses_create_relative(self):
        command = self.adapter.validate_python(
            {"kind": "create_relative", "node_id": "n1", "direction": "left"}
        )
        assert isinstance(command, CreateRelative)

    def test_expand_defaults_to_one_level(self):
        command = self.adapter.validate_python({"kind": "expand", "node_id": "n1"})
        assert isinstance(command, ExpandCommand)
        assert command.all is False

    def test_rejects_unknown_kind(self):
        with pytest.raises(ValidationError):
            self.adapter.validate_python({"kind": "delete", "node_id": "n1"})

    def test_rejects_bad_direction(self):
        with pytest.raises(ValidationError):
            self.adapter.validate_python(
                {"kind": "create_relative", "node_id": "n1", "direction": "diagonal"}
            )
