"""Card roles, orientation, and the typed view of a card's state bag.

The host stores each card's state as an arbitrary key-value bag. CardState
is the schema the engine reads and writes through; keys it does not know
about are carried along untouched.
"""

from enum import Enum
from typing import Any, NamedTuple

from pydantic import BaseModel, Field


class LayoutType(str, Enum):
    """Tree-wide orientation."""

    vertical = "Vertical"
    horizontal = "Horizontal"


class Side(str, Enum):
    """Connector magnet on a card edge."""

    top = "TOP"
    bottom = "BOTTOM"
    left = "LEFT"
    right = "RIGHT"


class CardType(str, Enum):
    """Semantic role of a card in a story map."""

    business_outcome = "Business Outcome"
    product_outcome = "Product Outcome"
    objective = "Objective"
    key_result = "Key Result"
    opportunity = "Opportunity"
    solution = "Solution"
    assumption = "Assumption"
    experiment = "Experiment"


class CardStatus(str, Enum):
    """Progress marker shown on a card; not interpreted by the layout engine."""

    none = "none"
    not_started = "Not started"
    in_progress = "In progress"
    done = "Done"
    blocked = "Blocked"


class CardRelation(NamedTuple):
    """Legal neighbour roles for a card type (None = no legal relation)."""

    parent: CardType | None
    child: CardType | None


CARD_RELATIONS: dict[CardType, CardRelation] = {
    CardType.business_outcome: CardRelation(None, CardType.product_outcome),
    CardType.product_outcome: CardRelation(CardType.business_outcome, CardType.opportunity),
    CardType.objective: CardRelation(None, CardType.key_result),
    CardType.key_result: CardRelation(CardType.objective, CardType.opportunity),
    CardType.opportunity: CardRelation(CardType.product_outcome, CardType.solution),
    CardType.solution: CardRelation(CardType.opportunity, CardType.assumption),
    CardType.assumption: CardRelation(CardType.solution, CardType.experiment),
    CardType.experiment: CardRelation(CardType.assumption, None),
}


def parent_type_of(card_type: CardType) -> CardType | None:
    """Legal parent role for a card type, or None for root-type cards."""
    return CARD_RELATIONS[card_type].parent


def child_type_of(card_type: CardType) -> CardType | None:
    """Legal child role for a card type, or None for leaf-type cards."""
    return CARD_RELATIONS[card_type].child


def canonical_sides(layout_type: LayoutType) -> tuple[Side, Side]:
    """(start, end) magnets for a parent -> child connector."""
    if layout_type == LayoutType.horizontal:
        return Side.right, Side.left
    return Side.bottom, Side.top


class CardLink(BaseModel):
    """An external link attached to a card."""

    key: str
    text: str = ""
    url: str = ""


class CardState(BaseModel):
    """Typed view over a node's synced state bag."""

    model_config = {"extra": "allow"}

    card_type: CardType = CardType.solution
    layout_type: LayoutType = LayoutType.vertical
    parent_id: str = ""  # "" means no recorded parent
    collapsed: bool = False
    pre_collapse_height: float = 0.0

    # card content, edited by commands but never read by layout
    text: str = ""
    status: CardStatus = CardStatus.none
    links: list[CardLink] = Field(default_factory=list)

    @classmethod
    def from_state(cls, state: dict[str, Any] | None) -> "CardState":
        return cls.model_validate(state or {})

    def to_state(self) -> dict[str, Any]:
        """Serialize back into a plain JSON-compatible bag."""
        return self.model_dump(mode="json")
