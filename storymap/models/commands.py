"""UI commands accepted by the engine.

A closed set of command models discriminated on `kind`. The property menu
(or any other trigger) builds one of these and hands it to
storymap.commands.dispatch.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from storymap.models.card import CardLink, CardStatus, CardType, LayoutType


class ChangeLayout(BaseModel):
    """Switch the orientation of the whole tree containing node_id."""

    kind: Literal["change_layout"] = "change_layout"
    node_id: str
    layout_type: LayoutType


class CreateRelative(BaseModel):
    """Create a parent, child, or sibling card next to node_id.

    Which relation a direction means depends on the card's orientation.
    """

    kind: Literal["create_relative"] = "create_relative"
    node_id: str
    direction: Literal["top", "bottom", "left", "right"]


class AutoLayoutCommand(BaseModel):
    kind: Literal["auto_layout"] = "auto_layout"
    node_id: str


class CollapseCommand(BaseModel):
    kind: Literal["collapse"] = "collapse"
    node_id: str


class ExpandCommand(BaseModel):
    kind: Literal["expand"] = "expand"
    node_id: str
    all: bool = False  # expand every descendant, not just one level


class SetCardType(BaseModel):
    """Change the role of a card.

    Existing connectors are kept; the new role only decides what the card
    can grow next.
    """

    kind: Literal["set_card_type"] = "set_card_type"
    node_id: str
    card_type: CardType


class SetStatus(BaseModel):
    kind: Literal["set_status"] = "set_status"
    node_id: str
    status: CardStatus


class SetLinks(BaseModel):
    """Replace the external links shown on a card."""

    kind: Literal["set_links"] = "set_links"
    node_id: str
    links: list[CardLink] = Field(default_factory=list)


Command = Annotated[
    ChangeLayout
    | CreateRelative
    | AutoLayoutCommand
    | CollapseCommand
    | ExpandCommand
    | SetCardType
    | SetStatus
    | SetLinks,
    Field(discriminator="kind"),
]


class CommandResult(BaseModel):
    """What a dispatched command did."""

    node_id: str
    created_id: str | None = None  # new card, when the command created one
    moved: list[str] = Field(default_factory=list)  # ids repositioned by the cascade
