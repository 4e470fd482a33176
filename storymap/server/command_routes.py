"""API routes for running commands and reading topology."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import RootModel

from storymap.adapters.host import InMemoryCanvas
from storymap.commands import dispatch
from storymap.errors import HostError, NodeNotFoundError, StoryMapError, TopologyError
from storymap.layout.topology import find_connections
from storymap.models.canvas import Connections, LayoutContext
from storymap.models.commands import Command, CommandResult
from storymap.server.canvas_routes import get_canvas

router = APIRouter()


class CommandBody(RootModel[Command]):
    """Request body: any one command, selected by its `kind`."""


def _status_for(error: StoryMapError) -> int:
    if isinstance(error, NodeNotFoundError):
        return 404
    if isinstance(error, TopologyError):
        return 409
    if isinstance(error, HostError):
        return 502
    return 400


@router.post("/commands")
async def run_command(
    body: CommandBody,
    canvas: InMemoryCanvas = Depends(get_canvas),
) -> CommandResult:
    """Run one menu command against the canvas."""
    try:
        return await dispatch(canvas, body.root)
    except StoryMapError as e:
        raise HTTPException(status_code=_status_for(e), detail=str(e))


@router.get("/nodes/{node_id}/connections")
async def get_connections(node_id: str, canvas: InMemoryCanvas = Depends(get_canvas)) -> Connections:
    """Parents and children of a card, as currently wired."""
    node = await canvas.get_node(node_id)
    if not node:
        raise HTTPException(status_code=404, detail=f"Node not found: {node_id}")
    return await find_connections(canvas, node, LayoutContext.steady(node.card.layout_type))
