"""API routes exposing the in-memory canvas as a host.

These are the calls HttpCanvasHost makes; together they are the whole host
boundary the engine depends on.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from storymap.adapters.host import InMemoryCanvas
from storymap.errors import HostError
from storymap.models.canvas import Connector, Endpoint, Node

router = APIRouter()


def get_canvas(request: Request) -> InMemoryCanvas:
    return request.app.state.canvas


class CreateNodeRequest(BaseModel):
    """Request body for placing a new card on the page."""

    x: float = 0.0
    y: float = 0.0
    width: float = 400.0
    height: float = 160.0
    state: dict[str, Any] = Field(default_factory=dict)
    node_id: str | None = None


class CloneNodeRequest(BaseModel):
    x: float
    y: float
    state: dict[str, Any] = Field(default_factory=dict)


class UpdateNodeRequest(BaseModel):
    """Partial node update; omitted fields are left alone."""

    x: float | None = None
    y: float | None = None
    width: float | None = None
    height: float | None = None
    hidden: bool | None = None
    state: dict[str, Any] | None = None


class ConnectorRequest(BaseModel):
    start: Endpoint
    end: Endpoint


@router.post("/nodes")
def create_node(request: CreateNodeRequest, canvas: InMemoryCanvas = Depends(get_canvas)) -> Node:
    """Place a new card (host-level creation)."""
    try:
        return canvas.add_node(**request.model_dump())
    except HostError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/nodes/{node_id}")
async def get_node(node_id: str, canvas: InMemoryCanvas = Depends(get_canvas)) -> Node:
    node = await canvas.get_node(node_id)
    if not node:
        raise HTTPException(status_code=404, detail=f"Node not found: {node_id}")
    return node


@router.delete("/nodes/{node_id}")
def delete_node(node_id: str, canvas: InMemoryCanvas = Depends(get_canvas)) -> dict:
    """Delete a card; its connectors are left dangling."""
    canvas.delete_node(node_id)
    return {"status": "deleted", "node_id": node_id}


@router.post("/nodes/{node_id}/clone")
async def clone_node(
    node_id: str,
    request: CloneNodeRequest,
    canvas: InMemoryCanvas = Depends(get_canvas),
) -> Node:
    try:
        return await canvas.clone_node(node_id, x=request.x, y=request.y, state=request.state)
    except HostError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/nodes/{node_id}")
async def update_node(
    node_id: str,
    request: UpdateNodeRequest,
    canvas: InMemoryCanvas = Depends(get_canvas),
) -> Node:
    node = await canvas.get_node(node_id)
    if not node:
        raise HTTPException(status_code=404, detail=f"Node not found: {node_id}")

    if request.x is not None or request.y is not None:
        await canvas.move_node(
            node_id,
            request.x if request.x is not None else node.x,
            request.y if request.y is not None else node.y,
        )
    if request.width is not None or request.height is not None:
        await canvas.resize_node(
            node_id,
            request.width if request.width is not None else node.width,
            request.height if request.height is not None else node.height,
        )
    if request.hidden is not None:
        await canvas.set_hidden(node_id, request.hidden)
    if request.state is not None:
        await canvas.set_state(node_id, request.state)

    return await canvas.get_node(node_id)


@router.get("/connectors")
async def list_connectors(canvas: InMemoryCanvas = Depends(get_canvas)) -> list[Connector]:
    return await canvas.list_connectors()


@router.post("/connectors")
async def create_connector(
    request: ConnectorRequest,
    canvas: InMemoryCanvas = Depends(get_canvas),
) -> Connector:
    try:
        return await canvas.create_connector(request.start, request.end)
    except HostError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/connectors/{connector_id}")
async def update_connector(
    connector_id: str,
    request: ConnectorRequest,
    canvas: InMemoryCanvas = Depends(get_canvas),
) -> Connector:
    try:
        return await canvas.update_connector(connector_id, request.start, request.end)
    except HostError as e:
        raise HTTPException(status_code=404, detail=str(e))
