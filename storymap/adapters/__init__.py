"""Adapters for the canvas host that owns nodes and connectors."""

from storymap.adapters.host import CanvasHost, InMemoryCanvas
from storymap.adapters.http_host import HttpCanvasHost

__all__ = [
    "CanvasHost",
    "InMemoryCanvas",
    "HttpCanvasHost",
]
