"""Utility functions for the story map engine."""

from storymap.utils.identifiers import (
    generate_connector_id,
    generate_node_id,
)

__all__ = [
    "generate_connector_id",
    "generate_node_id",
]
