"""ID generation utilities."""

import uuid


def generate_node_id() -> str:
    """Generate a node ID (16-char hex string)."""
    return uuid.uuid4().hex[:16]


def generate_connector_id() -> str:
    """Generate a unique connector ID (UUID4)."""
    return str(uuid.uuid4())
