"""HTTP surface for the story map engine."""
