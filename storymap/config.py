"""Layout spacing configuration.

Defaults match the offsets new cards are cloned at, so a freshly created
card is already where the cascade would put it. Each value can be
overridden with a STORYMAP_* environment variable or a .env file.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel

from storymap.models.card import LayoutType

load_dotenv()


class LayoutSettings(BaseModel):
    """Gaps used by the cascading positioner."""

    model_config = {"frozen": True}

    vertical_level_gap: float = 50.0  # parent bottom -> child top
    vertical_sibling_gap: float = 100.0
    horizontal_level_gap: float = 100.0  # parent right -> child left
    horizontal_sibling_gap: float = 50.0
    collapse_tip_size: float = 18.0  # expand tip added to a collapsed card

    def level_gap(self, layout_type: LayoutType) -> float:
        if layout_type == LayoutType.horizontal:
            return self.horizontal_level_gap
        return self.vertical_level_gap

    def sibling_gap(self, layout_type: LayoutType) -> float:
        if layout_type == LayoutType.horizontal:
            return self.horizontal_sibling_gap
        return self.vertical_sibling_gap


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value else default


def get_layout_settings() -> LayoutSettings:
    """Build settings from the environment, falling back to defaults."""
    defaults = LayoutSettings()
    return LayoutSettings(
        vertical_level_gap=_env_float("STORYMAP_VERTICAL_LEVEL_GAP", defaults.vertical_level_gap),
        vertical_sibling_gap=_env_float("STORYMAP_VERTICAL_SIBLING_GAP", defaults.vertical_sibling_gap),
        horizontal_level_gap=_env_float("STORYMAP_HORIZONTAL_LEVEL_GAP", defaults.horizontal_level_gap),
        horizontal_sibling_gap=_env_float("STORYMAP_HORIZONTAL_SIBLING_GAP", defaults.horizontal_sibling_gap),
        collapse_tip_size=_env_float("STORYMAP_COLLAPSE_TIP_SIZE", defaults.collapse_tip_size),
    )
