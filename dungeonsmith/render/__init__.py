"""Presentation artifacts built from a finished floorplan."""

import random

from .guide import compose_guide, describe_room
from .svg import CONTENT_COLORS, DOOR_STYLES, MapStyle, render_svg


def render_artifacts(dungeon, style: MapStyle | None = None):
    """Return (svg, guide) for a generated Dungeon.

    The guide draws its flavor sentences from a fresh RNG seeded with the
    dungeon's seed, so both artifacts are reproducible from the seed alone.
    """
    svg = render_svg(dungeon.rooms, dungeon.grid, dungeon.grid_size, dungeon.cell_size, style)
    guide = compose_guide(dungeon.rooms, dungeon.dungeon_type, random.Random(dungeon.seed))
    return svg, guide


__all__ = [
    "compose_guide",
    "describe_room",
    "render_svg",
    "render_artifacts",
    "MapStyle",
    "CONTENT_COLORS",
    "DOOR_STYLES",
]
