"""SVG floorplan renderer.

Pure function of its inputs: the same rooms, grid and style always produce a
byte-identical document.
"""
from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Dict, List

from ..dungeon.cells import Grid
from ..dungeon.config import (
    BOSS_MONSTER,
    EMPTY,
    MAJOR_HAZARD,
    MINOR_HAZARD,
    MONSTER_MOB,
    NPC,
    SOLO_MONSTER,
    TRAP,
    TREASURE,
)
from ..dungeon.rooms import Room

PADDING = 10
DOOR_STYLES = ("line", "gap", "none")

CONTENT_COLORS: Dict[str, str] = {
    EMPTY: "#ffffff",
    TRAP: "#ff9999",
    MINOR_HAZARD: "#ffcc99",
    SOLO_MONSTER: "#ffff99",
    NPC: "#99ff99",
    MONSTER_MOB: "#99ccff",
    MAJOR_HAZARD: "#ff99ff",
    TREASURE: "#ffcc00",
    BOSS_MONSTER: "#ff6666",
}

_COLOR_RE = re.compile(r"^(#[0-9a-fA-F]{3}|#[0-9a-fA-F]{6}|[a-zA-Z]+)$")

# camelCase API key -> MapStyle field
_STYLE_KEYS = {
    "wallColor": "wall_color",
    "floorColor": "floor_color",
    "corridorColor": "corridor_color",
    "gridColor": "grid_color",
    "textColor": "text_color",
    "useColors": "use_colors",
    "doorStyle": "door_style",
    "showGrid": "show_grid",
}


@dataclass(frozen=True)
class MapStyle:
    wall_color: str = "#4a9ebd"
    floor_color: str = "#ffffff"
    corridor_color: str = "#cccccc"
    grid_color: str = "#cccccc"
    text_color: str = "#000000"
    use_colors: bool = True
    door_style: str = "line"
    show_grid: bool = True

    def __post_init__(self):
        if self.door_style not in DOOR_STYLES:
            raise ValueError(f"door_style must be one of {', '.join(DOOR_STYLES)}, got {self.door_style!r}")
        for name in ("wall_color", "floor_color", "corridor_color", "grid_color", "text_color"):
            value = getattr(self, name)
            if not isinstance(value, str) or not _COLOR_RE.match(value):
                raise ValueError(f"{name} is not a valid color: {value!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, object] | None) -> "MapStyle":
        """Build a style from camelCase (API) or snake_case keys; unknown keys are rejected."""
        if not data:
            return cls()
        kwargs = {}
        for key, value in data.items():
            field_name = _STYLE_KEYS.get(key, key)
            if field_name not in _STYLE_KEYS.values():
                raise ValueError(f"unknown style option: {key}")
            kwargs[field_name] = value
        for flag in ("use_colors", "show_grid"):
            if flag in kwargs and not isinstance(kwargs[flag], bool):
                raise ValueError(f"{flag} must be a boolean")
        return cls(**kwargs)

    def to_dict(self):
        data = asdict(self)
        return {camel: data[snake] for camel, snake in _STYLE_KEYS.items()}


def _n(value: float) -> str:
    """Format a coordinate without a trailing '.0' so output stays stable."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.3f}".rstrip("0").rstrip(".")


def content_color(content_type: str) -> str:
    return CONTENT_COLORS.get(content_type, "#ffffff")


def render_svg(rooms: List[Room], grid: Grid, grid_size: int, cell_size: int, style: MapStyle | None = None) -> str:
    style = style or MapStyle()
    total = grid_size * cell_size + PADDING * 2
    room_at: Dict[tuple, Room] = {}
    for room in rooms:
        for cell in room.cells():
            room_at[cell] = room
    doors = {}
    for room in rooms:
        for door in room.doors:
            doors[(door.x, door.y)] = door

    def origin(x: int, y: int):
        return x * cell_size + PADDING, y * cell_size + PADDING

    out: List[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{total}" height="{total}" viewBox="0 0 {total} {total}">',
        f'<rect x="0" y="0" width="{total}" height="{total}" fill="{style.floor_color}" />',
    ]

    walls: List[str] = []
    corridors: List[str] = []
    tints: List[str] = []
    # Row-major so the document reads top to bottom
    for y in range(grid_size):
        for x in range(grid_size):
            px, py = origin(x, y)
            rect = f'<rect x="{px}" y="{py}" width="{cell_size}" height="{cell_size}"'
            if not grid[x][y]:
                walls.append(rect + ' />')
            elif (x, y) in room_at:
                if style.use_colors:
                    color = content_color(room_at[(x, y)].content_type)
                    tints.append(rect + f' fill="{color}" opacity="0.3" />')
            else:
                corridors.append(rect + ' />')

    out.append(f'<g fill="{style.wall_color}">' + "".join(walls) + '</g>')
    out.append(f'<g fill="{style.corridor_color}">' + "".join(corridors) + '</g>')
    if tints:
        out.append('<g>' + "".join(tints) + '</g>')

    if style.door_style != "none" and doors:
        marks: List[str] = []
        for (x, y) in sorted(doors, key=lambda c: (c[1], c[0])):
            door = doors[(x, y)]
            px, py = origin(x, y)
            if style.door_style == "line":
                if door.is_horizontal:
                    lx = px + cell_size / 2
                    marks.append(f'<line x1="{_n(lx)}" y1="{py}" x2="{_n(lx)}" y2="{py + cell_size}" />')
                else:
                    ly = py + cell_size / 2
                    marks.append(f'<line x1="{px}" y1="{_n(ly)}" x2="{px + cell_size}" y2="{_n(ly)}" />')
            else:
                marks.append(f'<rect x="{px}" y="{py}" width="{cell_size}" height="{cell_size}" />')
        if style.door_style == "line":
            out.append(f'<g class="doors" stroke="{style.wall_color}" stroke-width="{_n(cell_size / 4)}" '
                       f'stroke-linecap="round">' + "".join(marks) + '</g>')
        else:
            out.append(f'<g class="doors" fill="{style.floor_color}">' + "".join(marks) + '</g>')

    if style.show_grid:
        lines: List[str] = []
        for i in range(grid_size + 1):
            p = i * cell_size + PADDING
            lines.append(f'<line x1="{p}" y1="{PADDING}" x2="{p}" y2="{total - PADDING}" />')
            lines.append(f'<line x1="{PADDING}" y1="{p}" x2="{total - PADDING}" y2="{p}" />')
        out.append(f'<g stroke="{style.grid_color}" stroke-width="0.5">' + "".join(lines) + '</g>')

    font_size = cell_size * 0.6
    labels: List[str] = []
    for room in rooms:
        cx = (room.x + room.width / 2) * cell_size + PADDING
        # Nudge down so the glyph sits visually centered on the baseline
        cy = (room.y + room.height / 2) * cell_size + PADDING + font_size / 3
        labels.append(f'<text x="{_n(cx)}" y="{_n(cy)}">{room.id}</text>')
    out.append(f'<g font-family="Arial" font-size="{_n(font_size)}" text-anchor="middle" font-weight="bold" '
               f'fill="{style.text_color}">' + "".join(labels) + '</g>')
    out.append('</svg>')
    return "".join(out)
