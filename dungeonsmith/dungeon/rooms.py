import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .cells import Grid, PathCoordinate
from .config import (
    BOSS_DOWNGRADE_CHANCE,
    BOSS_DOWNGRADE_ROOM_THRESHOLD,
    BOSS_MONSTER,
    EDGE_PADDING,
    EMPTY,
    MIN_ROOM_COUNT,
    MONSTER_MOB,
    PLACEMENT_RETRIES,
    ROOM_BUFFER,
    ROOM_SHAPES,
    SizeConfig,
    content_weights,
)
from .themes import ThemeConfig

WALLS = ("top", "bottom", "left", "right")


@dataclass
class Door:
    x: int
    y: int
    is_horizontal: bool
    connects_to: int
    wall: str

    def to_dict(self):
        return {
            "x": self.x,
            "y": self.y,
            "isHorizontal": self.is_horizontal,
            "connectsTo": self.connects_to,
            "wall": self.wall,
        }


@dataclass
class PathInfo:
    room_id: int
    path: List[PathCoordinate]

    def to_dict(self):
        return {"roomId": self.room_id, "path": [c.to_dict() for c in self.path]}


@dataclass
class Room:
    id: int
    x: int
    y: int
    width: int
    height: int
    type: str = ""
    content: str = ""
    content_type: str = EMPTY
    shape: str = ""
    connections: List[int] = field(default_factory=list)
    doors: List[Door] = field(default_factory=list)
    paths_to: List[PathInfo] = field(default_factory=list)

    def cells(self):
        for ix in range(self.x, self.x + self.width):
            for iy in range(self.y, self.y + self.height):
                yield ix, iy

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height

    def on_perimeter(self, x: int, y: int) -> bool:
        """True when (x, y) sits directly outside one of the four edges (corners excluded)."""
        if self.x <= x < self.x + self.width and y in (self.y - 1, self.y + self.height):
            return True
        if self.y <= y < self.y + self.height and x in (self.x - 1, self.x + self.width):
            return True
        return False

    def to_dict(self):
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "type": self.type,
            "content": self.content,
            "contentType": self.content_type,
            "shape": self.shape,
            "connections": list(self.connections),
            "doors": [d.to_dict() for d in self.doors],
            "pathsTo": [p.to_dict() for p in self.paths_to],
        }


def place_rooms(grid: Grid, size_config: SizeConfig, theme: ThemeConfig, size: str, rng=None):
    """Place non-overlapping rooms onto the grid.

    Returns (rooms, target). Placement stops at the first room that cannot be
    fitted within its retry budget, so ``len(rooms)`` may fall short of target.
    """
    if rng is None:
        rng = random
    target = size_config.min_rooms + int(rng.random() * (size_config.max_rooms - size_config.min_rooms))
    target = max(target, MIN_ROOM_COUNT)
    grid_size = size_config.grid_size
    rooms: List[Room] = []
    for _ in range(target):
        room = _try_place_room(grid, grid_size, len(rooms) + 1, rng)
        if room is None:
            break
        room.type = rng.choice(theme.possible_rooms) if theme.possible_rooms else ""
        room.content_type = roll_content_type(size, rng)
        room.content = content_for_type(room.content_type, theme, rng)
        if room.content_type == BOSS_MONSTER and any(r.content_type == BOSS_MONSTER for r in rooms):
            if target < BOSS_DOWNGRADE_ROOM_THRESHOLD or rng.random() < BOSS_DOWNGRADE_CHANCE:
                room.content_type = MONSTER_MOB
                room.content = content_for_type(MONSTER_MOB, theme, rng)
        rooms.append(room)
    return rooms, target


def _try_place_room(grid: Grid, grid_size: int, room_id: int, rng) -> Optional[Room]:
    for _ in range(PLACEMENT_RETRIES):
        name, width, height = select_room_shape(rng)
        max_x = grid_size - width - EDGE_PADDING
        max_y = grid_size - height - EDGE_PADDING
        if max_x <= EDGE_PADDING or max_y <= EDGE_PADDING:
            continue
        x = int(rng.random() * (max_x - EDGE_PADDING)) + EDGE_PADDING
        y = int(rng.random() * (max_y - EDGE_PADDING)) + EDGE_PADDING
        if not is_area_free(grid, x, y, width, height, ROOM_BUFFER):
            continue
        room = Room(id=room_id, x=x, y=y, width=width, height=height, shape=name)
        for ix, iy in room.cells():
            grid[ix][iy] = True
        return room
    return None


def select_room_shape(rng) -> Tuple[str, int, int]:
    total = sum(p for _, _, _, p in ROOM_SHAPES)
    roll = rng.random() * total
    cumulative = 0.0
    for name, width, height, probability in ROOM_SHAPES:
        cumulative += probability
        if roll <= cumulative:
            return name, width, height
    name, width, height, _ = ROOM_SHAPES[0]
    return name, width, height


def is_area_free(grid: Grid, x: int, y: int, width: int, height: int, buffer: int) -> bool:
    size = len(grid)
    for ix in range(x - buffer, x + width + buffer):
        for iy in range(y - buffer, y + height + buffer):
            if not (0 <= ix < size and 0 <= iy < size):
                continue
            if grid[ix][iy]:
                return False
    return True


def roll_content_type(size: str, rng) -> str:
    weights = content_weights(size)
    total = sum(weights.values())
    roll = rng.random() * total
    cumulative = 0
    for content_type, weight in weights.items():
        cumulative += weight
        if roll < cumulative:
            return content_type
    return EMPTY


def content_for_type(content_type: str, theme: ThemeConfig, rng) -> str:
    options = theme.options_for(content_type)
    if not options:
        return "Empty room"
    return rng.choice(options)
