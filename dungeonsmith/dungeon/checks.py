"""Structural checks over a finished dungeon.

Used by the seed diagnostics script and the test suite to report layout
defects as plain data instead of failing on the first one.
"""
from __future__ import annotations

from typing import Dict, List, Tuple

from .cells import in_bounds
from .config import CONTENT_TYPES, ROOM_BUFFER
from .connectivity import connection_components
from .rooms import Room


def buffered_overlap(a: Room, b: Room, buffer: int = ROOM_BUFFER) -> bool:
    """True when b's footprint intersects a's footprint grown by ``buffer``."""
    return not (
        b.x >= a.x + a.width + buffer
        or b.x + b.width <= a.x - buffer
        or b.y >= a.y + a.height + buffer
        or b.y + b.height <= a.y - buffer
    )


def wide_corridor_runs(grid, rooms: List[Room], grid_size: int) -> List[Tuple[str, int, int, int]]:
    """Maximal runs of non-door through-corridor cells longer than one.

    Returns (axis, fixed, start, length) for each offending run.
    """
    room_cells = {c for r in rooms for c in r.cells()}
    doors = {(d.x, d.y) for r in rooms for d in r.doors}

    def is_open(x, y):
        return in_bounds(x, y, grid_size) and grid[x][y]

    def through(x, y, dx, dy):
        if not is_open(x, y) or (x, y) in room_cells or (x, y) in doors:
            return False
        return is_open(x - dx, y - dy) and is_open(x + dx, y + dy)

    found = []
    for axis, across in (("row", (0, 1)), ("col", (1, 0))):
        for fixed in range(grid_size):
            start, length = 0, 0
            for i in range(grid_size + 1):
                x, y = (i, fixed) if axis == "row" else (fixed, i)
                if i < grid_size and through(x, y, *across):
                    if length == 0:
                        start = i
                    length += 1
                    continue
                if length > 1:
                    found.append((axis, fixed, start, length))
                length = 0
    return found


def derived_grid_drift(grid, rooms: List[Room], grid_size: int) -> List[Tuple[int, int]]:
    """Cells whose grid value disagrees with rooms + paths + doors."""
    expected = set()
    for r in rooms:
        expected.update(r.cells())
        for info in r.paths_to:
            expected.update((c.x, c.y) for c in info.path if in_bounds(c.x, c.y, grid_size))
        expected.update((d.x, d.y) for d in r.doors)
    return [
        (x, y)
        for x in range(grid_size)
        for y in range(grid_size)
        if bool(grid[x][y]) != ((x, y) in expected)
    ]


def analyze(dungeon) -> Dict[str, list]:
    rooms = dungeon.rooms
    ids = {r.id for r in rooms}
    overlaps = [
        (a.id, b.id)
        for i, a in enumerate(rooms)
        for b in rooms[i + 1:]
        if buffered_overlap(a, b)
    ]
    wall_dupes = []
    bad_refs = []
    for r in rooms:
        walls = [d.wall for d in r.doors]
        wall_dupes.extend((r.id, w) for w in set(walls) if walls.count(w) > 1)
        bad_refs.extend((r.id, d.connects_to) for d in r.doors if d.connects_to not in ids or d.connects_to == r.id)
    components = connection_components(rooms)
    return {
        "room_ids_not_dense": [] if sorted(ids) == list(range(1, len(rooms) + 1)) else sorted(ids),
        "overlapping_rooms": overlaps,
        "disconnected_components": [sorted(c) for c in components] if len(components) > 1 else [],
        "wide_corridor_runs": wide_corridor_runs(dungeon.grid, rooms, dungeon.grid_size),
        "duplicate_wall_doors": wall_dupes,
        "bad_door_refs": bad_refs,
        "grid_drift": derived_grid_drift(dungeon.grid, rooms, dungeon.grid_size),
        "unknown_content_types": [r.id for r in rooms if r.content_type not in CONTENT_TYPES],
    }
