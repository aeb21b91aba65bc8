"""Door assignment: at most one door per room wall.

Runs after corridors are carved. A door is an open cell directly outside a
room's wall; each is tagged with the room it appears to lead to.
"""
from __future__ import annotations

import math
import random
from typing import Dict, List, Set

from .cells import Coord2D, Grid, in_bounds
from .rooms import WALLS, Door, Room


def assign_doors(rooms: List[Room], grid: Grid, grid_size: int, rng=None) -> int:
    """Rebuild every room's door list from the current grid. Returns doors created."""
    if rng is None:
        rng = random
    for room in rooms:
        room.doors = []
    created = 0
    for room in rooms:
        by_wall = door_candidates(room, rooms, grid, grid_size)
        pending = set(room.connections)
        for wall in WALLS:
            options = by_wall[wall]
            if not options:
                continue
            connecting = [d for d in options if d.connects_to in pending]
            if connecting:
                chosen = rng.choice(connecting)
                pending.discard(chosen.connects_to)
            else:
                chosen = rng.choice(options)
            room.doors.append(chosen)
            created += 1
        # Retrofit pass, kept for layout parity: only walls still without a door
        # are eligible, and the first pass already gave a door to every wall
        # with a candidate, so it never adds one today
        if pending:
            used = {d.wall for d in room.doors}
            for wall in WALLS:
                if wall in used:
                    continue
                for door in by_wall[wall]:
                    if door.connects_to in pending:
                        room.doors.append(door)
                        used.add(wall)
                        pending.discard(door.connects_to)
                        created += 1
                        break
    _flag_door_cells(rooms)
    return created


def door_candidates(room: Room, rooms: List[Room], grid: Grid, grid_size: int) -> Dict[str, List[Door]]:
    """Open in-bounds cells directly outside each wall, grouped by wall."""
    def candidate(x: int, y: int, wall: str) -> Door | None:
        if not in_bounds(x, y, grid_size) or not grid[x][y]:
            return None
        return Door(
            x=x,
            y=y,
            is_horizontal=wall in ("top", "bottom"),
            connects_to=find_connected_room_id(x, y, room.id, rooms),
            wall=wall,
        )

    edges = {
        "top": [(x, room.y - 1) for x in range(room.x, room.x + room.width)],
        "bottom": [(x, room.y + room.height) for x in range(room.x, room.x + room.width)],
        "left": [(room.x - 1, y) for y in range(room.y, room.y + room.height)],
        "right": [(room.x + room.width, y) for y in range(room.y, room.y + room.height)],
    }
    by_wall: Dict[str, List[Door]] = {}
    for wall in WALLS:
        doors = (candidate(x, y, wall) for x, y in edges[wall])
        by_wall[wall] = [d for d in doors if d is not None]
    return by_wall


def find_connected_room_id(x: int, y: int, current_id: int, rooms: List[Room]) -> int:
    """Room whose perimeter holds (x, y), else the nearest other room by center; 0 if none."""
    closest = 0
    best = math.inf
    for room in rooms:
        if room.id == current_id:
            continue
        if room.on_perimeter(x, y):
            return room.id
        cx, cy = room.center
        d = math.hypot(x - cx, y - cy)
        if d < best:
            best = d
            closest = room.id
    return closest


def door_cells(rooms: List[Room]) -> Set[Coord2D]:
    return {(d.x, d.y) for r in rooms for d in r.doors}


def _flag_door_cells(rooms: List[Room]) -> None:
    cells = door_cells(rooms)
    for room in rooms:
        for info in room.paths_to:
            for coord in info.path:
                coord.is_door = (coord.x, coord.y) in cells
