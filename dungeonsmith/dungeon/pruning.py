"""Grid normalization passes run after doors are assigned.

Every pass that closes a cell also removes it from the stored corridor paths,
so the grid can always be rebuilt from rooms, paths and doors without drift.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Set

from ..logging_utils import get_logger
from .cells import ORTHOGONAL, Coord2D, Grid, in_bounds, mark_cells
from .config import PRUNE_MAX_PASSES
from .doors import door_cells
from .rooms import Room

log = get_logger("dungeon.pruning")


@dataclass
class NormalizeStats:
    cells_sealed: int = 0
    cells_pruned: int = 0
    prune_passes: int = 0
    door_repairs: int = 0


def normalize(grid: Grid, rooms: List[Room], grid_size: int) -> NormalizeStats:
    stats = NormalizeStats()
    stats.cells_sealed = enforce_corridor_width(grid, rooms, grid_size)
    stats.cells_pruned, stats.prune_passes = prune_dead_ends(grid, rooms, grid_size)
    stats.door_repairs = validate_door_connections(rooms)
    return stats


def _room_cells(rooms: Iterable[Room]) -> Set[Coord2D]:
    return {c for r in rooms for c in r.cells()}


def _strip_cells_from_paths(rooms: List[Room], cells: Set[Coord2D]) -> None:
    if not cells:
        return
    for room in rooms:
        for info in room.paths_to:
            info.path = [c for c in info.path if (c.x, c.y) not in cells]


def enforce_corridor_width(grid: Grid, rooms: List[Room], grid_size: int) -> int:
    """Collapse corridor bands wider than one cell. Returns cells sealed.

    The row scan looks at cells that carry a vertical corridor through (open
    above and below); a maximal horizontal run of those longer than one cell
    keeps only its middle cell. The column scan is the transpose. Door cells
    are never sealed.
    """
    room_cells = _room_cells(rooms)
    doors = door_cells(rooms)

    def is_open(x: int, y: int) -> bool:
        return in_bounds(x, y, grid_size) and grid[x][y]

    def through(x: int, y: int, across: Coord2D) -> bool:
        if not is_open(x, y) or (x, y) in room_cells:
            return False
        dx, dy = across
        return is_open(x - dx, y - dy) and is_open(x + dx, y + dy)

    sealed: Set[Coord2D] = set()

    def collapse(run: List[Coord2D]) -> None:
        if len(run) <= 1:
            return
        keep = run[len(run) // 2]
        for cell in run:
            if cell == keep or cell in doors:
                continue
            grid[cell[0]][cell[1]] = False
            sealed.add(cell)

    # rows: runs along x of cells open above and below
    for y in range(grid_size):
        run: List[Coord2D] = []
        for x in range(grid_size):
            if through(x, y, (0, 1)):
                run.append((x, y))
            else:
                collapse(run)
                run = []
        collapse(run)

    # columns: runs along y of cells open left and right
    for x in range(grid_size):
        run = []
        for y in range(grid_size):
            if through(x, y, (1, 0)):
                run.append((x, y))
            else:
                collapse(run)
                run = []
        collapse(run)

    _strip_cells_from_paths(rooms, sealed)
    return len(sealed)


def rebuild_grid(grid: Grid, rooms: List[Room], grid_size: int) -> None:
    """Re-derive the grid in place from room footprints, stored paths and doors."""
    for x in range(grid_size):
        for y in range(grid_size):
            grid[x][y] = False
    for room in rooms:
        mark_cells(grid, room.cells())
        for info in room.paths_to:
            mark_cells(grid, ((c.x, c.y) for c in info.path))
        mark_cells(grid, ((d.x, d.y) for d in room.doors))


def prune_dead_ends(grid: Grid, rooms: List[Room], grid_size: int, max_passes: int = PRUNE_MAX_PASSES):
    """Remove dangling corridor stubs. Returns (cells_pruned, passes_run).

    A stub is an open non-room cell with at most one open neighbor and no
    room neighbor. Cells are collected per pass and closed together.
    """
    rebuild_grid(grid, rooms, grid_size)
    room_cells = _room_cells(rooms)
    pruned: Set[Coord2D] = set()
    passes = 0
    for _ in range(max_passes):
        passes += 1
        stubs = []
        for x in range(grid_size):
            for y in range(grid_size):
                if not grid[x][y] or (x, y) in room_cells:
                    continue
                open_count = 0
                touches_room = False
                for dx, dy in ORTHOGONAL:
                    nx, ny = x + dx, y + dy
                    if not in_bounds(nx, ny, grid_size) or not grid[nx][ny]:
                        continue
                    open_count += 1
                    if (nx, ny) in room_cells:
                        touches_room = True
                if open_count <= 1 and not touches_room:
                    stubs.append((x, y))
        if not stubs:
            break
        for x, y in stubs:
            grid[x][y] = False
        pruned.update(stubs)
    _strip_cells_from_paths(rooms, pruned)
    return len(pruned), passes


def validate_door_connections(rooms: List[Room]) -> int:
    """Point dangling or self-referencing doors at the first other room.

    Every repair is logged so callers can tell when it fires. Returns the
    number of doors repaired.
    """
    ids = {r.id for r in rooms}
    repairs = 0
    for room in rooms:
        fallback = next((r.id for r in rooms if r.id != room.id), None)
        for door in room.doors:
            if door.connects_to in ids and door.connects_to != room.id:
                continue
            if fallback is None:
                continue
            log.warn(event="door_repaired", room=room.id, x=door.x, y=door.y,
                     was=door.connects_to, now=fallback)
            door.connects_to = fallback
            repairs += 1
    return repairs
