from collections import deque
from typing import Deque, Dict, FrozenSet, List, Optional, Tuple

from .cells import Coord2D, Grid, PathCoordinate, in_bounds, mark_cells
from .rooms import Room

NO_ROUTE = float("inf")


def find_exits(room: Room, grid: Grid, grid_size: int, allow_open: bool = False) -> List[PathCoordinate]:
    """Candidate route endpoints directly outside the room's four edges.

    A cell qualifies when it is in bounds and unoccupied. With ``allow_open``
    an already open perimeter cell qualifies too, which lets a room boxed in
    by corridors attach to one of them. When no edge cell qualifies the four
    diagonal corner cells are tried instead.
    """
    def usable(x: int, y: int) -> bool:
        if not in_bounds(x, y, grid_size):
            return False
        return not grid[x][y] or allow_open

    exits: List[PathCoordinate] = []
    top, bottom = room.y - 1, room.y + room.height
    left, right = room.x - 1, room.x + room.width
    for x in range(room.x, room.x + room.width):
        if usable(x, top):
            exits.append(PathCoordinate(x, top))
    for x in range(room.x, room.x + room.width):
        if usable(x, bottom):
            exits.append(PathCoordinate(x, bottom))
    for y in range(room.y, room.y + room.height):
        if usable(left, y):
            exits.append(PathCoordinate(left, y))
    for y in range(room.y, room.y + room.height):
        if usable(right, y):
            exits.append(PathCoordinate(right, y))
    if exits:
        return exits
    for x, y in ((left, top), (right, top), (left, bottom), (right, bottom)):
        if usable(x, y):
            exits.append(PathCoordinate(x, y))
    return exits


class Router:
    """Strategy that turns two exit points into a corridor route."""

    def route(self, start: Coord2D, end: Coord2D, grid: Grid, rng, blocked: FrozenSet[Coord2D] = frozenset()) -> List[PathCoordinate]:
        raise NotImplementedError

    def distance(self, start: Coord2D, end: Coord2D, grid: Grid, blocked: FrozenSet[Coord2D] = frozenset()) -> float:
        """Length of the route ``route`` would produce, or NO_ROUTE."""
        raise NotImplementedError

    def best_pair(self, starts: List[Coord2D], ends: List[Coord2D], grid: Grid, blocked: FrozenSet[Coord2D] = frozenset()):
        """Return (length, start, end) for the shortest pairing, or (NO_ROUTE, None, None)."""
        best = (NO_ROUTE, None, None)
        for start in starts:
            for end in ends:
                d = self.distance(start, end, grid, blocked)
                if d < best[0]:
                    best = (d, start, end)
        return best


class LShapedRouter(Router):
    """Two-segment corridor: a coin flip picks horizontal- or vertical-first.

    No collision avoidance; the route may run over existing corridors or past
    other rooms.
    """

    def route(self, start, end, grid, rng, blocked=frozenset()):
        size = len(grid)
        sx, sy = start
        ex, ey = end
        path = [PathCoordinate(sx, sy)]
        if rng.random() > 0.5:
            path.extend(_walk_x(sx, ex, sy, size))
            path.extend(_walk_y(sy, ey, ex, size))
        else:
            path.extend(_walk_y(sy, ey, sx, size))
            path.extend(_walk_x(sx, ex, ey, size))
        last = path[-1]
        if (last.x, last.y) != (ex, ey):
            path.append(PathCoordinate(ex, ey))
        return path

    def distance(self, start, end, grid, blocked=frozenset()):
        return abs(start[0] - end[0]) + abs(start[1] - end[1]) + 1


def _walk_x(x: int, target: int, y: int, size: int) -> List[PathCoordinate]:
    cells = []
    step = 1 if x < target else -1
    while x != target:
        x += step
        if 0 <= x < size:
            cells.append(PathCoordinate(x, y))
    return cells


def _walk_y(y: int, target: int, x: int, size: int) -> List[PathCoordinate]:
    cells = []
    step = 1 if y < target else -1
    while y != target:
        y += step
        if 0 <= y < size:
            cells.append(PathCoordinate(x, y))
    return cells


class BreadthFirstRouter(Router):
    """Obstacle-aware BFS that never enters a blocked (room) cell.

    Neighbors that continue in the current heading are enqueued before turns,
    so among equally short routes the one that keeps going straight wins.
    """

    def route(self, start, end, grid, rng, blocked=frozenset()):
        parent = self._search([start], {end}, len(grid), blocked)
        return [PathCoordinate(x, y) for x, y in _unwind(parent, end)]

    def distance(self, start, end, grid, blocked=frozenset()):
        parent = self._search([start], {end}, len(grid), blocked)
        cells = _unwind(parent, end)
        return len(cells) if cells else NO_ROUTE

    def best_pair(self, starts, ends, grid, blocked=frozenset()):
        # One multi-source search instead of a search per pairing
        goals = set(ends)
        parent = self._search(starts, goals, len(grid), blocked)
        reached = [g for g in ends if g in parent]
        if not reached:
            return (NO_ROUTE, None, None)
        best = None
        for goal in reached:
            cells = _unwind(parent, goal)
            if best is None or len(cells) < best[0]:
                best = (len(cells), cells[0], goal)
        return best

    def _search(self, starts, goals, size: int, blocked) -> Dict[Coord2D, Optional[Coord2D]]:
        q: Deque[Tuple[Coord2D, Tuple[int, int]]] = deque()
        parent: Dict[Coord2D, Optional[Coord2D]] = {}
        for start in starts:
            if start not in blocked and start not in parent:
                parent[start] = None
                q.append((start, (0, 0)))
        while q:
            (x, y), heading = q.popleft()
            if (x, y) in goals:
                break
            straight = []
            turns = []
            for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
                nx, ny = x + dx, y + dy
                if not in_bounds(nx, ny, size) or (nx, ny) in parent or (nx, ny) in blocked:
                    continue
                (straight if (dx, dy) == heading else turns).append(((nx, ny), (dx, dy)))
            for cell, direction in straight + turns:
                parent[cell] = (x, y)
                q.append((cell, direction))
        return parent


def _unwind(parent: Dict[Coord2D, Optional[Coord2D]], goal: Coord2D) -> List[Coord2D]:
    if goal not in parent:
        return []
    path: List[Coord2D] = []
    cur: Optional[Coord2D] = goal
    while cur is not None:
        path.append(cur)
        cur = parent[cur]
    path.reverse()
    return path


def best_exit_pair(room_a: Room, room_b: Room, grid: Grid, grid_size: int, router: Router,
                   blocked: FrozenSet[Coord2D] = frozenset(), allow_open: bool = False):
    """Return (length, start, end) for the shortest exit pair, or (NO_ROUTE, None, None)."""
    exits_a = [(c.x, c.y) for c in find_exits(room_a, grid, grid_size, allow_open)]
    exits_b = [(c.x, c.y) for c in find_exits(room_b, grid, grid_size, allow_open)]
    if not exits_a or not exits_b:
        return (NO_ROUTE, None, None)
    return router.best_pair(exits_a, exits_b, grid, blocked)


def find_best_path(room_a: Room, room_b: Room, grid: Grid, grid_size: int, rng, router: Router,
                   blocked: FrozenSet[Coord2D] = frozenset(), allow_open: bool = False) -> List[PathCoordinate]:
    """Shortest route over every exit pair of the two rooms; [] when none exists."""
    _, start, end = best_exit_pair(room_a, room_b, grid, grid_size, router, blocked, allow_open)
    if start is None:
        return []
    return router.route(start, end, grid, rng, blocked)


def mark_path(path: List[PathCoordinate], grid: Grid) -> None:
    mark_cells(grid, ((c.x, c.y) for c in path))
