"""Room graph construction: greedy spanning phase plus short loop edges.

Edge weight is the length of the corridor that would actually be carved
between the two rooms' best exit points, not a center-to-center distance.
"""
from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Set

from ..logging_utils import get_logger
from .cells import Grid, PathCoordinate
from .config import LOOP_EDGE_RATIO, LOOP_ROUTE_LIMIT
from .rooms import PathInfo, Room
from .tunnels import NO_ROUTE, LShapedRouter, Router, best_exit_pair, mark_path

log = get_logger("dungeon.connectivity")


@dataclass
class ConnectivityStats:
    tree_edges: int = 0
    loop_edges: int = 0
    stranded_recoveries: int = 0
    isolated_rooms: List[int] = field(default_factory=list)


def connect_rooms(rooms: List[Room], grid: Grid, grid_size: int, rng=None, router: Router | None = None) -> ConnectivityStats:
    """Link every room into one graph, carving each chosen route into the grid."""
    stats = ConnectivityStats()
    if len(rooms) <= 1:
        return stats
    if rng is None:
        rng = random
    if router is None:
        router = LShapedRouter()
    blocked = frozenset(c for r in rooms for c in r.cells())

    connected = [0]
    unconnected = list(range(1, len(rooms)))
    while unconnected:
        choice = _closest_pair(rooms, connected, unconnected, grid, grid_size, router, blocked, allow_open=False)
        if choice is None:
            # Every remaining room is boxed in; let it attach to a corridor it already touches
            choice = _closest_pair(rooms, connected, unconnected, grid, grid_size, router, blocked, allow_open=True)
            if choice is None:
                break
            stats.stranded_recoveries += 1
            log.warn(event="stranded_room_recovered", room=rooms[choice[1]].id)
        a, b, start, end = choice
        path = router.route(start, end, grid, rng, blocked)
        link_rooms(rooms[a], rooms[b], path, grid)
        stats.tree_edges += 1
        connected.append(b)
        unconnected.remove(b)

    if unconnected:
        stats.isolated_rooms = [rooms[i].id for i in unconnected]
        log.warn(event="isolated_rooms", rooms=",".join(str(i) for i in stats.isolated_rooms))

    extra = int(len(rooms) * LOOP_EDGE_RATIO) + 1
    for _ in range(extra):
        best = (NO_ROUTE, None)
        for i in range(len(rooms)):
            for j in range(i + 1, len(rooms)):
                if rooms[j].id in rooms[i].connections:
                    continue
                length, start, end = best_exit_pair(rooms[i], rooms[j], grid, grid_size, router, blocked)
                if length < best[0] and length < LOOP_ROUTE_LIMIT:
                    best = (length, (i, j, start, end))
        if best[1] is None:
            continue
        i, j, start, end = best[1]
        path = router.route(start, end, grid, rng, blocked)
        link_rooms(rooms[i], rooms[j], path, grid)
        stats.loop_edges += 1
    return stats


def _closest_pair(rooms, connected, unconnected, grid, grid_size, router, blocked, allow_open):
    best_length = NO_ROUTE
    best = None
    for a in connected:
        for b in unconnected:
            length, start, end = best_exit_pair(rooms[a], rooms[b], grid, grid_size, router, blocked, allow_open)
            if length < best_length:
                best_length = length
                best = (a, b, start, end)
    return best


def link_rooms(room_a: Room, room_b: Room, path: List[PathCoordinate], grid: Grid) -> None:
    """Record a bidirectional edge and open the corridor cells."""
    room_a.connections.append(room_b.id)
    room_b.connections.append(room_a.id)
    mark_path(path, grid)
    room_a.paths_to.append(PathInfo(room_id=room_b.id, path=list(path)))
    room_b.paths_to.append(PathInfo(room_id=room_a.id, path=list(reversed(path))))


def connection_components(rooms: List[Room]) -> List[Set[int]]:
    """Connected components of the room graph induced by ``connections``."""
    adjacency: Dict[int, Set[int]] = {r.id: set() for r in rooms}
    for r in rooms:
        for other in r.connections:
            if other in adjacency:
                adjacency[r.id].add(other)
                adjacency[other].add(r.id)
    seen: Set[int] = set()
    components: List[Set[int]] = []
    for rid in adjacency:
        if rid in seen:
            continue
        comp = {rid}
        q = deque([rid])
        seen.add(rid)
        while q:
            cur = q.popleft()
            for nxt in adjacency[cur]:
                if nxt not in seen:
                    seen.add(nxt)
                    comp.add(nxt)
                    q.append(nxt)
        components.append(comp)
    return components
