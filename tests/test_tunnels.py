import random

from dungeonsmith.dungeon.tunnels import (
    NO_ROUTE,
    BreadthFirstRouter,
    LShapedRouter,
    best_exit_pair,
    find_best_path,
    find_exits,
)

from tests.dungeon_test_utils import grid_with_rooms


def _contiguous(path):
    return all(abs(a.x - b.x) + abs(a.y - b.y) == 1 for a, b in zip(path, path[1:]))


def test_exits_are_cells_outside_each_edge():
    grid, (room,) = grid_with_rooms(12, (4, 4, 3, 2))
    exits = {(c.x, c.y) for c in find_exits(room, grid, 12)}
    assert len(exits) == 2 * 3 + 2 * 2
    assert (4, 3) in exits and (6, 6) in exits and (3, 5) in exits and (7, 4) in exits
    # corners are not edge exits
    assert (3, 3) not in exits


def test_exits_fall_back_to_corners_when_edges_blocked():
    grid, (room,) = grid_with_rooms(12, (5, 5, 2, 2))
    for x, y in [(5, 4), (6, 4), (5, 7), (6, 7), (4, 5), (4, 6), (7, 5), (7, 6)]:
        grid[x][y] = True
    exits = {(c.x, c.y) for c in find_exits(room, grid, 12)}
    assert exits == {(4, 4), (7, 4), (4, 7), (7, 7)}
    # open perimeter cells qualify only when explicitly allowed
    assert len(find_exits(room, grid, 12, allow_open=True)) == 8


def test_exits_skip_out_of_bounds_cells():
    grid, (room,) = grid_with_rooms(6, (0, 0, 2, 2))
    exits = {(c.x, c.y) for c in find_exits(room, grid, 6)}
    assert exits == {(0, 2), (1, 2), (2, 0), (2, 1)}


def test_l_shaped_route_is_contiguous_and_exact_length():
    grid, _ = grid_with_rooms(20)
    router = LShapedRouter()
    rng = random.Random(8)
    for start, end in [((2, 3), (15, 11)), ((15, 2), (1, 17)), ((4, 4), (4, 12)), ((5, 5), (5, 5))]:
        path = router.route(start, end, grid, rng)
        assert (path[0].x, path[0].y) == start
        assert (path[-1].x, path[-1].y) == end
        assert _contiguous(path)
        assert len(path) == router.distance(start, end, grid)
        assert len({(c.x, c.y) for c in path}) == len(path)


def test_l_shaped_route_orientation_follows_coin_flip():
    grid, _ = grid_with_rooms(10)

    class Fixed:
        def __init__(self, value):
            self.value = value

        def random(self):
            return self.value

    horizontal_first = LShapedRouter().route((1, 1), (4, 4), grid, Fixed(0.9))
    vertical_first = LShapedRouter().route((1, 1), (4, 4), grid, Fixed(0.1))
    assert (horizontal_first[1].x, horizontal_first[1].y) == (2, 1)
    assert (vertical_first[1].x, vertical_first[1].y) == (1, 2)


def test_breadth_first_router_goes_around_blocked_cells():
    grid, _ = grid_with_rooms(10)
    wall = frozenset((5, y) for y in range(9))
    router = BreadthFirstRouter()
    path = router.route((2, 2), (8, 2), grid, random.Random(1), wall)
    cells = [(c.x, c.y) for c in path]
    assert cells[0] == (2, 2) and cells[-1] == (8, 2)
    assert not set(cells) & wall
    assert (5, 9) in cells
    assert _contiguous(path)
    assert router.distance((2, 2), (8, 2), grid, wall) == len(path)


def test_breadth_first_router_reports_unreachable():
    grid, _ = grid_with_rooms(8)
    wall = frozenset((4, y) for y in range(8))
    router = BreadthFirstRouter()
    assert router.distance((1, 1), (6, 6), grid, wall) == NO_ROUTE
    assert router.best_pair([(1, 1)], [(6, 6)], grid, wall) == (NO_ROUTE, None, None)


def test_breadth_first_prefers_straight_runs():
    grid, _ = grid_with_rooms(10)
    path = BreadthFirstRouter().route((1, 1), (6, 4), grid, random.Random(0))
    cells = [(c.x, c.y) for c in path]
    turns = sum(
        1
        for a, b, c in zip(cells, cells[1:], cells[2:])
        if (b[0] - a[0], b[1] - a[1]) != (c[0] - b[0], c[1] - b[1])
    )
    assert len(cells) == 9
    assert turns == 1


def test_best_exit_pair_picks_facing_walls():
    grid, (a, b) = grid_with_rooms(20, (2, 5, 2, 2), (12, 5, 2, 2))
    length, start, end = best_exit_pair(a, b, grid, 20, LShapedRouter())
    assert start == (4, 5) or start == (4, 6)
    assert end[0] == 11
    assert length == 8


def test_best_path_empty_when_a_room_has_no_exits():
    grid, (a, b) = grid_with_rooms(12, (2, 2, 2, 2), (7, 7, 2, 2))
    # Box room b in completely, corners included
    for x in range(6, 10):
        for y in range(6, 10):
            grid[x][y] = True
    assert find_best_path(a, b, grid, 12, random.Random(1), LShapedRouter()) == []
    assert find_best_path(a, b, grid, 12, random.Random(1), LShapedRouter(), allow_open=True)
