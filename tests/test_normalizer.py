from dungeonsmith.dungeon.cells import PathCoordinate
from dungeonsmith.dungeon.pruning import (
    enforce_corridor_width,
    normalize,
    prune_dead_ends,
    rebuild_grid,
    validate_door_connections,
)
from dungeonsmith.dungeon.rooms import Door, PathInfo

from tests.dungeon_test_utils import grid_with_rooms, open_cells, through_runs


def _add_path(grid, room, cells, to=0):
    path = [PathCoordinate(x, y) for x, y in cells]
    for c in path:
        grid[c.x][c.y] = True
    room.paths_to.append(PathInfo(room_id=to, path=path))
    return path


def test_two_wide_band_collapses_to_one_column():
    grid, (room,) = grid_with_rooms(12, (10, 10, 1, 1))
    _add_path(grid, room, [(4, y) for y in range(2, 10)])
    _add_path(grid, room, [(5, y) for y in range(2, 10)])
    sealed = enforce_corridor_width(grid, [room], 12)
    assert sealed == 6
    assert all(not grid[4][y] for y in range(3, 9))
    assert all(grid[5][y] for y in range(2, 10))
    assert max(through_runs(grid, [room], 12)) == 1
    # sealed cells are gone from the stored path too
    assert [(c.x, c.y) for c in room.paths_to[0].path] == [(4, 2), (4, 9)]


def test_width_enforcement_never_seals_doors():
    grid, (room,) = grid_with_rooms(12, (10, 10, 1, 1))
    _add_path(grid, room, [(4, y) for y in range(2, 10)])
    _add_path(grid, room, [(5, y) for y in range(2, 10)])
    room.doors.append(Door(x=4, y=5, is_horizontal=False, connects_to=1, wall="left"))
    enforce_corridor_width(grid, [room], 12)
    assert grid[4][5]
    assert max(through_runs(grid, [room], 12)) == 1


def test_single_width_crossing_is_left_alone():
    grid, (room,) = grid_with_rooms(12, (10, 10, 1, 1))
    _add_path(grid, room, [(x, 5) for x in range(1, 9)])
    _add_path(grid, room, [(4, y) for y in range(1, 9)])
    before = open_cells(grid)
    assert enforce_corridor_width(grid, [room], 12) == 0
    assert open_cells(grid) == before


def test_straight_single_corridor_is_not_cut():
    grid, (room,) = grid_with_rooms(12, (10, 10, 1, 1))
    path = _add_path(grid, room, [(x, 6) for x in range(1, 10)])
    assert enforce_corridor_width(grid, [room], 12) == 0
    assert all(grid[x][6] for x in range(1, 10))
    assert len(room.paths_to[0].path) == len(path) == 9


def test_dead_end_pruning_stops_at_room_wall():
    grid, (room,) = grid_with_rooms(12, (2, 2, 2, 2))
    _add_path(grid, room, [(x, 2) for x in range(4, 9)])
    pruned, passes = prune_dead_ends(grid, [room], 12)
    assert pruned == 4
    assert passes == 5
    assert grid[4][2] and not grid[5][2]
    assert [(c.x, c.y) for c in room.paths_to[0].path] == [(4, 2)]


def test_dead_end_pruning_is_bounded():
    grid, (room,) = grid_with_rooms(16, (2, 2, 2, 2))
    _add_path(grid, room, [(x, 2) for x in range(4, 15)])
    pruned, passes = prune_dead_ends(grid, [room], 16, max_passes=2)
    assert passes == 2
    assert pruned == 2
    assert grid[12][2] and not grid[13][2]


def test_rebuild_grid_drops_cells_nothing_accounts_for():
    grid, (room,) = grid_with_rooms(10, (2, 2, 2, 2))
    grid[8][8] = True
    _add_path(grid, room, [(4, 2), (5, 2)])
    rebuild_grid(grid, [room], 10)
    assert not grid[8][8]
    assert grid[5][2] and grid[2][2]


def test_door_repair_is_counted_and_logged(capsys):
    _, rooms = grid_with_rooms(20, (2, 2, 2, 2), (10, 10, 2, 2))
    rooms[0].doors = [
        Door(x=4, y=2, is_horizontal=False, connects_to=99, wall="right"),
        Door(x=2, y=1, is_horizontal=True, connects_to=1, wall="top"),
        Door(x=2, y=4, is_horizontal=True, connects_to=2, wall="bottom"),
    ]
    repairs = validate_door_connections(rooms)
    assert repairs == 2
    assert [d.connects_to for d in rooms[0].doors] == [2, 2, 2]
    err = capsys.readouterr().err
    assert err.count("event=door_repaired") == 2


def test_normalize_reports_each_pass():
    grid, (room,) = grid_with_rooms(14, (2, 2, 2, 2))
    _add_path(grid, room, [(4, y) for y in range(2, 10)])
    _add_path(grid, room, [(5, y) for y in range(2, 10)])
    stats = normalize(grid, [room], 14)
    assert stats.cells_sealed > 0
    assert stats.cells_pruned > 0
    assert stats.door_repairs == 0
    derived = set(room.cells()) | {(c.x, c.y) for p in room.paths_to for c in p.path}
    assert open_cells(grid) == derived
