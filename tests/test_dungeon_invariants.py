"""Structural properties every generated dungeon must satisfy.

These run over a small matrix of dungeon types, sizes and seeds built once per
session (see ``dungeon_matrix`` in conftest).
"""

import pytest

from dungeonsmith.dungeon import CONTENT_TYPES, SIZE_TIERS, Dungeon, get_size_config
from dungeonsmith.dungeon.checks import analyze

from tests.dungeon_test_utils import (
    derived_open_cells,
    footprints_collide,
    open_cells,
    room_graph_components,
    through_runs,
)

pytestmark = pytest.mark.structure


def _label(d):
    return f"{d.dungeon_type}/{d.size}/seed={d.seed}"


def test_room_count_within_requested_and_ids_dense(dungeon_matrix):
    for d in dungeon_matrix:
        cfg = get_size_config(d.size)
        assert 3 <= len(d.rooms) <= d.report.rooms_requested <= cfg.max_rooms, _label(d)
        assert [r.id for r in d.rooms] == list(range(1, len(d.rooms) + 1)), _label(d)


def test_rooms_never_overlap_including_buffer(dungeon_matrix):
    for d in dungeon_matrix:
        for i, a in enumerate(d.rooms):
            for b in d.rooms[i + 1:]:
                assert not footprints_collide(a, b), f"{_label(d)}: rooms {a.id}/{b.id}"


def test_room_graph_is_connected(dungeon_matrix):
    for d in dungeon_matrix:
        assert room_graph_components(d.rooms) == 1, _label(d)
        assert d.report.isolated_rooms == [], _label(d)


def test_connections_are_symmetric_without_self_edges(dungeon_matrix):
    for d in dungeon_matrix:
        by_id = {r.id: r for r in d.rooms}
        for r in d.rooms:
            assert r.id not in r.connections
            assert len(r.connections) == len(set(r.connections))
            for other in r.connections:
                assert r.id in by_id[other].connections, _label(d)


def test_corridors_are_one_cell_wide(dungeon_matrix):
    for d in dungeon_matrix:
        runs = list(through_runs(d.grid, d.rooms, d.grid_size))
        assert all(n <= 1 for n in runs), f"{_label(d)}: wide run {max(runs)}"


def test_at_most_one_door_per_wall(dungeon_matrix):
    for d in dungeon_matrix:
        for r in d.rooms:
            walls = [door.wall for door in r.doors]
            assert len(walls) == len(set(walls)), f"{_label(d)}: room {r.id} {walls}"


def test_doors_reference_other_existing_rooms(dungeon_matrix):
    for d in dungeon_matrix:
        ids = {r.id for r in d.rooms}
        for r in d.rooms:
            for door in r.doors:
                assert door.connects_to in ids and door.connects_to != r.id, _label(d)
                assert r.on_perimeter(door.x, door.y)
                assert door.is_horizontal == (door.wall in ("top", "bottom"))


def test_grid_matches_rooms_paths_and_doors(dungeon_matrix):
    for d in dungeon_matrix:
        assert open_cells(d.grid) == derived_open_cells(d.rooms), _label(d)


def test_content_types_are_known(dungeon_matrix):
    for d in dungeon_matrix:
        for r in d.rooms:
            assert r.content_type in CONTENT_TYPES
            assert r.type in d.theme.possible_rooms


def test_report_agrees_with_layout(dungeon_matrix):
    for d in dungeon_matrix:
        rep = d.report
        assert rep.seed == d.seed
        assert rep.rooms_placed == len(d.rooms)
        assert rep.edges == sum(len(r.connections) for r in d.rooms) // 2
        assert rep.doors == sum(len(r.doors) for r in d.rooms)
        assert rep.shortfall == rep.rooms_requested - rep.rooms_placed
        assert set(rep.phase_ms) == {"place_rooms", "connect_rooms", "assign_doors", "normalize"}


def test_analyze_finds_nothing(dungeon_matrix):
    for d in dungeon_matrix:
        issues = {k: v for k, v in analyze(d).items() if v}
        assert issues == {}, f"{_label(d)}: {issues}"


@pytest.mark.parametrize("dungeon_type", ["Cave", "Tomb", "Deep Tunnels", "Ruins"])
def test_same_seed_same_dungeon(dungeon_type):
    a = Dungeon(dungeon_type=dungeon_type, size="Medium", seed=4242)
    b = Dungeon(dungeon_type=dungeon_type, size="Medium", seed=4242)
    assert a.to_dict()["rooms"] == b.to_dict()["rooms"]
    assert a.grid == b.grid


def test_different_seeds_differ():
    a = Dungeon(dungeon_type="Cave", size="Medium", seed=1)
    b = Dungeon(dungeon_type="Cave", size="Medium", seed=2)
    assert a.to_dict()["rooms"] != b.to_dict()["rooms"]


def test_small_cave_uses_small_tier(small_cave):
    assert small_cave.grid_size == SIZE_TIERS["Small"].grid_size == 24
    assert small_cave.cell_size == 20
    assert small_cave.to_dict()["dungeonType"] == "Cave"
