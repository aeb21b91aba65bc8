"""Pipeline orchestration for dungeon generation.

``Dungeon`` owns the grid and room list for one run and drives the phases in
order: placement, connectivity, doors, normalization. All randomness comes
from a single ``random.Random`` seeded per instance, so a seed reproduces the
exact same floorplan.
"""
from __future__ import annotations

import os
import random
import time
from typing import Any, Dict, List, Optional

from flask import current_app, has_app_context

from ..logging_utils import get_logger
from .cells import Grid, new_grid
from .config import DEFAULT_SIZE, SIZE_TIERS, GenerateOptions, get_size_config
from .connectivity import connect_rooms
from .doors import assign_doors
from .metrics import GenerationReport, init_metrics
from .pruning import normalize
from .rooms import Room, place_rooms
from .themes import ThemeConfig, get_theme
from .tunnels import Router

log = get_logger("dungeon.pipeline")

_FALSEY = {'0', 'false', 'no', 'off', ''}


class Dungeon:
    def __init__(self, options: Optional[GenerateOptions] = None, *, dungeon_type: Optional[str] = None,
                 size: Optional[str] = None, seed: Optional[int] = None,
                 themes: Optional[Dict[str, ThemeConfig]] = None, router: Optional[Router] = None):
        options = options or GenerateOptions()
        self.dungeon_type = dungeon_type if dungeon_type is not None else options.dungeon_type
        requested_size = size if size is not None else options.size
        # Unknown tiers resolve to Medium
        self.size = requested_size if requested_size in SIZE_TIERS else DEFAULT_SIZE
        self.seed = seed if seed is not None else options.seed
        # 0 is a valid deterministic seed; None => random
        if self.seed is None:
            self.seed = random.randint(1, 1_000_000)
        self.size_config = get_size_config(self.size)
        self.grid_size = self.size_config.grid_size
        self.cell_size = self.size_config.cell_size
        self.router = router
        self.enable_metrics = True
        themes = self._apply_config_overrides(themes)
        # Raises UnknownDungeonType before any work is done
        self.theme = get_theme(self.dungeon_type, themes)
        self.rng = random.Random(self.seed)
        self.metrics: Dict[str, Any] = init_metrics() if self.enable_metrics else {}
        self.rooms: List[Room] = []
        self.grid: Grid = new_grid(self.grid_size)
        self.report = GenerationReport(seed=self.seed)
        self._run_pipeline()

    def _apply_config_overrides(self, themes):
        if 'DUNGEONSMITH_ENABLE_METRICS' in os.environ:
            self.enable_metrics = os.environ['DUNGEONSMITH_ENABLE_METRICS'].lower() not in _FALSEY
        # Flask app config takes precedence when generating inside a request
        if has_app_context():
            cfg = current_app.config
            if 'DUNGEONSMITH_ENABLE_METRICS' in cfg:
                self.enable_metrics = bool(cfg.get('DUNGEONSMITH_ENABLE_METRICS'))
            if themes is None and cfg.get('DUNGEONSMITH_THEMES'):
                themes = cfg['DUNGEONSMITH_THEMES']
        return themes

    def _run_pipeline(self):
        start = time.perf_counter()
        phase_times: Dict[str, float] = {}

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter(); r = fn(*a, **k); pe = time.perf_counter()
            phase_times[label] = round((pe - ps) * 1000, 3)
            return r

        rooms, target = _phase('place_rooms', place_rooms, self.grid, self.size_config, self.theme, self.size, self.rng)
        self.rooms = rooms
        conn = _phase('connect_rooms', connect_rooms, self.rooms, self.grid, self.grid_size, self.rng, self.router)
        doors = _phase('assign_doors', assign_doors, self.rooms, self.grid, self.grid_size, self.rng)
        norm = _phase('normalize', normalize, self.grid, self.rooms, self.grid_size)
        runtime_ms = round((time.perf_counter() - start) * 1000, 3)

        report = self.report
        report.rooms_requested = target
        report.rooms_placed = len(self.rooms)
        report.edges = conn.tree_edges + conn.loop_edges
        report.loop_edges = conn.loop_edges
        report.isolated_rooms = list(conn.isolated_rooms)
        report.doors = doors
        report.connections_without_door = self._count_connections_without_door()
        report.door_repairs = norm.door_repairs
        report.cells_sealed = norm.cells_sealed
        report.cells_pruned = norm.cells_pruned
        report.phase_ms = phase_times
        report.runtime_ms = runtime_ms

        if self.enable_metrics:
            self.metrics.update({
                'rooms_requested': target,
                'rooms_placed': len(self.rooms),
                'tree_edges': conn.tree_edges,
                'loop_edges': conn.loop_edges,
                'stranded_recoveries': conn.stranded_recoveries,
                'doors_created': doors,
                'connections_without_door': report.connections_without_door,
                'door_repairs': norm.door_repairs,
                'cells_sealed': norm.cells_sealed,
                'cells_pruned': norm.cells_pruned,
                'prune_passes': norm.prune_passes,
                'runtime_ms': runtime_ms,
                'phase_ms': phase_times,
            })
        run_log = log.bind(seed=self.seed, type=self.dungeon_type, size=self.size)
        if report.rooms_placed < target:
            run_log.info(event="room_shortfall", requested=target, placed=report.rooms_placed)
        run_log.info(event="dungeon_generated", rooms=len(self.rooms), edges=report.edges, doors=doors,
                     runtime_ms=runtime_ms)

    def _count_connections_without_door(self) -> int:
        missing = 0
        for room in self.rooms:
            targets = {d.connects_to for d in room.doors}
            missing += sum(1 for other in room.connections if other not in targets)
        return missing

    def room_by_id(self, room_id: int) -> Optional[Room]:
        for room in self.rooms:
            if room.id == room_id:
                return room
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'seed': self.seed,
            'dungeonType': self.dungeon_type,
            'size': self.size,
            'gridSize': self.grid_size,
            'cellSize': self.cell_size,
            'rooms': [r.to_dict() for r in self.rooms],
            'report': self.report.to_dict(),
        }
