from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class SizeConfig:
    min_rooms: int
    max_rooms: int
    grid_size: int
    cell_size: int


SIZE_TIERS: Dict[str, SizeConfig] = {
    "Small": SizeConfig(min_rooms=5, max_rooms=8, grid_size=24, cell_size=20),
    "Medium": SizeConfig(min_rooms=8, max_rooms=12, grid_size=32, cell_size=16),
    "Large": SizeConfig(min_rooms=12, max_rooms=20, grid_size=48, cell_size=12),
}
DEFAULT_SIZE = "Medium"


def get_size_config(size: str) -> SizeConfig:
    """Resolve a size tier name; unknown names fall back to Medium."""
    return SIZE_TIERS.get(size, SIZE_TIERS[DEFAULT_SIZE])


@dataclass
class GenerateOptions:
    dungeon_type: str = "Cave"
    size: str = DEFAULT_SIZE
    seed: Optional[int] = None


# Content categories in roll order
EMPTY = "Empty"
TRAP = "Trap"
MINOR_HAZARD = "Minor Hazard"
SOLO_MONSTER = "Solo Monster"
NPC = "NPC"
MONSTER_MOB = "Monster Mob"
MAJOR_HAZARD = "Major Hazard"
TREASURE = "Treasure"
BOSS_MONSTER = "Boss Monster"

CONTENT_TYPES: Tuple[str, ...] = (
    EMPTY,
    TRAP,
    MINOR_HAZARD,
    SOLO_MONSTER,
    NPC,
    MONSTER_MOB,
    MAJOR_HAZARD,
    TREASURE,
    BOSS_MONSTER,
)

BASE_CONTENT_WEIGHTS: Dict[str, int] = {
    EMPTY: 15,
    TRAP: 10,
    MINOR_HAZARD: 15,
    SOLO_MONSTER: 10,
    NPC: 10,
    MONSTER_MOB: 15,
    MAJOR_HAZARD: 5,
    TREASURE: 15,
}
# Bosses get rarer as the dungeon grows
BOSS_WEIGHT_BY_SIZE = {"Small": 5, "Medium": 3, "Large": 2}


def content_weights(size: str) -> Dict[str, int]:
    weights = dict(BASE_CONTENT_WEIGHTS)
    weights[BOSS_MONSTER] = BOSS_WEIGHT_BY_SIZE.get(size, 2)
    return weights


# (name, width, height, probability); probabilities sum to 1
ROOM_SHAPES: Tuple[Tuple[str, int, int, float], ...] = (
    ("small-square", 2, 2, 0.25),
    ("medium-square", 3, 3, 0.2),
    ("large-square", 4, 4, 0.1),
    ("small-rectangle-h", 3, 2, 0.15),
    ("medium-rectangle-h", 4, 3, 0.1),
    ("small-rectangle-v", 2, 3, 0.15),
    ("medium-rectangle-v", 3, 4, 0.05),
)

MIN_ROOM_COUNT = 3
EDGE_PADDING = 3
ROOM_BUFFER = 2
PLACEMENT_RETRIES = 50
BOSS_DOWNGRADE_CHANCE = 0.7
BOSS_DOWNGRADE_ROOM_THRESHOLD = 8

LOOP_EDGE_RATIO = 0.2
LOOP_ROUTE_LIMIT = 15

PRUNE_MAX_PASSES = 10


__all__ = [
    "SizeConfig",
    "SIZE_TIERS",
    "DEFAULT_SIZE",
    "get_size_config",
    "GenerateOptions",
    "CONTENT_TYPES",
    "content_weights",
    "ROOM_SHAPES",
]
