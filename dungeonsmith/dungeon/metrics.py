from dataclasses import asdict, dataclass, field
from typing import Dict, List


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        'rooms_requested': 0,
        'rooms_placed': 0,
        'tree_edges': 0,
        'loop_edges': 0,
        'stranded_recoveries': 0,
        'doors_created': 0,
        'connections_without_door': 0,
        'door_repairs': 0,
        'cells_sealed': 0,
        'cells_pruned': 0,
        'prune_passes': 0,
        'runtime_ms': 0.0,
    }


@dataclass
class GenerationReport:
    """Outcome quality of one generation run; shortfalls land here instead of raising."""
    seed: int = 0
    rooms_requested: int = 0
    rooms_placed: int = 0
    edges: int = 0
    loop_edges: int = 0
    isolated_rooms: List[int] = field(default_factory=list)
    doors: int = 0
    connections_without_door: int = 0
    door_repairs: int = 0
    cells_sealed: int = 0
    cells_pruned: int = 0
    phase_ms: Dict[str, float] = field(default_factory=dict)
    runtime_ms: float = 0.0

    @property
    def shortfall(self) -> int:
        return max(0, self.rooms_requested - self.rooms_placed)

    def to_dict(self):
        data = asdict(self)
        data['shortfall'] = self.shortfall
        return data
