from dataclasses import dataclass
from typing import Iterable, List, Tuple

# Column-major occupancy grid: grid[x][y] is True when the cell is open
Grid = List[List[bool]]
Coord2D = Tuple[int, int]

ORTHOGONAL = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass
class PathCoordinate:
    """A single corridor cell along a route between two rooms."""
    x: int
    y: int
    is_door: bool = False

    def to_dict(self):
        return {"x": self.x, "y": self.y, "isDoor": self.is_door}


def new_grid(size: int) -> Grid:
    return [[False for _ in range(size)] for _ in range(size)]


def in_bounds(x: int, y: int, size: int) -> bool:
    return 0 <= x < size and 0 <= y < size


def mark_cells(grid: Grid, cells: Iterable[Coord2D], value: bool = True) -> None:
    """Set cells on the grid, silently skipping out-of-range coordinates."""
    size = len(grid)
    for x, y in cells:
        if in_bounds(x, y, size):
            grid[x][y] = value
