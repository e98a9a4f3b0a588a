"""Occupancy grid rasterisation and floor flood fill."""
from __future__ import annotations

from collections import deque
from typing import Iterator, List, Optional, Tuple

from .geometry import Rect, intersect
from .model import GenerationState
from .placement import FLOOR, PlacementRequest

# Cell markers
EMPTY = " "
WALL = "W"
CONSUMED = "w"  # wall cell already claimed by a placed pattern
FLOOR_CELL = "F"

NEIGHBORS_8 = ((-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1))


class OccupancyGrid:
    """Dense ``cells[x][y]`` array covering the dungeon footprint."""

    def __init__(self, bounds: Rect):
        self.origin = (bounds.x, bounds.y)
        self.width = bounds.w
        self.height = bounds.h
        self.cells: List[List[str]] = [[EMPTY for _ in range(bounds.h)] for _ in range(bounds.w)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Optional[str]:
        if not self.in_bounds(x, y):
            return None
        return self.cells[x][y]

    def is_wall(self, x: int, y: int) -> bool:
        """Wall silhouette test; consumed cells still count as wall."""
        return self.get(x, y) in (WALL, CONSUMED)

    def to_world(self, x: int, y: int) -> Tuple[int, int]:
        return (x + self.origin[0], y + self.origin[1])

    def to_local(self, wx: int, wy: int) -> Tuple[int, int]:
        return (wx - self.origin[0], wy - self.origin[1])

    def cell_center(self, x: int, y: int) -> Tuple[float, float, float]:
        wx, wy = self.to_world(x, y)
        return (wx + 0.5, 0.0, wy + 0.5)

    def iter_cells(self, value: str) -> Iterator[Tuple[int, int]]:
        """Local coordinates holding value, row by row."""
        for y in range(self.height):
            for x in range(self.width):
                if self.cells[x][y] == value:
                    yield x, y

    def rows(self) -> List[str]:
        return ["".join(self.cells[x][y] for x in range(self.width)) for y in range(self.height)]


def build_occupancy(state: GenerationState) -> OccupancyGrid:
    """Mark every cell covered by an enabled wall, leaving open door gaps empty."""
    cfg = state.config
    bounds = cfg.bounds
    grid = OccupancyGrid(bounds)
    for wall in state.enabled_walls():
        footprint = intersect(wall.box.footprint(), bounds)
        gap = wall.door.box.footprint() if wall.has_open_door else None
        for wx, wy in footprint.cells():
            if gap is not None and gap.x <= wx < gap.x_max and gap.y <= wy < gap.y_max:
                continue
            x, y = grid.to_local(wx, wy)
            grid.cells[x][y] = WALL
    state.grid = grid
    state.metrics["wall_tiles"] = sum(1 for _ in grid.iter_cells(WALL))
    return grid


def flood_floor(state: GenerationState) -> List[PlacementRequest]:
    """8-way fill of empty cells from the first enabled room's centre."""
    grid: OccupancyGrid = state.grid
    requests: List[PlacementRequest] = []
    rooms = state.enabled_rooms()
    if rooms:
        sx, sy = grid.to_local(*rooms[0].center)
        if grid.get(sx, sy) == EMPTY:
            grid.cells[sx][sy] = FLOOR_CELL
            queue = deque([(sx, sy)])
            while queue:
                x, y = queue.popleft()
                requests.append(PlacementRequest(FLOOR, FLOOR, grid.cell_center(x, y), 0))
                for dx, dy in NEIGHBORS_8:
                    nx, ny = x + dx, y + dy
                    if grid.get(nx, ny) == EMPTY:
                        grid.cells[nx][ny] = FLOOR_CELL
                        queue.append((nx, ny))
    state.floor_placements = requests
    state.metrics["floor_tiles"] = len(requests)
    return requests


__all__ = [
    "EMPTY",
    "WALL",
    "CONSUMED",
    "FLOOR_CELL",
    "OccupancyGrid",
    "build_occupancy",
    "flood_floor",
]
