"""Placement requests and the collaborator contracts that consume them.

The generator never builds geometry itself. It hands ``PlacementRequest``
values to a sink which chooses concrete assets, then triggers a navigation
bake once the layout is final.
"""
from __future__ import annotations

from typing import List, NamedTuple, Optional, Sequence, Tuple

FLOOR = "floor"


class PlacementRequest(NamedTuple):
    kind: str  # "wall" or "floor"
    category: str  # pattern name for walls, "floor" for floor tiles
    position: Tuple[float, float, float]
    orientation: int  # degrees about the vertical axis

    def to_dict(self):
        return {
            "kind": self.kind,
            "category": self.category,
            "position": list(self.position),
            "orientation": self.orientation,
        }


class PlacementSink:
    """Base sink; subclasses override the hooks they care about."""

    def place_wall(self, category: str, position, orientation: int) -> None:
        pass

    def place_floor(self, position) -> None:
        pass

    def bake_navigation(self) -> None:
        pass


class RecordingSink(PlacementSink):
    def __init__(self):
        self.walls: List[Tuple[str, tuple, int]] = []
        self.floors: List[tuple] = []
        self.bakes = 0

    def place_wall(self, category, position, orientation):
        self.walls.append((category, tuple(position), orientation))

    def place_floor(self, position):
        self.floors.append(tuple(position))

    def bake_navigation(self):
        self.bakes += 1


def dispatch(wall_requests: Sequence[PlacementRequest], floor_requests: Sequence[PlacementRequest], sink: PlacementSink) -> None:
    """Send every request to sink, then trigger one navigation bake."""
    for req in wall_requests:
        sink.place_wall(req.category, req.position, req.orientation)
    for req in floor_requests:
        sink.place_floor(req.position)
    sink.bake_navigation()


def choose_spawn(rooms: Sequence, rng) -> Optional[Tuple[int, int]]:
    """Centre of one enabled room drawn from the run's generator."""
    if not rooms:
        return None
    return rng.choice(list(rooms)).center


__all__ = [
    "FLOOR",
    "PlacementRequest",
    "PlacementSink",
    "RecordingSink",
    "dispatch",
    "choose_spawn",
]
