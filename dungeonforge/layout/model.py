"""Layout data model.

Rooms, walls and doors live in flat lists on GenerationState and refer to each
other by index. A wall owns its door (``Wall.door``); every other link is an
index association resolved through the state.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, NamedTuple, Optional, Tuple

from .geometry import Box, Rect

if TYPE_CHECKING:
    from .config import LayoutConfig
    from .connectivity import ConnectivityGraph
    from .placement import PlacementRequest
    from .raster import OccupancyGrid


class SplitAxis(str, Enum):
    HORIZONTAL = "horizontal"  # cut across the height
    VERTICAL = "vertical"  # cut across the width

    @property
    def orthogonal(self) -> "SplitAxis":
        return SplitAxis.VERTICAL if self is SplitAxis.HORIZONTAL else SplitAxis.HORIZONTAL


class DoorAxis(str, Enum):
    ACROSS_X = "x"
    ACROSS_Z = "z"
    NONE = "none"


# Debug colour tags consumed by visualisation layers.
GREEN = "green"
CYAN = "cyan"
RED = "red"
YELLOW = "yellow"


class Region(NamedTuple):
    rect: Rect
    axis: SplitAxis
    color: str = CYAN


def classify_door_axis(box: Box, door_width: int, wall_width: int) -> DoorAxis:
    """Return the single axis a door can cross, first qualifying axis wins."""
    clearance = door_width + wall_width * 2
    if box.size_x > clearance:
        return DoorAxis.ACROSS_Z
    if box.size_z > clearance:
        return DoorAxis.ACROSS_X
    return DoorAxis.NONE


@dataclass
class Door:
    index: int
    box: Box
    wall: int
    enabled: bool = True
    color: str = YELLOW


@dataclass
class Wall:
    index: int
    box: Box
    door_axis: DoorAxis
    color: str
    rooms: List[int] = field(default_factory=list)
    door: Optional[Door] = None

    @property
    def is_boundary(self) -> bool:
        return not self.rooms

    @property
    def has_open_door(self) -> bool:
        return self.door is not None and self.door.enabled


@dataclass
class Room:
    index: int
    rect: Rect
    split_axis: SplitAxis
    color: str
    enabled: bool = True
    walls: List[int] = field(default_factory=list)

    @property
    def size(self) -> int:
        return 2 * (self.rect.w + self.rect.h)

    @property
    def center(self) -> Tuple[int, int]:
        return self.rect.center


@dataclass
class GenerationState:
    """All mutable data of one generation run."""

    seed: int
    config: LayoutConfig
    rng: Optional[random.Random] = None
    phase: str = "idle"
    rooms: List[Room] = field(default_factory=list)
    walls: List[Wall] = field(default_factory=list)
    doors: List[Door] = field(default_factory=list)
    graph: Optional[ConnectivityGraph] = None
    grid: Optional[OccupancyGrid] = None
    wall_placements: List[PlacementRequest] = field(default_factory=list)
    floor_placements: List[PlacementRequest] = field(default_factory=list)
    uncovered_cells: List[Tuple[int, int]] = field(default_factory=list)
    spawn: Optional[Tuple[int, int]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.rng is None:
            self.rng = random.Random(self.seed)

    # --- queries -----------------------------------------------------------
    def enabled_rooms(self) -> List[Room]:
        return [r for r in self.rooms if r.enabled]

    def enabled_doors(self) -> List[Door]:
        return [d for d in self.doors if d.enabled]

    def wall_enabled(self, wall: Wall) -> bool:
        """Boundary walls always stand; interior walls stand while a side is in use."""
        if wall.is_boundary:
            return True
        return any(self.rooms[r].enabled for r in wall.rooms)

    def enabled_walls(self) -> List[Wall]:
        return [w for w in self.walls if self.wall_enabled(w)]

    # --- room toggles ------------------------------------------------------
    def disable_room(self, index: int) -> None:
        """Disable a room and close every door in its walls."""
        room = self.rooms[index]
        room.enabled = False
        for wi in room.walls:
            wall = self.walls[wi]
            if wall.door_axis is not DoorAxis.NONE:
                if wall.door is not None:
                    wall.door.enabled = False
                wall.door_axis = DoorAxis.NONE
            wall.color = RED

    def enable_room(self, index: int) -> None:
        """Enable a room and reopen doors on walls whose rooms are all enabled."""
        cfg = self.config
        room = self.rooms[index]
        room.enabled = True
        for wi in room.walls:
            wall = self.walls[wi]
            if wall.is_boundary or not all(self.rooms[r].enabled for r in wall.rooms):
                continue
            wall.door_axis = classify_door_axis(wall.box, cfg.door_width, cfg.wall_width)
            wall.color = RED if wall.door_axis is DoorAxis.NONE else GREEN
            if wall.door_axis is not DoorAxis.NONE and wall.door is not None:
                wall.door.enabled = True


__all__ = [
    "SplitAxis",
    "DoorAxis",
    "Region",
    "Room",
    "Wall",
    "Door",
    "GenerationState",
    "classify_door_axis",
    "GREEN",
    "CYAN",
    "RED",
    "YELLOW",
]
