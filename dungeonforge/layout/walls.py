"""Wall synthesis from room-rectangle intersections."""
from __future__ import annotations

from typing import List

from ..logging_utils import get_logger
from .geometry import Box, Rect, extrude, intersect, intersects
from .model import GREEN, RED, DoorAxis, GenerationState, Wall, classify_door_axis

log = get_logger("dungeonforge.layout.walls")


def is_seam(box: Box, wall_width: int) -> bool:
    """True when the overlap is one or two wall widths thick on some axis."""
    seams = (wall_width, wall_width * 2)
    return box.size_x in seams or box.size_z in seams


def boundary_walls(bounds: Rect, wall_width: int, wall_height: int) -> List[Box]:
    """West, north, east and south edge walls spanning the whole dungeon."""
    x, z, w, d = bounds
    return [
        Box(x, 0, z, wall_width, wall_height, d),
        Box(x, 0, z + d - wall_width, w, wall_height, wall_width),
        Box(x + w - wall_width, 0, z, wall_width, wall_height, d),
        Box(x, 0, z, w, wall_height, wall_width),
    ]


def build_walls(state: GenerationState) -> List[Wall]:
    cfg = state.config
    metrics = state.metrics
    rooms = state.rooms
    walls: List[Wall] = []
    for i in range(len(rooms)):
        for j in range(i + 1, len(rooms)):
            first, second = rooms[i], rooms[j]
            if not intersects(first.rect, second.rect):
                continue
            metrics["walls_candidates"] = metrics.get("walls_candidates", 0) + 1
            box = extrude(intersect(first.rect, second.rect), cfg.wall_height)
            if not is_seam(box, cfg.wall_width):
                metrics["walls_discarded"] = metrics.get("walls_discarded", 0) + 1
                continue
            axis = classify_door_axis(box, cfg.door_width, cfg.wall_width)
            wall = Wall(
                index=len(walls),
                box=box,
                door_axis=axis,
                color=RED if axis is DoorAxis.NONE else GREEN,
                rooms=[first.index, second.index],
            )
            first.walls.append(wall.index)
            second.walls.append(wall.index)
            walls.append(wall)
    metrics["walls_interior"] = len(walls)
    for box in boundary_walls(cfg.bounds, cfg.wall_width, cfg.wall_height):
        walls.append(Wall(index=len(walls), box=box, door_axis=DoorAxis.NONE, color=RED))
    state.walls = walls
    log.debug(event="walls_built", interior=metrics["walls_interior"], total=len(walls))
    return walls


__all__ = ["is_seam", "boundary_walls", "build_walls"]
