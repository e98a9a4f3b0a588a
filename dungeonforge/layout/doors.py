"""Door placement on doorable walls.

One door per wall whose door axis is not NONE. The door is ``door_width``
long, starts at a random offset that keeps one wall width of clearance at
either end, and pokes ``door_offset`` beyond both faces of the wall.
"""
from __future__ import annotations

from typing import List

from .geometry import Box
from .model import DoorAxis, Door, GenerationState, Wall


def door_box(wall: Wall, start: int, cfg) -> Box:
    b = wall.box
    height = cfg.wall_height + cfg.door_offset
    depth = cfg.wall_width + cfg.door_offset * 2
    if wall.door_axis is DoorAxis.ACROSS_X:
        return Box(b.x - cfg.door_offset, 0, start, depth, height, cfg.door_width)
    return Box(start, 0, b.z - cfg.door_offset, cfg.door_width, height, depth)


def door_span(wall: Wall, cfg) -> range:
    """Valid door start coordinates along the wall's long axis."""
    b = wall.box
    if wall.door_axis is DoorAxis.ACROSS_X:
        lo, hi = b.z, b.z_max
    else:
        lo, hi = b.x, b.x_max
    return range(lo + cfg.wall_width, hi - cfg.wall_width - cfg.door_width)


def place_doors(state: GenerationState) -> List[Door]:
    cfg = state.config
    doors: List[Door] = []
    for wall in state.walls:
        if wall.door_axis is DoorAxis.NONE:
            continue
        span = door_span(wall, cfg)
        start = state.rng.randrange(span.start, span.stop)
        door = Door(index=len(doors), box=door_box(wall, start, cfg), wall=wall.index)
        wall.door = door
        doors.append(door)
    state.doors = doors
    state.metrics["doors_created"] = len(doors)
    return doors


__all__ = ["door_box", "door_span", "place_doors"]
