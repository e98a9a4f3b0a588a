"""Plain-text renderings of a finished layout for terminals and debugging."""
from __future__ import annotations

import math
from typing import List

from .geometry import fill_outline, fill_rect, intersect

WALL_CHAR = "#"
DOOR_CHAR = "+"
FLOOR_CHAR = "."
SPAWN_CHAR = "@"
VOID_CHAR = " "
UNCOVERED_CHAR = "!"


def _blank(result) -> List[List[str]]:
    w, h = result.config.dungeon_size
    return [[VOID_CHAR for _ in range(h)] for _ in range(w)]


def _join(canvas: List[List[str]]) -> str:
    width = len(canvas)
    height = len(canvas[0]) if width else 0
    return "\n".join("".join(canvas[x][y] for x in range(width)) for y in range(height))


def render_layout(result) -> str:
    """Walls, open doors, flood-filled floor and the spawn point."""
    canvas = _blank(result)
    origin = result.config.start_point
    for pos in (p.position for p in result.floor_placements):
        x, y = math.floor(pos[0]) - origin[0], math.floor(pos[2]) - origin[1]
        canvas[x][y] = FLOOR_CHAR
    walls = {w.index: w for w in result.walls}
    for wall in result.walls:
        fill_rect(canvas, wall.box.footprint(), WALL_CHAR, origin)
    for door in result.doors:
        wall = walls.get(door.wall)
        if wall is None:
            continue
        fill_rect(canvas, intersect(door.box.footprint(), wall.box.footprint()), DOOR_CHAR, origin)
    for cx, cy in result.uncovered_cells:
        canvas[cx - origin[0]][cy - origin[1]] = UNCOVERED_CHAR
    if result.spawn:
        sx, sy = result.spawn
        canvas[sx - origin[0]][sy - origin[1]] = SPAWN_CHAR
    return _join(canvas)


def render_rooms(result) -> str:
    """Outline of each enabled room labelled with its index (mod 36)."""
    canvas = _blank(result)
    origin = result.config.start_point
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    for room in result.rooms:
        fill_outline(canvas, room.rect, WALL_CHAR, origin)
        cx, cy = room.center
        canvas[cx - origin[0]][cy - origin[1]] = digits[room.index % len(digits)]
    return _join(canvas)


__all__ = ["render_layout", "render_rooms"]
