"""Axis-aligned rectangle / box primitives and intersection predicates.

Rect lives in the ground plane (x, y) where y maps to world z. Box is the
extruded 3D form used for walls and doors: (x, y, z) origin with y vertical.
"""
from __future__ import annotations

from typing import Iterator, List, NamedTuple, Tuple


class Rect(NamedTuple):
    x: int
    y: int
    w: int
    h: int

    @property
    def x_max(self) -> int:
        return self.x + self.w

    @property
    def y_max(self) -> int:
        return self.y + self.h

    @property
    def center(self) -> Tuple[int, int]:
        return (self.x + self.w // 2, self.y + self.h // 2)

    def cells(self) -> Iterator[Tuple[int, int]]:
        for ix in range(self.x, self.x_max):
            for iy in range(self.y, self.y_max):
                yield ix, iy


class Box(NamedTuple):
    x: int
    y: int
    z: int
    size_x: int
    size_y: int
    size_z: int

    @property
    def x_max(self) -> int:
        return self.x + self.size_x

    @property
    def z_max(self) -> int:
        return self.z + self.size_z

    @property
    def center(self) -> Tuple[float, float, float]:
        return (self.x + self.size_x / 2, self.y + self.size_y / 2, self.z + self.size_z / 2)

    def footprint(self) -> Rect:
        """Ground-plane projection of the box."""
        return Rect(self.x, self.z, self.size_x, self.size_z)


EMPTY_RECT = Rect(0, 0, 0, 0)


def intersects(a: Rect, b: Rect) -> bool:
    return a.x < b.x_max and a.x_max > b.x and a.y < b.y_max and a.y_max > b.y


def intersect(a: Rect, b: Rect) -> Rect:
    """Overlap of two rects, or EMPTY_RECT when they only touch or are apart."""
    x = max(a.x, b.x)
    y = max(a.y, b.y)
    w = min(a.x_max, b.x_max) - x
    h = min(a.y_max, b.y_max) - y
    if w <= 0 or h <= 0:
        return EMPTY_RECT
    return Rect(x, y, w, h)


def contains(outer: Rect, inner: Rect) -> bool:
    return (
        outer.x <= inner.x
        and outer.y <= inner.y
        and inner.x_max <= outer.x_max
        and inner.y_max <= outer.y_max
    )


def boxes_intersect(a: Box, b: Box) -> bool:
    return (
        a.x < b.x_max
        and a.x_max > b.x
        and a.y < b.y + b.size_y
        and a.y + a.size_y > b.y
        and a.z < b.z_max
        and a.z_max > b.z
    )


def extrude(rect: Rect, height: int) -> Box:
    return Box(rect.x, 0, rect.y, rect.w, height, rect.h)


def fill_rect(grid: List[list], area: Rect, value, origin: Tuple[int, int] = (0, 0)) -> None:
    """Write value into every in-bounds cell of area; grid is indexed [x][y]."""
    ox, oy = origin
    width = len(grid)
    height = len(grid[0]) if width else 0
    for ix, iy in area.cells():
        gx, gy = ix - ox, iy - oy
        if 0 <= gx < width and 0 <= gy < height:
            grid[gx][gy] = value


def fill_outline(grid: List[list], area: Rect, value, origin: Tuple[int, int] = (0, 0)) -> None:
    ox, oy = origin
    width = len(grid)
    height = len(grid[0]) if width else 0
    for ix, iy in area.cells():
        if ix in (area.x, area.x_max - 1) or iy in (area.y, area.y_max - 1):
            gx, gy = ix - ox, iy - oy
            if 0 <= gx < width and 0 <= gy < height:
                grid[gx][gy] = value


__all__ = [
    "Rect",
    "Box",
    "EMPTY_RECT",
    "intersects",
    "intersect",
    "contains",
    "boxes_intersect",
    "extrude",
    "fill_rect",
    "fill_outline",
]
