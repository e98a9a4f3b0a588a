"""Wall silhouette pattern library and greedy matcher.

Mask symbols:
    X  wall cell claimed by the pattern (must not be claimed yet)
    #  wall cell required as context (claimed or not)
    .  no wall (out-of-bounds counts as no wall)
    ?  anything

Patterns are tried in library order; each pattern (with its rotations) scans
the grid row by row, left to right. Claimed cells switch to CONSUMED so a later
and more generic pattern cannot place a second piece on them.
"""
from __future__ import annotations

from typing import List, NamedTuple, Tuple

from .placement import PlacementRequest
from .raster import CONSUMED, WALL, OccupancyGrid

WALL_KIND = "wall"


class Pattern(NamedTuple):
    name: str
    mask: Tuple[str, ...]
    spawn: Tuple[int, int]  # (row, col) inside the mask
    orientation: int
    rotations: int = 1


class Variant(NamedTuple):
    name: str
    mask: Tuple[str, ...]
    spawn: Tuple[int, int]
    orientation: int


PILLAR = Pattern("pillar", ("?.?", ".X.", "?.?"), (1, 1), 0)
CORNER = Pattern("corner", ("?.?", ".X#", "?#?"), (1, 1), 0, rotations=4)
T_JUNCTION = Pattern("t_junction", ("?.?", "#X#", "?#?"), (1, 1), 0, rotations=4)
CROSS = Pattern("cross", ("?#?", "#X#", "?#?"), (1, 1), 0)
LONG_WALL = Pattern("long_wall", ("...", "XXX", "..."), (1, 1), 0, rotations=2)
SHORT_WALL = Pattern("short_wall", (".", "X", "."), (1, 0), 0, rotations=2)

LIBRARY: Tuple[Pattern, ...] = (PILLAR, CORNER, T_JUNCTION, CROSS, LONG_WALL, SHORT_WALL)


def rotate(mask: Tuple[str, ...], spawn: Tuple[int, int]):
    """Rotate a mask and its spawn cell 90 degrees clockwise."""
    rows = len(mask)
    cols = len(mask[0])
    rotated = tuple("".join(mask[rows - 1 - c][r] for c in range(rows)) for r in range(cols))
    row, col = spawn
    return rotated, (col, rows - 1 - row)


def variants(pattern: Pattern) -> List[Variant]:
    out = []
    mask, spawn = pattern.mask, pattern.spawn
    for k in range(pattern.rotations):
        out.append(Variant(pattern.name, mask, spawn, (pattern.orientation + 90 * k) % 360))
        mask, spawn = rotate(mask, spawn)
    return out


def matches(grid: OccupancyGrid, variant: Variant, x: int, y: int) -> bool:
    """Test variant with its top-left mask cell at local (x, y)."""
    for r, line in enumerate(variant.mask):
        for c, sym in enumerate(line):
            if sym == "?":
                continue
            cx, cy = x + c, y + r
            if sym == "X":
                if grid.get(cx, cy) != WALL:
                    return False
            elif sym == "#":
                if not grid.is_wall(cx, cy):
                    return False
            elif grid.is_wall(cx, cy):
                return False
    return True


def claim(grid: OccupancyGrid, variant: Variant, x: int, y: int) -> None:
    for r, line in enumerate(variant.mask):
        for c, sym in enumerate(line):
            if sym == "X":
                grid.cells[x + c][y + r] = CONSUMED


def match_patterns(grid: OccupancyGrid, library=LIBRARY) -> List[PlacementRequest]:
    requests: List[PlacementRequest] = []
    for pattern in library:
        for variant in variants(pattern):
            rows = len(variant.mask)
            cols = len(variant.mask[0])
            # Masks may hang one cell outside the grid so edge walls still match.
            for y in range(-rows + 1, grid.height):
                for x in range(-cols + 1, grid.width):
                    if not matches(grid, variant, x, y):
                        continue
                    claim(grid, variant, x, y)
                    row, col = variant.spawn
                    requests.append(
                        PlacementRequest(WALL_KIND, variant.name, grid.cell_center(x + col, y + row), variant.orientation)
                    )
    return requests


def uncovered_cells(grid: OccupancyGrid) -> List[Tuple[int, int]]:
    """World coordinates of wall cells no pattern claimed."""
    return [grid.to_world(x, y) for x, y in grid.iter_cells(WALL)]


__all__ = [
    "Pattern",
    "Variant",
    "LIBRARY",
    "PILLAR",
    "CORNER",
    "T_JUNCTION",
    "CROSS",
    "LONG_WALL",
    "SHORT_WALL",
    "rotate",
    "variants",
    "matches",
    "match_patterns",
    "uncovered_cells",
]
