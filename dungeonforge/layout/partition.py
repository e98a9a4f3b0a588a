"""Recursive rectangle partitioning.

A FIFO queue of regions is split one region per iteration. Children overlap
their sibling by exactly ``wall_width`` along the cut so the shared strip
later becomes a wall. Regions that cannot be split rotate to the back of the
queue; a long enough run of consecutive failures ends the loop, which is the
only way out in endless mode.
"""
from __future__ import annotations

from collections import deque
from typing import Iterator, List, Optional, Tuple

from ..logging_utils import get_logger
from .geometry import Rect
from .model import CYAN, GREEN, GenerationState, Region, Room, SplitAxis

log = get_logger("dungeonforge.layout.partition")


def choose_split_axis(region: Region, size_constrain: int, acceptable_ratio: float) -> Optional[SplitAxis]:
    """Return the axis to split along, or None when the region is final."""
    w, h = region.rect.w, region.rect.h
    limit = size_constrain * 2
    if w > limit and h > limit:
        return region.axis
    if w < limit and h > limit and w * acceptable_ratio < h:
        return SplitAxis.HORIZONTAL
    if h < limit and w > limit and h * acceptable_ratio < w:
        return SplitAxis.VERTICAL
    return None


def split_region(region: Region, axis: SplitAxis, size_constrain: int, wall_width: int, rng) -> Tuple[Region, Region]:
    """Cut region in two along axis; children carry the orthogonal axis."""
    r = region.rect
    child_axis = axis.orthogonal
    if axis is SplitAxis.VERTICAL:
        cut = rng.randrange(size_constrain, r.w - size_constrain) + wall_width
        first = Rect(r.x, r.y, cut, r.h)
        second = Rect(first.x_max - wall_width, r.y, r.w - cut + wall_width, r.h)
    else:
        cut = rng.randrange(size_constrain, r.h - size_constrain) + wall_width
        first = Rect(r.x, r.y, r.w, cut)
        second = Rect(r.x, first.y_max - wall_width, r.w, r.h - cut + wall_width)
    return Region(first, child_axis, CYAN), Region(second, child_axis, CYAN)


def iter_partition(state: GenerationState) -> Iterator[Tuple[Region, Region, Region]]:
    """Run the partitioner, yielding ``(parent, first, second)`` after each split.

    When exhausted, ``state.rooms`` holds the final rooms in queue order.
    """
    cfg = state.config
    metrics = state.metrics
    queue = deque([Region(cfg.bounds, SplitAxis.HORIZONTAL, GREEN)])
    fail_streak = 0
    iteration = 0
    while cfg.endless_divisions or iteration < cfg.divisions:
        iteration += 1
        region = queue.popleft()
        axis = choose_split_axis(region, cfg.size_constrain, cfg.acceptable_ratio)
        if axis is None:
            fail_streak += 1
            metrics["split_failures"] = metrics.get("split_failures", 0) + 1
            queue.append(region)
            if fail_streak >= len(queue) * cfg.fail_streak_factor:
                log.debug(event="partition_exhausted", iteration=iteration, regions=len(queue))
                break
            continue
        fail_streak = 0
        first, second = split_region(region, axis, cfg.size_constrain, cfg.wall_width, state.rng)
        queue.append(first)
        queue.append(second)
        metrics["splits"] = metrics.get("splits", 0) + 1
        yield region, first, second
    state.rooms = _rooms_from_regions(queue)
    metrics["regions_final"] = len(state.rooms)


def partition(state: GenerationState) -> List[Room]:
    for _ in iter_partition(state):
        pass
    return state.rooms


def _rooms_from_regions(regions) -> List[Room]:
    return [Room(i, reg.rect, reg.axis, reg.color) for i, reg in enumerate(regions)]


__all__ = ["choose_split_axis", "split_region", "iter_partition", "partition"]
