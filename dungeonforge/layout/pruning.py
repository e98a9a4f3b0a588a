"""Greedy pruning passes over the connectivity graph.

Room pruning removes the smallest rooms first and stops at the first removal
that would split the dungeon. Door pruning then visits every door once and
keeps it closed whenever the dungeon stays connected without it.
"""
from __future__ import annotations

from typing import List

from ..logging_utils import get_logger
from .connectivity import is_connected
from .model import GenerationState

log = get_logger("dungeonforge.layout.pruning")


def room_prune_order(state: GenerationState) -> List[int]:
    """Room indices by ascending size; ties keep arena order."""
    return [r.index for r in sorted(state.rooms, key=lambda r: r.size)]


def room_target(total: int, subtracted_percent: int) -> int:
    return total - (total * subtracted_percent) // 100


def prune_rooms(state: GenerationState) -> int:
    """Disable rooms smallest first until the target count. Returns rooms removed."""
    order = room_prune_order(state)
    target = room_target(len(state.rooms), state.config.subtracted_percent)
    removed = 0
    while sum(1 for r in state.rooms if r.enabled) > target:
        index = next(i for i in order if state.rooms[i].enabled)
        state.disable_room(index)
        if is_connected(state):
            removed += 1
            continue
        state.enable_room(index)
        state.metrics["room_prune_refused"] = state.metrics.get("room_prune_refused", 0) + 1
        log.debug(event="room_prune_refused", room=index, enabled=sum(1 for r in state.rooms if r.enabled))
        break
    state.metrics["rooms_pruned"] = removed
    return removed


def prune_doors(state: GenerationState) -> int:
    """Close every door that is not needed for connectivity. Returns doors closed."""
    closed = 0
    for door in list(state.doors):
        was_enabled = door.enabled
        door.enabled = False
        if is_connected(state):
            if was_enabled:
                closed += 1
            continue
        door.enabled = was_enabled
    state.metrics["doors_pruned"] = closed
    return closed


__all__ = ["room_prune_order", "room_target", "prune_rooms", "prune_doors"]
