from collections import deque

from dungeonforge.layout.config import LayoutConfig
from dungeonforge.layout.connectivity import build_graph
from dungeonforge.layout.doors import place_doors
from dungeonforge.layout.metrics import init_metrics
from dungeonforge.layout.model import CYAN, GenerationState, Room, SplitAxis
from dungeonforge.layout.walls import build_walls


def make_state(rects, size, seed=1, **overrides):
    """State with hand-placed rooms, ready for wall synthesis."""
    overrides.setdefault("size_constrain", 4)
    cfg = LayoutConfig(dungeon_size=size, **overrides)
    state = GenerationState(seed=seed, config=cfg, metrics=init_metrics())
    state.rooms = [Room(i, rect, SplitAxis.HORIZONTAL, CYAN) for i, rect in enumerate(rects)]
    return state


def make_linked_state(rects, size, **overrides):
    """Hand-placed rooms with walls, doors and graph built."""
    state = make_state(rects, size, **overrides)
    build_walls(state)
    place_doors(state)
    build_graph(state)
    return state


def result_is_connected(result):
    """BFS over the enabled edges of a LayoutResult."""
    rooms = {r.index for r in result.rooms}
    if not rooms:
        return False
    adjacency = {}
    for src, _via, dst in result.edges:
        adjacency.setdefault(src, []).append(dst)
    start = result.rooms[0].index
    seen = {start}
    q = deque([start])
    while q:
        cur = q.popleft()
        for nxt in adjacency.get(cur, []):
            if nxt not in seen:
                seen.add(nxt)
                q.append(nxt)
    return seen == rooms
