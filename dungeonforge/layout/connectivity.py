"""Room connectivity graph and the reachability oracle used by pruning.

Nodes are room indices, edges are ``Connection(target, via)`` where ``via``
is a door index. Every door contributes one edge in each direction.
"""
from __future__ import annotations

from collections import deque
from typing import Iterator, List, NamedTuple, Optional

from .model import DoorAxis, GenerationState


class Connection(NamedTuple):
    target: int
    via: int


class ConnectivityGraph:
    def __init__(self, room_count: int = 0):
        self._adjacency: List[Optional[List[Connection]]] = [None] * room_count
        self._order: List[int] = []

    def _grow(self, node: int) -> None:
        if node >= len(self._adjacency):
            self._adjacency.extend([None] * (node + 1 - len(self._adjacency)))

    def add_node(self, node: int) -> None:
        self._grow(node)
        if self._adjacency[node] is not None:
            return
        self._adjacency[node] = []
        self._order.append(node)

    def add_edge(self, node: int, connection: Connection) -> None:
        self.add_node(node)
        self._adjacency[node].append(connection)

    def __contains__(self, node: int) -> bool:
        return 0 <= node < len(self._adjacency) and self._adjacency[node] is not None

    def __len__(self) -> int:
        return len(self._order)

    def nodes(self) -> List[int]:
        """Nodes in insertion order."""
        return list(self._order)

    def neighbors(self, node: int) -> List[Connection]:
        if node not in self:
            return []
        return list(self._adjacency[node])

    def edges(self) -> Iterator[tuple]:
        for node in self._order:
            for conn in self._adjacency[node]:
                yield node, conn.via, conn.target


def build_graph(state: GenerationState) -> ConnectivityGraph:
    graph = ConnectivityGraph(len(state.rooms))
    for wall in state.walls:
        if wall.door_axis is DoorAxis.NONE or wall.door is None:
            continue
        first, second = wall.rooms
        graph.add_node(first)
        graph.add_node(second)
        graph.add_edge(first, Connection(second, wall.door.index))
        graph.add_edge(second, Connection(first, wall.door.index))
    state.graph = graph
    return graph


def reachable(state: GenerationState, start: int) -> bool:
    """BFS from start over enabled rooms and doors.

    True only when the visit covers every enabled room.
    """
    rooms, doors, graph = state.rooms, state.doors, state.graph
    if not rooms[start].enabled:
        return False
    queue = deque([start])
    visited = {start}
    while queue:
        current = queue.popleft()
        for conn in graph.neighbors(current):
            if not rooms[conn.target].enabled or not doors[conn.via].enabled:
                continue
            if conn.target not in visited:
                visited.add(conn.target)
                queue.append(conn.target)
    return len(visited) == sum(1 for r in rooms if r.enabled)


def first_enabled_node(state: GenerationState) -> Optional[int]:
    for node in state.graph.nodes():
        if state.rooms[node].enabled:
            return node
    return None


def is_connected(state: GenerationState) -> bool:
    """Connectivity check from the first enabled graph node."""
    start = first_enabled_node(state)
    if start is None:
        return False
    return reachable(state, start)


__all__ = [
    "Connection",
    "ConnectivityGraph",
    "build_graph",
    "reachable",
    "first_enabled_node",
    "is_connected",
]
