"""Generation orchestration.

``iter_generation`` is the single implementation of the phase sequence::

    idle -> partitioning -> wall_synthesis -> door_synthesis -> graph_build
         -> room_pruning -> door_pruning -> rasterizing -> floor_filling -> done

It yields a ``Checkpoint`` after every successful split and after every
phase, so callers can pace a progressive visualisation. ``generate`` simply
drains it, which keeps step-wise and atomic runs identical for a seed.
"""
from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, NamedTuple, Optional, Tuple

from ..logging_utils import get_logger
from .config import LayoutConfig
from .connectivity import Connection, build_graph
from .doors import place_doors
from .geometry import Box, Rect
from .metrics import init_metrics
from .model import GenerationState
from .partition import iter_partition
from .patterns import match_patterns, uncovered_cells
from .placement import PlacementRequest, PlacementSink, choose_spawn, dispatch
from .pruning import prune_doors, prune_rooms
from .raster import build_occupancy, flood_floor
from .walls import build_walls

log = get_logger("dungeonforge.layout.pipeline")

PHASES = (
    "idle",
    "partitioning",
    "wall_synthesis",
    "door_synthesis",
    "graph_build",
    "room_pruning",
    "door_pruning",
    "rasterizing",
    "floor_filling",
    "done",
)


class GenerationAborted(RuntimeError):
    """A step-wise run was read before it reached the done phase."""


class Checkpoint(NamedTuple):
    phase: str
    step: int
    state: GenerationState


def new_seed() -> int:
    return random.randint(0, 2**31 - 2)


def _rasterize(state: GenerationState) -> None:
    grid = build_occupancy(state)
    state.wall_placements = match_patterns(grid)
    state.uncovered_cells = uncovered_cells(grid)
    state.metrics["uncovered_cells"] = len(state.uncovered_cells)


def _fill_floor(state: GenerationState) -> None:
    flood_floor(state)
    state.spawn = choose_spawn(state.enabled_rooms(), state.rng)


_PHASE_FUNCS = (
    ("wall_synthesis", build_walls),
    ("door_synthesis", place_doors),
    ("graph_build", build_graph),
    ("room_pruning", prune_rooms),
    ("door_pruning", prune_doors),
    ("rasterizing", _rasterize),
    ("floor_filling", _fill_floor),
)


def iter_generation(seed: int, config: Optional[LayoutConfig] = None) -> Iterator[Checkpoint]:
    """Run generation step by step. Raises ConfigError before the first step."""
    cfg = (config if config is not None else LayoutConfig()).validate()
    state = GenerationState(seed=seed, config=cfg, metrics=init_metrics())
    phase_ms: Dict[str, int] = state.metrics["phase_ms"]
    started = time.perf_counter()

    state.phase = "partitioning"
    ps = time.perf_counter()
    for step, _ in enumerate(iter_partition(state), 1):
        yield Checkpoint("partitioning", step, state)
    phase_ms["partitioning"] = int((time.perf_counter() - ps) * 1000)
    yield Checkpoint("partitioning", 0, state)

    for name, fn in _PHASE_FUNCS:
        state.phase = name
        ps = time.perf_counter()
        fn(state)
        phase_ms[name] = int((time.perf_counter() - ps) * 1000)
        log.debug(event="phase_done", phase=name, ms=phase_ms[name])
        yield Checkpoint(name, 0, state)

    state.phase = "done"
    state.metrics["runtime_ms"] = int((time.perf_counter() - started) * 1000)
    if state.uncovered_cells:
        log.warn(event="uncovered_wall_cells", seed=seed, count=len(state.uncovered_cells))
    yield Checkpoint("done", 0, state)


def run_to_completion(seed: int, config: Optional[LayoutConfig] = None) -> GenerationState:
    state = None
    for checkpoint in iter_generation(seed, config):
        state = checkpoint.state
    return state


def generate(seed: Optional[int] = None, config: Optional[LayoutConfig] = None, sink: Optional[PlacementSink] = None) -> "LayoutResult":
    """Generate a layout atomically. A fresh seed is drawn when seed is None."""
    if seed is None:
        seed = new_seed()
    state = run_to_completion(seed, config)
    result = LayoutResult.from_state(state)
    if sink is not None:
        dispatch(result.wall_placements, result.floor_placements, sink)
    log.info(
        event="layout_generated",
        seed=seed,
        rooms=len(result.rooms),
        walls=len(result.walls),
        doors=len(result.doors),
        uncovered=len(result.uncovered_cells),
        ms=state.metrics["runtime_ms"],
    )
    return result


class RoomInfo(NamedTuple):
    index: int
    rect: Rect
    size: int
    center: Tuple[int, int]
    color: str


class WallInfo(NamedTuple):
    index: int
    box: Box
    door_axis: str
    has_door: bool
    rooms: Tuple[int, ...]
    color: str


class DoorInfo(NamedTuple):
    index: int
    box: Box
    wall: int


@dataclass(frozen=True)
class LayoutResult:
    """Read-only view of a finished generation run."""

    seed: int
    config: LayoutConfig
    rooms: Tuple[RoomInfo, ...]
    walls: Tuple[WallInfo, ...]
    doors: Tuple[DoorInfo, ...]
    graph: Tuple[Tuple[int, Tuple[Connection, ...]], ...]
    edges: Tuple[Tuple[int, int, int], ...]
    wall_placements: Tuple[PlacementRequest, ...]
    floor_placements: Tuple[PlacementRequest, ...]
    uncovered_cells: Tuple[Tuple[int, int], ...]
    spawn: Optional[Tuple[int, int]]
    metrics: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_state(cls, state: GenerationState) -> "LayoutResult":
        if state is None or state.phase != "done":
            raise GenerationAborted("generation did not reach the done phase")
        rooms = state.rooms
        doors = state.doors
        edges = tuple(
            (src, via, dst)
            for src, via, dst in state.graph.edges()
            if rooms[src].enabled and rooms[dst].enabled and doors[via].enabled
        )
        return cls(
            seed=state.seed,
            config=state.config,
            rooms=tuple(RoomInfo(r.index, r.rect, r.size, r.center, r.color) for r in state.enabled_rooms()),
            walls=tuple(
                WallInfo(w.index, w.box, w.door_axis.value, w.has_open_door, tuple(w.rooms), w.color)
                for w in state.enabled_walls()
            ),
            doors=tuple(DoorInfo(d.index, d.box, d.wall) for d in state.enabled_doors()),
            graph=tuple((n, tuple(state.graph.neighbors(n))) for n in state.graph.nodes()),
            edges=edges,
            wall_placements=tuple(state.wall_placements),
            floor_placements=tuple(state.floor_placements),
            uncovered_cells=tuple(state.uncovered_cells),
            spawn=state.spawn,
            metrics=dict(state.metrics),
        )

    def to_dict(self, include_floor: bool = True) -> Dict[str, Any]:
        data = {
            "seed": self.seed,
            "config": self.config.to_dict(),
            "rooms": [
                {"index": r.index, "rect": list(r.rect), "size": r.size, "center": list(r.center), "color": r.color}
                for r in self.rooms
            ],
            "walls": [
                {
                    "index": w.index,
                    "box": list(w.box),
                    "door_axis": w.door_axis,
                    "has_door": w.has_door,
                    "rooms": list(w.rooms),
                    "color": w.color,
                }
                for w in self.walls
            ],
            "doors": [{"index": d.index, "box": list(d.box), "wall": d.wall} for d in self.doors],
            "graph": {str(n): [[c.target, c.via] for c in conns] for n, conns in self.graph},
            "edges": [list(e) for e in self.edges],
            "wall_placements": [p.to_dict() for p in self.wall_placements],
            "uncovered_cells": [list(c) for c in self.uncovered_cells],
            "spawn": list(self.spawn) if self.spawn else None,
            "metrics": self.metrics,
        }
        if include_floor:
            data["floor_placements"] = [list(p.position) for p in self.floor_placements]
        return data


__all__ = [
    "PHASES",
    "Checkpoint",
    "GenerationAborted",
    "LayoutResult",
    "RoomInfo",
    "WallInfo",
    "DoorInfo",
    "new_seed",
    "iter_generation",
    "run_to_completion",
    "generate",
]
